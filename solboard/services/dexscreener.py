# solboard/services/dexscreener.py
"""
DexScreener market data (primary provider)
------------------------------------------
Looks up every pair trading a token, keeps the Solana ones, and picks the
deepest pool as the token's market cap source.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import requests

from solboard.config import settings
from solboard.services.errors import ProviderError

PROVIDER = "Dexscreener"
SOURCE = "dexscreener"
CHAIN_ID = "solana"


def _is_number(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _num_or_none(x) -> Optional[float]:
    return x if _is_number(x) else None


def _dict(x) -> Dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _is_finite(x) -> bool:
    try:
        return math.isfinite(x)
    except OverflowError:
        # ints past float range, JSON allows them
        return False


def fetch_token_pairs(ca: str) -> List[Dict[str, Any]]:
    """Raw pairs for a token address, any chain."""
    url = f"{settings.DEXSCREENER_API_BASE}/latest/dex/tokens/{requests.utils.quote(ca, safe='')}"
    try:
        r = requests.get(url, timeout=settings.DEXSCREENER_TIMEOUT_SECS)
    except requests.exceptions.RequestException as e:
        raise ProviderError(PROVIDER, str(e) or "Dexscreener fetch failed")

    if not (200 <= r.status_code < 300):
        raise ProviderError(PROVIDER, f"Dexscreener HTTP {r.status_code}")

    try:
        data = r.json()
    except ValueError as e:
        raise ProviderError(PROVIDER, f"Malformed response: {e}")

    pairs = data.get("pairs") if isinstance(data, dict) else None
    return pairs if isinstance(pairs, list) else []


def normalize_pair(p: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a DexScreener pair into the fields the site displays."""
    market_cap = p.get("marketCap")
    if not _is_number(market_cap):
        market_cap = p.get("fdv") if _is_number(p.get("fdv")) else math.nan

    liquidity = _dict(p.get("liquidity")).get("usd")
    h24 = _dict(_dict(p.get("txns")).get("h24"))
    buys, sells = h24.get("buys"), h24.get("sells")
    change = _dict(p.get("priceChange"))

    return {
        "marketCap": market_cap,
        "liquidityUsd": liquidity if _is_number(liquidity) else 0,
        "holders": buys + sells if _is_number(buys) and _is_number(sells) else 0,
        "url": p.get("url") if isinstance(p.get("url"), str) else None,
        "priceChangeM5": _num_or_none(change.get("m5")),
        "priceChangeH1": _num_or_none(change.get("h1")),
        "priceChangeH6": _num_or_none(change.get("h6")),
        "priceChangeH24": _num_or_none(change.get("h24")),
    }


def select_best_pair(pairs: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Highest-liquidity Solana pair with a finite market cap, or None."""
    candidates = [
        normalize_pair(p)
        for p in pairs
        if isinstance(p, dict) and p.get("chainId") == CHAIN_ID
    ]
    candidates = [c for c in candidates if _is_finite(c["marketCap"])]
    if not candidates:
        return None
    # max() keeps the first of equal-liquidity pairs
    return max(candidates, key=lambda c: c["liquidityUsd"] or 0)


def get_market_cap(ca: str) -> Dict[str, Any]:
    """
    Market cap for a Solana token from its deepest pool.
    Raises ProviderError when DexScreener is unreachable or lists nothing usable.
    """
    pairs = fetch_token_pairs(ca)
    try:
        best = select_best_pair(pairs)
    except (TypeError, AttributeError, ValueError) as e:
        raise ProviderError(PROVIDER, f"Malformed response: {e}")
    if best is None:
        raise ProviderError(PROVIDER, "No Solana pairs found")
    best.pop("liquidityUsd", None)
    best["source"] = SOURCE
    return best
