# solboard/services/promotions.py
"""
Promotion slider data: each promotion entry plus its on-chain figures,
already formatted for display.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from solboard.services.feeds import load_promotions
from solboard.services.marketcap import get_many
from solboard.services.pumpfun import SENTINEL

NOT_AVAILABLE = {"marketCap": "N/A", "holderCount": 0, "marketCapChange": ""}


def _format_usd(value) -> str:
    if isinstance(value, str) and value.startswith("$"):
        return value
    # en-US grouping, at most 3 fraction digits, no trailing zeros
    text = f"{float(value):,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def on_chain_summary(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Display figures for one market cap payload (None when the lookup failed)."""
    if not data:
        return dict(NOT_AVAILABLE)

    value = data.get("marketCap")
    if value == SENTINEL:
        market_cap = "Pump.fun Token"
    elif value and isinstance(value, (int, float, str)):
        try:
            market_cap = _format_usd(value)
        except (ValueError, OverflowError):
            market_cap = "N/A"
    else:
        market_cap = "N/A"

    change = ""
    h24 = data.get("priceChangeH24")
    if isinstance(h24, (int, float)):
        change = f"{'+' if h24 >= 0 else ''}{h24:.2f}%"

    holders = data.get("holders")
    return {
        "marketCap": market_cap,
        "holderCount": holders if isinstance(holders, int) else 0,
        "marketCapChange": change,
    }


def get_promotions(promotions: List[Dict[str, Any]] | None = None) -> List[Dict[str, Any]]:
    promotions = load_promotions() if promotions is None else promotions

    solana_cas = [
        p.get("contractAddress")
        for p in promotions
        if str(p.get("chain", "")).lower() == "solana" and p.get("contractAddress")
    ]
    market = get_many(solana_cas)

    out = []
    for p in promotions:
        if str(p.get("chain", "")).lower() != "solana" or not p.get("contractAddress"):
            summary = dict(NOT_AVAILABLE)
        else:
            summary = on_chain_summary(market.get(str(p["contractAddress"]).strip()))
        out.append({**p, "onChain": summary})
    return out
