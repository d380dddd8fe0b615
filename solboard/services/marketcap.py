# solboard/services/marketcap.py
"""
Market cap lookup (read-through cache + provider fallback)
----------------------------------------------------------
1. DexScreener: deepest Solana pool, market cap or FDV.
2. pump.fun: placeholder for pump-suffixed mints, otherwise best-effort API.

Whatever succeeds first is cached per contract address for MARKETCAP_TTL_SECS.
Concurrent misses for the same address each fetch; the last write wins.
"""

from __future__ import annotations

import re
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from solboard.config import settings
from solboard.services import dexscreener, pumpfun
from solboard.services.cache import get_cache, set_cache
from solboard.services.errors import InvalidAddressError, MarketCapNotFound, ProviderError

# base58 alphabet, 32-44 chars (Solana mint / account address)
SOLANA_CA_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

PROVIDERS = (dexscreener, pumpfun)


@dataclass
class MarketCapRecord:
    identifier: str
    value: Union[float, str]
    source: str
    url: Optional[str] = None
    holders: Optional[int] = None
    price_change_m5: Optional[float] = None
    price_change_h1: Optional[float] = None
    price_change_h6: Optional[float] = None
    price_change_h24: Optional[float] = None
    fetched_at: float = 0.0

    @classmethod
    def from_provider(cls, ca: str, data: Dict[str, Any], fetched_at: float) -> "MarketCapRecord":
        return cls(
            identifier=ca,
            value=data["marketCap"],
            source=data["source"],
            url=data.get("url"),
            holders=data.get("holders"),
            price_change_m5=data.get("priceChangeM5"),
            price_change_h1=data.get("priceChangeH1"),
            price_change_h6=data.get("priceChangeH6"),
            price_change_h24=data.get("priceChangeH24"),
            fetched_at=fetched_at,
        )

    def to_payload(self, cached: bool) -> Dict[str, Any]:
        """API shape; absent optional fields are left out entirely."""
        payload = {
            "marketCap": self.value,
            "url": self.url,
            "holders": self.holders,
            "source": self.source,
            "priceChangeM5": self.price_change_m5,
            "priceChangeH1": self.price_change_h1,
            "priceChangeH6": self.price_change_h6,
            "priceChangeH24": self.price_change_h24,
        }
        payload = {k: v for k, v in payload.items() if v is not None}
        payload["cached"] = cached
        return payload


def normalize_ca(raw) -> str:
    return str(raw or "").strip()


def validate_ca(ca: str) -> str:
    """Return the address if it looks like a Solana mint, else raise InvalidAddressError."""
    if not ca:
        raise InvalidAddressError("Missing ca")
    if not SOLANA_CA_RE.fullmatch(ca):
        raise InvalidAddressError("Only Solana CA supported")
    return ca


def fetch_market_cap(ca: str) -> MarketCapRecord:
    """
    Walk the provider chain; first success wins.
    Raises MarketCapNotFound with every provider's reason if all of them fail.
    """
    failures: Dict[str, str] = {}
    for provider in PROVIDERS:
        try:
            data = provider.get_market_cap(ca)
        except ProviderError as e:
            print(f"[marketcap] {e.provider} failed for {ca}: {e.reason}")
            failures[e.provider] = e.reason
            continue
        if failures:
            print(f"[marketcap] {ca} resolved via {data['source']} after {', '.join(failures)} failed")
        return MarketCapRecord.from_provider(ca, data, fetched_at=time.time())

    raise MarketCapNotFound(ca, failures)


def lookup(ca: str) -> Tuple[MarketCapRecord, bool]:
    """
    Validated, cache-first lookup.
    Returns (record, served_from_cache).
    """
    ca = validate_ca(normalize_ca(ca))

    cached = get_cache(ca)
    if cached is not None:
        return cached, True

    record = fetch_market_cap(ca)
    set_cache(ca, record)
    return record, False


def get_market_cap(ca: str) -> Dict[str, Any]:
    """JSON payload for /api/marketcap."""
    record, cached = lookup(ca)
    return record.to_payload(cached=cached)


def _try_market_cap(ca: str) -> Optional[Dict[str, Any]]:
    try:
        return get_market_cap(ca)
    except (InvalidAddressError, MarketCapNotFound) as e:
        print(f"[marketcap] skipping {ca}: {e}")
        return None
    except Exception as e:
        print(f"[marketcap] lookup error for {ca}: {e}")
        return None


def get_many(cas: Iterable[str], max_workers: Optional[int] = None) -> Dict[str, Optional[Dict[str, Any]]]:
    """
    Payloads for several addresses, fetched in parallel through the same cache.
    Addresses that fail validation or every provider map to None.
    """
    unique_cas = list(dict.fromkeys(normalize_ca(ca) for ca in cas))
    if not unique_cas:
        return {}

    workers = max(1, min(max_workers or settings.LOOKUP_MAX_WORKERS, len(unique_cas)))
    results: Dict[str, Optional[Dict[str, Any]]] = {}
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = {ex.submit(_try_market_cap, ca): ca for ca in unique_cas}
        for fut in as_completed(futs):
            results[futs[fut]] = fut.result()
    return results
