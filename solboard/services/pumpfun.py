# solboard/services/pumpfun.py
"""
pump.fun fallback provider.

Tokens minted through pump.fun carry a vanity "pump" suffix on their mint
address. Their frontend API is unreliable, so for those we only report that
the token lives on pump.fun; other addresses still get a best-effort lookup.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import requests

from solboard.config import settings
from solboard.services.errors import ProviderError

PROVIDER = "pump.fun"
SOURCE = "pump.fun"
SENTINEL = "PUMP.FUN"
PUMP_SUFFIX = "pump"

_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
}

# Field names pump.fun has used for market cap, most specific first
_MARKET_CAP_FIELDS = ("market_cap", "marketCap", "mc", "fdv", "usd_market_cap")


def coin_url(ca: str) -> str:
    return f"https://pump.fun/coin/{ca}"


def is_pump_address(ca: str) -> bool:
    return ca.endswith(PUMP_SUFFIX)


def extract_market_cap(data: Any) -> Optional[float]:
    """First truthy market cap field, accepted only if it is a positive finite number."""
    if not isinstance(data, dict):
        return None

    value = None
    for field in _MARKET_CAP_FIELDS:
        if data.get(field):
            value = data[field]
            break
    for nested in ("bonding_curve", "token"):
        if value:
            break
        if isinstance(data.get(nested), dict):
            value = data[nested].get("market_cap")

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
    except OverflowError:
        return None
    if value <= 0:
        return None
    return value


def get_market_cap(ca: str) -> Dict[str, Any]:
    """
    Market cap from pump.fun, or the PUMP.FUN sentinel for pump-suffixed mints.
    Raises ProviderError when nothing usable comes back.
    """
    if is_pump_address(ca):
        print(f"[pumpfun] detected pump.fun token {ca}, using placeholder")
        return {"marketCap": SENTINEL, "url": coin_url(ca), "holders": 0, "source": SOURCE}

    url = f"{settings.PUMPFUN_API_BASE}/coins/{ca}"
    try:
        r = requests.get(url, headers=_HEADERS, timeout=settings.PUMPFUN_TIMEOUT_SECS)
    except requests.exceptions.Timeout:
        print(f"[pumpfun] request timed out for {ca}")
        raise ProviderError(PROVIDER, "Request timed out")
    except requests.exceptions.RequestException as e:
        print(f"[pumpfun] fetch error for {ca}: {e}")
        raise ProviderError(PROVIDER, str(e) or "pump.fun fetch failed")

    if not (200 <= r.status_code < 300):
        print(f"[pumpfun] HTTP {r.status_code} for {ca}")
        raise ProviderError(PROVIDER, f"pump.fun HTTP {r.status_code}")

    try:
        data = r.json()
    except ValueError as e:
        raise ProviderError(PROVIDER, f"Malformed response: {e}")

    market_cap = extract_market_cap(data)
    if market_cap is None:
        print(f"[pumpfun] data found but no valid market cap for {ca}")
        raise ProviderError(PROVIDER, "No data available")

    return {"marketCap": market_cap, "url": coin_url(ca), "holders": 0, "source": SOURCE}
