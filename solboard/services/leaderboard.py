# solboard/services/leaderboard.py
"""
Leaderboard + trending ticker
-----------------------------
Joins the token list with live market data and ranks tokens by price change
over a chosen window (5m / 1h / 6h / 24h).

Tokens whose market data cannot be fetched are left off the board.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from solboard.services.feeds import load_token_list
from solboard.services.marketcap import get_many

WINDOWS = {
    "5m": "priceChangeM5",
    "1h": "priceChangeH1",
    "6h": "priceChangeH6",
    "24h": "priceChangeH24",
}
SORT_COLUMNS = ("rank", "marketCap", "priceChange")
SORT_ORDERS = ("asc", "desc")

DEFAULT_WINDOW = "24h"
TRENDING_LIMIT = 10
MAX_TRENDING_LIMIT = 50

# display strings that mean "no number to show"
_NON_NUMERIC = ("N/A", "Pump.fun Token")


def _to_float(value) -> float | None:
    try:
        return float(str(value).replace("$", "").replace(",", ""))
    except ValueError:
        return None


def format_market_cap(value) -> str:
    """5000000 -> "$5.0M". Non-numeric values (e.g. "PUMP.FUN") pass through."""
    if not value:
        return "N/A"
    if value in _NON_NUMERIC:
        return value

    num = _to_float(value)
    if num is None or not math.isfinite(num) or num == 0:
        return str(value)

    if num >= 1e9:
        return f"${num / 1e9:.1f}B"
    if num >= 1e6:
        return f"${num / 1e6:.1f}M"
    if num >= 1e3:
        return f"${num / 1e3:.1f}K"
    return f"${num:.0f}"


def parse_market_cap(value) -> float:
    """Numeric market cap for sorting; anything unparseable sorts as 0."""
    if not value or value in _NON_NUMERIC:
        return 0.0
    num = _to_float(value)
    if num is None or not math.isfinite(num):
        return 0.0
    return num


def _change(item: Dict[str, Any], window: str) -> float:
    return item.get(WINDOWS[window]) or 0


def _check_window(window: str) -> None:
    if window not in WINDOWS:
        raise ValueError(f"window must be one of {', '.join(WINDOWS)}")


def _check_sort(sort: str, order: str) -> None:
    if sort not in SORT_COLUMNS:
        raise ValueError(f"sort must be one of {', '.join(SORT_COLUMNS)}")
    if order not in SORT_ORDERS:
        raise ValueError(f"order must be one of {', '.join(SORT_ORDERS)}")


def collect_market_data(tokens: List[Dict[str, Any]] | None = None) -> List[Dict[str, Any]]:
    """Token list entries merged with their market data, in token-list order."""
    tokens = load_token_list() if tokens is None else tokens
    tokens = [t for t in tokens if t.get("ca")]
    market = get_many([t["ca"] for t in tokens])

    out = []
    for t in tokens:
        data = market.get(str(t["ca"]).strip())
        if not data:
            continue
        out.append({
            "name": t.get("name"),
            "ticker": t.get("ticker"),
            "ca": t.get("ca"),
            "marketCap": format_market_cap(data.get("marketCap") or "N/A"),
            "marketCapNumeric": parse_market_cap(data.get("marketCap") or 0),
            "priceChangeM5": data.get("priceChangeM5") or 0,
            "priceChangeH1": data.get("priceChangeH1") or 0,
            "priceChangeH6": data.get("priceChangeH6") or 0,
            "priceChangeH24": data.get("priceChangeH24") or 0,
            "logo": t.get("logo"),
            "x": t.get("x"),
            "website": t.get("website"),
            "status": t.get("status"),
        })
    return out


def rank_tokens(items: List[Dict[str, Any]], window: str = DEFAULT_WINDOW) -> List[Dict[str, Any]]:
    """Assign ranks 1..n by window price change, biggest gainer first."""
    _check_window(window)
    ordered = sorted(items, key=lambda i: _change(i, window), reverse=True)
    return [{**item, "rank": idx + 1} for idx, item in enumerate(ordered)]


def sort_board(
    items: List[Dict[str, Any]],
    sort: str = "rank",
    order: str = "asc",
    window: str = DEFAULT_WINDOW,
) -> List[Dict[str, Any]]:
    _check_sort(sort, order)
    _check_window(window)

    if sort == "marketCap":
        key = lambda i: i["marketCapNumeric"]
    elif sort == "priceChange":
        key = lambda i: _change(i, window)
    else:
        key = lambda i: i["rank"]
    return sorted(items, key=key, reverse=(order == "desc"))


def build_leaderboard(window: str = DEFAULT_WINDOW, sort: str = "rank", order: str = "asc") -> List[Dict[str, Any]]:
    _check_window(window)
    _check_sort(sort, order)
    ranked = rank_tokens(collect_market_data(), window)
    return sort_board(ranked, sort=sort, order=order, window=window)


def build_trending(window: str = DEFAULT_WINDOW, limit: int = TRENDING_LIMIT) -> List[Dict[str, Any]]:
    """Top movers for the scrolling ticker."""
    _check_window(window)
    limit = max(1, min(int(limit), MAX_TRENDING_LIMIT))
    return rank_tokens(collect_market_data(), window)[:limit]
