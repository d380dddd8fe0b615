# solboard/services/cache.py
"""
In-memory market-cap cache.
One record per contract address, judged fresh against its own fetch time.
Nothing is evicted: stale entries stay until the next successful fetch overwrites them.
"""

import time

from solboard.config import settings

CACHE = {}


def _now():
    return time.time()


def get_cache(key, ttl=None):
    """Return the cached record if it is still inside the TTL window."""
    ttl = settings.MARKETCAP_TTL_SECS if ttl is None else ttl
    record = CACHE.get(key)
    if record is None:
        return None
    if _now() - record.fetched_at <= ttl:
        return record
    return None


def set_cache(key, record):
    """Store a record, replacing whatever was there."""
    CACHE[key] = record


def clear_cache():
    CACHE.clear()
