# solboard/config.py
import os
from dataclasses import dataclass

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


@dataclass
class Settings:
    # Core
    PORT: int = int(os.getenv("PORT", "10000"))

    # Market data providers
    DEXSCREENER_API_BASE: str = os.getenv("DEXSCREENER_API_BASE", "https://api.dexscreener.com")
    PUMPFUN_API_BASE: str = os.getenv("PUMPFUN_API_BASE", "https://frontend-api.pump.fun")
    DEXSCREENER_TIMEOUT_SECS: float = float(os.getenv("DEXSCREENER_TIMEOUT_SECS", "10"))
    PUMPFUN_TIMEOUT_SECS: float = float(os.getenv("PUMPFUN_TIMEOUT_SECS", "5"))

    # Cache windows
    MARKETCAP_TTL_SECS: int = int(os.getenv("MARKETCAP_TTL_SECS", "600"))   # 10 minutes
    EDGE_CACHE_SECS: int = int(os.getenv("EDGE_CACHE_SECS", "300"))

    # Static feeds polled by the site
    TOKENLIST_FILE: str = os.getenv("TOKENLIST_FILE", os.path.join(DATA_DIR, "tokenlist.json"))
    PROMOTION_FILE: str = os.getenv("PROMOTION_FILE", os.path.join(DATA_DIR, "promotion.json"))

    # Leaderboard / trending fan-out
    LOOKUP_MAX_WORKERS: int = int(os.getenv("LOOKUP_MAX_WORKERS", "8"))

    # Wallet adapter RPC (display layer only)
    SOLANA_RPC_URL: str = os.getenv("SOLANA_RPC_URL", "")

settings = Settings()
