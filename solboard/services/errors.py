# solboard/services/errors.py
from __future__ import annotations


class InvalidAddressError(ValueError):
    """Raised when a contract address is missing or not a Solana mint address."""


class ProviderError(Exception):
    """A single market data provider could not produce a market cap."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class MarketCapNotFound(LookupError):
    """Every provider in the chain failed for this address."""

    def __init__(self, ca: str, failures: dict[str, str]):
        self.ca = ca
        self.failures = failures
        detail = ". ".join(f"{name}: {reason}" for name, reason in failures.items())
        super().__init__(f"No market cap found. {detail}.")
