import pytest
import requests

from solboard.app import create_app
from solboard.services import cache

SOL_CA = "So11111111111111111111111111111111111111112"
PUMP_CA = "7GCihgDB8fe6KNjn2MYtkzZcRjQy3t9GHdCpump"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, raise_json=False):
        self.status_code = status_code
        self._payload = payload
        self._raise_json = raise_json

    def json(self):
        if self._raise_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeHTTP:
    """Stands in for requests.get; answers by URL substring and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url_part, response):
        self.routes[url_part] = response

    def __call__(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "timeout": timeout, "headers": headers})
        for part, response in self.routes.items():
            if part in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return FakeResponse(404, {})

    def calls_to(self, url_part):
        return [c for c in self.calls if url_part in c["url"]]


def make_pair(market_cap=None, fdv=None, liquidity=None, chain="solana", **extra):
    pair = {"chainId": chain, "url": f"https://dexscreener.com/{chain}/pair{liquidity}"}
    if market_cap is not None:
        pair["marketCap"] = market_cap
    if fdv is not None:
        pair["fdv"] = fdv
    if liquidity is not None:
        pair["liquidity"] = {"usd": liquidity}
    pair.update(extra)
    return pair


@pytest.fixture(autouse=True)
def clean_cache():
    cache.clear_cache()
    yield
    cache.clear_cache()


@pytest.fixture
def http(monkeypatch):
    fake = FakeHTTP()
    monkeypatch.setattr(requests, "get", fake)
    return fake


@pytest.fixture
def app():
    app = create_app()
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
