import json

import pytest

from conftest import PUMP_CA, FakeResponse, make_pair
from solboard.config import settings
from solboard.services import feeds
from solboard.services.promotions import get_promotions, on_chain_summary

WIF_CA = "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm"

PROMOS = [
    {"name": "WIF", "ticker": "WIF", "contractAddress": WIF_CA, "chain": "Solana", "buyUrl": "https://jup.ag"},
    {"name": "Pumped", "ticker": "PMP", "contractAddress": PUMP_CA, "chain": "solana", "buyUrl": "https://pump.fun"},
    {"name": "Pepe", "ticker": "PEPE", "contractAddress": "0x6982508145454ce325ddbe47a25d4ec3d2311933", "chain": "ethereum"},
]


@pytest.fixture
def feed_files(tmp_path, monkeypatch):
    tokenlist = tmp_path / "tokenlist.json"
    promotion = tmp_path / "promotion.json"
    tokenlist.write_text(json.dumps({"tokens": [{"name": "x", "ca": WIF_CA}]}))
    promotion.write_text(json.dumps(PROMOS))
    monkeypatch.setattr(settings, "TOKENLIST_FILE", str(tokenlist))
    monkeypatch.setattr(settings, "PROMOTION_FILE", str(promotion))
    return tokenlist, promotion


def test_load_feed_accepts_list_or_wrapped(feed_files):
    assert feeds.load_token_list() == [{"name": "x", "ca": WIF_CA}]
    assert len(feeds.load_promotions()) == 3


def test_load_feed_missing_or_broken(tmp_path):
    assert feeds.load_feed(str(tmp_path / "nope.json")) == []
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert feeds.load_feed(str(bad)) == []
    obj = tmp_path / "obj.json"
    obj.write_text(json.dumps({"hello": "world"}))
    assert feeds.load_feed(str(obj), key="tokens") == []


def test_feed_reflects_edits_without_restart(feed_files):
    tokenlist, _ = feed_files
    tokenlist.write_text(json.dumps([{"name": "y", "ca": WIF_CA}]))
    assert feeds.load_token_list()[0]["name"] == "y"


def test_raw_feed_routes(client, feed_files):
    res = client.get("/promotion.json")
    assert res.status_code == 200
    assert res.get_json() == PROMOS

    res = client.get("/tokenlist.json")
    assert res.status_code == 200
    assert res.get_json()["tokens"][0]["name"] == "x"


def test_tokens_route(client, feed_files):
    body = client.get("/api/tokens").get_json()
    assert body["count"] == 1


def test_bundled_feeds_are_valid():
    assert all(t.get("ca") for t in feeds.load_token_list())
    assert all(p.get("contractAddress") for p in feeds.load_promotions())


@pytest.mark.parametrize("data, expected", [
    ({"marketCap": 1234567, "holders": 12, "priceChangeH24": 3.14159},
     {"marketCap": "$1,234,567", "holderCount": 12, "marketCapChange": "+3.14%"}),
    ({"marketCap": 1500.5, "priceChangeH24": -2},
     {"marketCap": "$1,500.5", "holderCount": 0, "marketCapChange": "-2.00%"}),
    ({"marketCap": 1234.5678},
     {"marketCap": "$1,234.568", "holderCount": 0, "marketCapChange": ""}),
    ({"marketCap": "PUMP.FUN", "holders": 0},
     {"marketCap": "Pump.fun Token", "holderCount": 0, "marketCapChange": ""}),
    (None, {"marketCap": "N/A", "holderCount": 0, "marketCapChange": ""}),
])
def test_on_chain_summary(data, expected):
    assert on_chain_summary(data) == expected


def test_promotions_route(client, http, feed_files):
    pair = make_pair(market_cap=2_000_000, liquidity=10, priceChange={"h24": 4.5},
                     txns={"h24": {"buys": 3, "sells": 4}})
    http.add(f"tokens/{WIF_CA}", FakeResponse(200, {"pairs": [pair]}))
    http.add(f"tokens/{PUMP_CA}", FakeResponse(200, {"pairs": []}))

    res = client.get("/api/promotions")
    assert res.status_code == 200
    promos = res.get_json()["promotions"]
    assert promos[0]["onChain"] == {"marketCap": "$2,000,000", "holderCount": 7, "marketCapChange": "+4.50%"}
    assert promos[1]["onChain"]["marketCap"] == "Pump.fun Token"
    assert promos[2]["onChain"]["marketCap"] == "N/A"
    # only solana promotions hit the market data providers
    assert not http.calls_to("0x6982508145454ce325ddbe47a25d4ec3d2311933")


def test_promotions_direct(http):
    out = get_promotions([{"name": "solo", "chain": "solana"}])
    assert out[0]["onChain"]["marketCap"] == "N/A"
    assert http.calls == []
