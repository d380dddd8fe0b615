import pytest

from conftest import PUMP_CA, SOL_CA, FakeResponse, make_pair
from solboard.services import marketcap
from solboard.services.errors import InvalidAddressError, MarketCapNotFound


def test_validate_ca():
    assert marketcap.validate_ca(SOL_CA) == SOL_CA
    with pytest.raises(InvalidAddressError):
        marketcap.validate_ca("")
    with pytest.raises(InvalidAddressError):
        marketcap.validate_ca("1" * 31)
    assert marketcap.validate_ca("1" * 32)
    assert marketcap.validate_ca("1" * 44)
    with pytest.raises(InvalidAddressError):
        marketcap.validate_ca("1" * 45)


def test_lookup_trims_whitespace(http):
    http.add("dexscreener", FakeResponse(200, {"pairs": [make_pair(market_cap=10, liquidity=1)]}))
    record, cached = marketcap.lookup(f"  {SOL_CA}\n")
    assert record.identifier == SOL_CA
    assert cached is False


def test_fetch_collects_every_failure(http):
    http.add("dexscreener", FakeResponse(429, {}))
    http.add("pump.fun", FakeResponse(200, {"market_cap": None}))
    with pytest.raises(MarketCapNotFound) as exc:
        marketcap.fetch_market_cap(SOL_CA)
    assert exc.value.failures == {
        "Dexscreener": "Dexscreener HTTP 429",
        "pump.fun": "No data available",
    }


def test_primary_success_skips_secondary(http):
    http.add("dexscreener", FakeResponse(200, {"pairs": [make_pair(market_cap=10, liquidity=1)]}))
    record = marketcap.fetch_market_cap(PUMP_CA)
    assert record.source == "dexscreener"
    assert record.value == 10
    assert http.calls_to("pump.fun") == []


def test_payload_keeps_zero_values():
    record = marketcap.MarketCapRecord(identifier=SOL_CA, value=1.0, source="dexscreener",
                                       holders=0, price_change_h24=0.0)
    payload = record.to_payload(cached=True)
    assert payload == {"marketCap": 1.0, "holders": 0, "source": "dexscreener",
                       "priceChangeH24": 0.0, "cached": True}


def test_get_many_dedupes_and_drops_failures(http):
    http.add(f"tokens/{SOL_CA}", FakeResponse(200, {"pairs": [make_pair(market_cap=10, liquidity=1)]}))
    results = marketcap.get_many([SOL_CA, SOL_CA, "bogus"])
    assert results[SOL_CA]["marketCap"] == 10
    assert results["bogus"] is None
    assert len(http.calls_to(SOL_CA)) == 1
