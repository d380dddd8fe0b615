# solboard/routes/marketcap.py
from flask import Blueprint, jsonify, request

from solboard.config import settings
from solboard.services.errors import InvalidAddressError, MarketCapNotFound
from solboard.services.marketcap import get_market_cap

marketcap_bp = Blueprint("marketcap_bp", __name__)


def edge_cache_header() -> str:
    secs = settings.EDGE_CACHE_SECS
    return f"s-maxage={secs}, stale-while-revalidate={secs}"


@marketcap_bp.route("/api/marketcap", methods=["GET"])
def marketcap():
    """
    Market cap for one Solana token.
    Query params:
      - ca: token mint address (base58, 32-44 chars)
    """
    try:
        payload = get_market_cap(request.args.get("ca", ""))
    except InvalidAddressError as e:
        return jsonify({"error": str(e)}), 400
    except MarketCapNotFound as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        print(f"[marketcap] API /marketcap error: {e}")
        return jsonify({"error": str(e) or "Unknown error"}), 500

    resp = jsonify(payload)
    resp.headers["Cache-Control"] = edge_cache_header()
    return resp
