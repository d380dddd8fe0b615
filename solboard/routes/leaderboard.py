# solboard/routes/leaderboard.py
from flask import Blueprint, jsonify, request

from solboard.services.leaderboard import (
    DEFAULT_WINDOW,
    TRENDING_LIMIT,
    build_leaderboard,
    build_trending,
)

leaderboard_bp = Blueprint("leaderboard_bp", __name__)


@leaderboard_bp.route("/api/leaderboard", methods=["GET"])
def leaderboard():
    """
    Ranked token leaderboard.
    Query params:
      - window: 5m | 1h | 6h | 24h (default 24h), ranks by that price change
      - sort: rank | marketCap | priceChange (default rank)
      - order: asc | desc (default asc)
    """
    window = request.args.get("window", DEFAULT_WINDOW).strip()
    sort = request.args.get("sort", "rank").strip()
    order = request.args.get("order", "asc").strip()
    try:
        tokens = build_leaderboard(window=window, sort=sort, order=order)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        return jsonify({"error": str(e)}), 500
    return jsonify({"window": window, "count": len(tokens), "tokens": tokens})


@leaderboard_bp.route("/api/trending", methods=["GET"])
def trending():
    """Top movers for the ticker (default top 10 by 24h change)."""
    window = request.args.get("window", DEFAULT_WINDOW).strip()
    try:
        limit = int(request.args.get("limit", TRENDING_LIMIT))
        tokens = build_trending(window=window, limit=limit)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        return jsonify({"error": str(e)}), 500
    return jsonify({"window": window, "count": len(tokens), "tokens": tokens})
