# solboard/routes/feeds.py
import os

from flask import Blueprint, jsonify, send_from_directory

from solboard.config import settings
from solboard.services.feeds import load_token_list
from solboard.services.promotions import get_promotions

feeds_bp = Blueprint("feeds_bp", __name__)


def _serve_raw(path: str):
    # max_age=0: the site polls these every 30s and expects edits immediately
    return send_from_directory(os.path.dirname(path), os.path.basename(path), max_age=0)


@feeds_bp.route("/tokenlist.json", methods=["GET"])
def tokenlist_raw():
    """Serve the token list file as-is."""
    return _serve_raw(settings.TOKENLIST_FILE)


@feeds_bp.route("/promotion.json", methods=["GET"])
def promotion_raw():
    """Serve the promotion file as-is."""
    return _serve_raw(settings.PROMOTION_FILE)


@feeds_bp.route("/api/tokens", methods=["GET"])
def tokens():
    tokens = load_token_list()
    return jsonify({"count": len(tokens), "tokens": tokens})


@feeds_bp.route("/api/promotions", methods=["GET"])
def promotions():
    """Promotions with display-ready market cap, holder count and 24h change."""
    try:
        promos = get_promotions()
        return jsonify({"count": len(promos), "promotions": promos})
    except Exception as e:
        return jsonify({"error": str(e)}), 500
