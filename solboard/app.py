# solboard/app.py
from flask import Flask, jsonify
from flask_cors import CORS

# ---- Core Config ----
from solboard.config import settings
from solboard.routes.feeds import feeds_bp
from solboard.routes.leaderboard import leaderboard_bp
from solboard.routes.marketcap import marketcap_bp


def create_app():
    app = Flask(__name__)
    CORS(app)

    # ---- Root Routes ----
    @app.route("/")
    def home():
        return "🚀 solboard backend is live!"

    @app.route("/healthz")
    def healthz():
        return jsonify({"ok": True})

    # ---- ENV Diagnostic ----
    @app.route("/test-env")
    def test_env():
        """Check which settings are populated without exposing their values."""
        return {
            "dexscreener": bool(settings.DEXSCREENER_API_BASE),
            "pumpfun": bool(settings.PUMPFUN_API_BASE),
            "solana_rpc": bool(settings.SOLANA_RPC_URL),
            "tokenlist": bool(settings.TOKENLIST_FILE),
            "promotion": bool(settings.PROMOTION_FILE),
        }

    # ---- Blueprints ----
    app.register_blueprint(marketcap_bp, url_prefix="")
    app.register_blueprint(leaderboard_bp, url_prefix="")
    app.register_blueprint(feeds_bp, url_prefix="")

    return app


app = create_app()

# ---- Run Server ----
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.PORT, threaded=True)
