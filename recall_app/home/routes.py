# recall_app/home/routes.py
from flask import Blueprint, current_app, jsonify, url_for

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    return jsonify({
        "name": "Word Recall Sprint",
        "display_count": current_app.config.get("RECALL_DISPLAY_COUNT", 20),
        "endpoints": {
            "names": url_for("name_recall.api_names"),
            "results": url_for("name_recall.api_results"),
            "pool_report": url_for("name_recall.api_pool_report"),
        },
    })
