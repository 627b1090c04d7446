# recall_app/games/name_recall/routes.py
from __future__ import annotations
import logging

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from recall_app import limiter
from recall_app.db import db
from recall_app.errors import PoolExhausted, ValidationError
from recall_app.games.core.coerce_utils import coerce_bool
from .logic.name_store import get_store
from .logic.payloads import NamesPayload, ResultPayload
from .track import save_result

logger = logging.getLogger(__name__)

bp = Blueprint("name_recall", __name__, url_prefix="/api")


def _results_limit() -> str:
    return current_app.config.get("RECALL_RESULTS_RATE_LIMIT", "30 per minute")


@bp.get("/names")
def api_names():
    count = int(current_app.config.get("RECALL_DISPLAY_COUNT", 20))
    try:
        store = get_store()
        names = store.sample(count)
    except PoolExhausted as e:
        logger.warning("/api/names: %s", e)
        return jsonify({"error": "Not enough active names in memory_names table."}), 422
    except Exception:
        logger.exception("/api/names failure")
        return jsonify({"error": "Unable to load names."}), 500

    return jsonify(NamesPayload(names=tuple(names), pool_size=store.pool_size).to_json()), 200


@bp.post("/results")
@limiter.limit(_results_limit)
def api_results():
    body = request.get_json(silent=True)
    try:
        payload = ResultPayload.from_json(body)
    except ValidationError as e:
        logger.info("/api/results rejected: %s", e)
        return jsonify({"error": e.user_message}), 400

    try:
        save_result(payload)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("/api/results failure")
        return jsonify({"error": "Unable to persist result."}), 500

    return jsonify({"success": True}), 200


@bp.get("/pool_report")
def api_pool_report():
    try:
        store = get_store(load=False)
        store.load(force=coerce_bool(request.args.get("reload")))
    except SQLAlchemyError:
        logger.exception("/api/pool_report failure")
        return jsonify({"ok": False, "error": "Unable to load names."}), 500
    return jsonify({"ok": True, "pool": store.pool_report()}), 200
