# recall_app/__init__.py
from __future__ import annotations
import asyncio
import json
import logging
from pathlib import Path

import click
from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate

from .config import Config
from .db import db

# --- extensions ---
migrate = Migrate()
# dev-friendly in-memory limiter; point RATELIMIT_STORAGE_URI at redis in prod
limiter = Limiter(get_remote_address)


def create_app(config: object | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    app.config.from_object(config or Config)
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)
    app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)
    app.config.setdefault("RATELIMIT_STORAGE_URI", "memory://")

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError(
            "Missing SQLALCHEMY_DATABASE_URI (or DATABASE_URL). "
            "Set it via env or instance/config.py."
        )

    # ---------------------------
    # Logging
    # ---------------------------
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)
    for name in ("recall_app", "recall_app.games.name_recall"):
        logging.getLogger(name).setLevel(level)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .home.routes import bp as home_bp
    from .games.name_recall.routes import bp as name_recall_bp
    app.register_blueprint(home_bp)
    app.register_blueprint(name_recall_bp)

    # ---------------------------
    # Tables + warm the name pool
    # ---------------------------
    with app.app_context():
        from . import models  # noqa: F401  register tables
        db.create_all()
        if app.config.get("RECALL_STORE_WARMUP", True):
            try:
                from .games.name_recall.logic.name_store import warmup_store
                warmup_store(force=False)
                app.logger.info("Name pool warmed up at startup.")
            except Exception:
                app.logger.exception("Name pool warmup failed")

    _register_cli(app)

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        resp.headers["Content-Security-Policy"] = "default-src 'self'"
        return resp

    return app


def _register_cli(app: Flask) -> None:
    from .games.name_recall.logic.name_store import FALLBACK_PATH, get_store, warmup_store

    @app.cli.command("recall-rebuild-store")
    def recall_rebuild_store():
        """Reload the name pool from the DB (fallback to JSON)."""
        store = warmup_store(force=True)
        click.echo(f"Rebuilt name pool: {store.pool_report()}")

    @app.cli.command("recall-stats")
    def recall_stats():
        """Print pool size and stored results per status."""
        from .games.name_recall.track import result_counts_by_status
        store = get_store()
        counts = result_counts_by_status()
        click.echo(f"Name pool: {store.pool_report()}")
        click.echo(f"Results: total={sum(counts.values())}, by_status={counts}")

    @app.cli.command("recall-seed")
    @click.option("--file", "path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                  default=None, help="JSON list of names (default: bundled pool).")
    @click.option("--deactivate-missing", is_flag=True,
                  help="Mark active names that are not in the file as inactive.")
    def recall_seed(path, deactivate_missing):
        """Insert names into memory_names, skipping ones already present."""
        from .games.core.coerce_utils import coerce_name_list
        from .games.name_recall.seeding import seed_names
        raw = json.loads((path or FALLBACK_PATH).read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            raw = raw.get("names")
        names = coerce_name_list(raw)
        added, deactivated = seed_names(names, deactivate_missing=deactivate_missing)
        warmup_store(force=True)
        click.echo(f"Seeded {added} new names ({deactivated} deactivated).")

    @app.cli.command("recall-play")
    @click.option("--base-url", default=None, help="Server to play against.")
    @click.option("--email", default="", help="Skip the email prompt.")
    @click.option("--fast", is_flag=True, help="No loading/calculating floors.")
    def recall_play(base_url, email, fast):
        """Play one recall run in the terminal."""
        from .games.name_recall.client.api import RecallApiClient
        from .games.name_recall.client.terminal import run_terminal_game
        from .games.name_recall.logic.machine import MachineSettings
        cfg = app.config
        settings = MachineSettings(
            display_count=int(cfg.get("RECALL_DISPLAY_COUNT", 20)),
            scoring_floor=0.0 if fast else float(cfg.get("RECALL_SCORING_FLOOR", 2.5)),
            reset_seconds=float(cfg.get("RECALL_RESET_SECONDS", 10)),
        )
        api = RecallApiClient(base_url or cfg["RECALL_API_BASE"], display_count=settings.display_count)
        try:
            asyncio.run(run_terminal_game(
                api,
                settings=settings,
                fetch_floor=0.0 if fast else float(cfg.get("RECALL_FETCH_FLOOR", 2.5)),
                email=email,
            ))
        except (KeyboardInterrupt, EOFError):
            click.echo("\nGoodbye!")
