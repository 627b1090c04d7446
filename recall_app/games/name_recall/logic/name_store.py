# recall_app/games/name_recall/logic/name_store.py
from __future__ import annotations
import json
import logging
import random
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from flask import current_app

from recall_app.games.core.coerce_utils import coerce_name_list
from recall_app.models import MemoryName
from .sampler import DISPLAY_COUNT, sample_names

logger = logging.getLogger(__name__)

STORE_KEY = "name_recall_store"
FALLBACK_PATH = Path(__file__).resolve().parents[1] / "static" / "names.json"


class NameStore:
    """Active name pool, DB-first with an optional bundled JSON fallback.

    The pool is cached and reloaded once it is older than ``ttl`` seconds
    (``ttl=0`` reloads on every access).
    """

    def __init__(self, ttl: float = 60, json_fallback: bool = True,
                 fallback_path: Path = FALLBACK_PATH):
        self.ttl = ttl
        self.json_fallback = json_fallback
        self.fallback_path = fallback_path
        self.names: List[str] = []
        self.source: Optional[str] = None
        self.loaded_at: Optional[float] = None

    # ---------- loaders ----------
    def _load_from_db(self) -> List[str]:
        rows = (MemoryName.query
                .filter_by(active=True)
                .order_by(MemoryName.id.asc())
                .with_entities(MemoryName.name)
                .all())
        return coerce_name_list([r.name for r in rows])

    def _load_from_json(self) -> List[str]:
        path = self.fallback_path
        if not path.exists():
            logger.warning("names.json not found at %s", path)
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed loading %s", path)
            return []
        if isinstance(data, dict):
            data = data.get("names") or []
        return coerce_name_list(data)

    def is_stale(self) -> bool:
        if self.loaded_at is None:
            return True
        return (time.monotonic() - self.loaded_at) >= self.ttl

    def load(self, force: bool = False) -> None:
        if not force and not self.is_stale():
            return
        names = self._load_from_db()
        src = "db"
        if not names and self.json_fallback:
            names = self._load_from_json()
            src = "json"
        self.names = names
        self.source = src
        self.loaded_at = time.monotonic()
        logger.info("name_store loaded from %s: %d names", src, len(names))

    # ---------- queries ----------
    @property
    def pool_size(self) -> int:
        return len(self.names)

    def sample(self, count: int = DISPLAY_COUNT, rng: Optional[random.Random] = None) -> List[str]:
        return sample_names(self.names, count, rng)

    def pool_report(self) -> Dict[str, Any]:
        return {"source": self.source, "pool_size": self.pool_size, "ttl": self.ttl}


def _make_store() -> NameStore:
    cfg = current_app.config
    return NameStore(
        ttl=float(cfg.get("RECALL_STORE_TTL", 60)),
        json_fallback=bool(cfg.get("RECALL_JSON_FALLBACK", True)),
    )


def get_store(load: bool = True) -> NameStore:
    """Per-app store kept in ``app.extensions``."""
    store = current_app.extensions.get(STORE_KEY)
    if store is None:
        store = _make_store()
        current_app.extensions[STORE_KEY] = store
    if load:
        store.load(force=False)
    return store


def warmup_store(force: bool = False) -> NameStore:
    store = get_store(load=False)
    store.load(force=force)
    return store
