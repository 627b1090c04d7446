# recall_app/games/name_recall/client/api.py
from __future__ import annotations
import logging
from typing import Optional

import requests

from recall_app.errors import NetworkError, PersistenceError, PoolExhausted
from recall_app.games.core.coerce_utils import coerce_name_list
from ..logic.payloads import NamesPayload, ResultPayload
from ..logic.sampler import DISPLAY_COUNT

logger = logging.getLogger(__name__)


class RecallApiClient:
    """Blocking HTTP client for the names/results endpoints.

    One attempt per call; callers decide what to do with the error.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: float = 10.0, display_count: int = DISPLAY_COUNT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.display_count = display_count

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def fetch_names(self) -> NamesPayload:
        try:
            resp = self.session.get(self._url("/api/names"), timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"GET /api/names failed: {e}") from e

        if resp.status_code == 422:
            raise PoolExhausted(f"GET /api/names -> 422: {resp.text[:200]}")
        if not resp.ok:
            raise NetworkError(f"GET /api/names -> {resp.status_code}: {resp.text[:200]}")

        try:
            body = resp.json()
        except ValueError as e:
            raise NetworkError("GET /api/names returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise NetworkError("GET /api/names returned an unexpected body")

        names = coerce_name_list(body.get("names"))
        if len(names) < self.display_count:
            raise PoolExhausted(f"expected {self.display_count} names, got {len(names)}")
        names = names[:self.display_count]
        pool_size = body.get("poolSize")
        if not isinstance(pool_size, int) or isinstance(pool_size, bool):
            pool_size = len(names)
        return NamesPayload(names=tuple(names), pool_size=pool_size)

    def submit_result(self, payload: ResultPayload) -> None:
        try:
            resp = self.session.post(self._url("/api/results"), json=payload.to_json(),
                                     timeout=self.timeout)
        except requests.RequestException as e:
            raise PersistenceError(f"POST /api/results failed: {e}") from e
        if not resp.ok:
            raise PersistenceError(f"POST /api/results -> {resp.status_code}: {resp.text[:200]}")
        logger.info("Result saved for %s (score=%s, status=%s)",
                    payload.email, payload.score, payload.status)
