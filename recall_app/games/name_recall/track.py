# recall_app/games/name_recall/track.py
import logging

from recall_app.db import db
from recall_app.models import MemoryResult
from .logic.payloads import ResultPayload

logger = logging.getLogger(__name__)


def save_result(payload: ResultPayload) -> int:
    r = MemoryResult(
        email=payload.email,
        names_presented=list(payload.names_presented),
        answers_submitted=list(payload.answers_submitted),
        score=payload.score,
        status=payload.status,       # 'fail' | 'good' | 'better' | 'excellent'
    )
    db.session.add(r)
    db.session.commit()
    logger.info("memory_results id=%s email=%s score=%s status=%s", r.id, r.email, r.score, r.status)
    return r.id


def result_counts_by_status():
    rows = (db.session.query(MemoryResult.status, db.func.count(MemoryResult.id))
            .group_by(MemoryResult.status)
            .all())
    return {status: int(n) for status, n in rows}
