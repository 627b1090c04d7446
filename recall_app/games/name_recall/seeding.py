# recall_app/games/name_recall/seeding.py
import logging
from typing import Iterable, Tuple

from recall_app.db import db
from recall_app.models import MemoryName

logger = logging.getLogger(__name__)


def seed_names(names: Iterable[str], deactivate_missing: bool = False) -> Tuple[int, int]:
    """Insert unseen names as active; reactivate known ones.

    Returns ``(added, deactivated)``.
    """
    wanted = list(dict.fromkeys(n.strip() for n in names if n and n.strip()))
    existing = {row.name: row for row in MemoryName.query.all()}

    added = 0
    for name in wanted:
        row = existing.get(name)
        if row is None:
            db.session.add(MemoryName(name=name, active=True))
            added += 1
        elif not row.active:
            row.active = True

    deactivated = 0
    if deactivate_missing:
        keep = set(wanted)
        for name, row in existing.items():
            if row.active and name not in keep:
                row.active = False
                deactivated += 1

    db.session.commit()
    logger.info("seeded memory_names: added=%d deactivated=%d", added, deactivated)
    return added, deactivated
