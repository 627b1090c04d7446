# recall_app/models.py
from datetime import datetime, timezone

from sqlalchemy.dialects.postgresql import JSONB

from .db import db
from .games.name_recall.logic.scorer import STATUS_LABELS

# JSONB on Postgres, plain JSON elsewhere (SQLite in dev/tests)
JSONType = db.JSON().with_variant(JSONB(), "postgresql")
# SQLite only autoincrements INTEGER primary keys
BigIntPK = db.BigInteger().with_variant(db.Integer(), "sqlite")


def _utcnow():
    return datetime.now(timezone.utc)


class MemoryName(db.Model):
    __tablename__ = "memory_names"

    id         = db.Column(BigIntPK, primary_key=True)
    name       = db.Column(db.Text, nullable=False)
    active     = db.Column(db.Boolean, nullable=False, default=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def __repr__(self):
        return f"<MemoryName id={self.id} name={self.name!r} active={self.active}>"


class MemoryResult(db.Model):
    __tablename__ = "memory_results"
    __table_args__ = (
        db.CheckConstraint(
            "status IN (%s)" % ",".join(f"'{s}'" for s in STATUS_LABELS),
            name="ck_memory_results_status",
        ),
    )

    id                = db.Column(BigIntPK, primary_key=True)
    email             = db.Column(db.Text, nullable=False, index=True)
    names_presented   = db.Column(JSONType, nullable=False, default=list)
    answers_submitted = db.Column(JSONType, nullable=False, default=list)
    score             = db.Column(db.Float, nullable=False)
    status            = db.Column(db.String(16), nullable=False)   # 'fail'|'good'|'better'|'excellent'
    created_at        = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def __repr__(self):
        return f"<MemoryResult id={self.id} email={self.email!r} score={self.score} status={self.status}>"
