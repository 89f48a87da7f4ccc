import logging
from typing import Optional

from sqlalchemy.orm import Session

from homebite.models.idempotency import IdempotencyRecord

log = logging.getLogger(__name__)


class IdempotencyRepository:
    def __init__(self, db: Session):
        # caller's session; writes join the caller's transaction
        self.db = db

    def get(self, key: str) -> Optional[IdempotencyRecord]:
        return (
            self.db.query(IdempotencyRecord)
            .filter(IdempotencyRecord.key == key)
            .first()
        )

    def record(self, key: str, operation: str, user_id: int, order_id: int) -> IdempotencyRecord:
        """
        Remember which order ``key`` produced. Flushed inside the caller's
        transaction, so the record exists if and only if the order does; a
        concurrent duplicate surfaces as an IntegrityError on the unique key.
        """
        rec = IdempotencyRecord(key=key, operation=operation, user_id=user_id, order_id=order_id)
        self.db.add(rec)
        self.db.flush()
        log.debug("record(): key=%r order_id=%s", key, order_id)
        return rec

    def delete_for_order(self, order_id: int) -> None:
        self.db.query(IdempotencyRecord).filter(
            IdempotencyRecord.order_id == order_id
        ).delete(synchronize_session=False)
