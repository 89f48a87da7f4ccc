import os
from contextlib import contextmanager
from typing import Iterator

from filelock import FileLock, Timeout

from homebite.config import settings
from homebite.errors import CartBusy


@contextmanager
def user_lock(user_id: int) -> Iterator[None]:
    """
    Serialize read-modify-write cycles on one user's cart (and checkout)
    across threads and worker processes on the same host.
    """
    os.makedirs(settings.LOCK_DIR, exist_ok=True)
    lock = FileLock(os.path.join(settings.LOCK_DIR, f"cart_{user_id}.lock"))
    try:
        lock.acquire(timeout=settings.LOCK_TIMEOUT_SECONDS)
    except Timeout:
        raise CartBusy()
    try:
        yield
    finally:
        lock.release()
