import hashlib
import threading
import weakref
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.orm import Session


def advisory_key(owner) -> int:
    """Stable signed 64-bit key for pg_advisory_xact_lock."""
    digest = hashlib.blake2b(str(owner).encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


class OwnerLocks:
    """Serializes goal writes per owner.

    Holds one in-process lock per owner; on PostgreSQL the store also takes
    a transaction-scoped advisory lock so other processes are serialized
    too. Different owners never block each other. Create one per
    application and hand it to every GoalIntervalStore.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # An entry lives only while someone holds or waits on it
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, owner) -> threading.Lock:
        key = str(owner)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, owner):
        """In-process lock for `owner`; commit before leaving the block."""
        with self._lock_for(owner):
            yield

    def lock_transaction(self, db: Session, owner):
        """Take the owner's advisory lock inside the current transaction.

        Postgres releases it at commit or rollback. Other dialects rely on
        the in-process lock alone.
        """
        if db.get_bind().dialect.name == "postgresql":
            db.execute(
                text("SELECT pg_advisory_xact_lock(:key)"),
                {"key": advisory_key(owner)},
            )
