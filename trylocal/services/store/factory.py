from trylocal.core.config import settings
from .base import BusinessRepository
from .memory import InMemoryBusinessRepository
from .firestore import FirestoreBusinessRepository

_memory_repo = InMemoryBusinessRepository()
_firestore_repo: FirestoreBusinessRepository | None = None


def get_business_repository() -> BusinessRepository:
    global _firestore_repo
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        return _memory_repo
    # firestore client is thread-safe, build it once
    if _firestore_repo is None:
        _firestore_repo = FirestoreBusinessRepository()
    return _firestore_repo
