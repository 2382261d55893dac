import copy
import threading
from typing import Any, Dict, Optional

from trylocal.core.errors import NotFoundError
from trylocal.models import BusinessRecord
from .base import BusinessRepository


class InMemoryBusinessRepository(BusinessRepository):
    """business documents held in a dict (STORE_BACKEND=memory, local dev)."""

    def __init__(self, documents: Optional[Dict[str, Dict[str, Any]]] = None):
        self.documents: Dict[str, Dict[str, Any]] = copy.deepcopy(documents or {})
        self._lock = threading.Lock()

    def add(self, business_id: str, **fields: Any) -> None:
        with self._lock:
            self.documents[business_id] = dict(fields)

    def get(self, business_id: str) -> Optional[BusinessRecord]:
        with self._lock:
            data = self.documents.get(business_id)
            if data is None:
                return None
            return BusinessRecord.from_document(business_id, copy.deepcopy(data))

    def update(self, business_id: str, fields: Dict[str, Any]) -> None:
        with self._lock:
            if business_id not in self.documents:
                raise NotFoundError("Business not found")
            self.documents[business_id].update(fields)

    def health_check(self) -> Dict[str, Any]:
        return {"status": "configured", "backend": "memory", "documents": len(self.documents)}
