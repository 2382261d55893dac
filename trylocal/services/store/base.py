from typing import Any, Dict, Optional

from trylocal.models import BusinessRecord


class BusinessRepository:
    """
    Access to business documents.

    ``update`` writes every given field in one atomic single-document update, so
    readers never see a status without its matching payouts flag.
    """

    def get(self, business_id: str) -> Optional[BusinessRecord]:  # pragma: no cover
        raise NotImplementedError

    def update(self, business_id: str, fields: Dict[str, Any]) -> None:  # pragma: no cover
        raise NotImplementedError

    def health_check(self) -> Dict[str, Any]:  # pragma: no cover
        return {"status": "unknown"}
