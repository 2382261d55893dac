import json
import logging
import os
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from trylocal.core.config import settings
from trylocal.core.errors import CATEGORY_AUTHENTICATION, CATEGORY_TRANSIENT, ExternalServiceError, NotFoundError
from trylocal.models import BusinessRecord
from .base import BusinessRepository

logger = logging.getLogger(__name__)


def _load_credentials():
    """service account JSON from env, then a credentials file, then ADC."""
    if settings.FIREBASE_SERVICE_ACCOUNT:
        try:
            info = json.loads(settings.FIREBASE_SERVICE_ACCOUNT)
        except ValueError as e:
            raise ExternalServiceError(
                message="Invalid JSON in FIREBASE_SERVICE_ACCOUNT",
                category=CATEGORY_TRANSIENT,
                public_message="Database not initialized",
            ) from e
        return credentials.Certificate(info)
    cred_path = settings.GOOGLE_APPLICATION_CREDENTIALS
    if cred_path and os.path.exists(cred_path):
        return credentials.Certificate(cred_path)
    logger.warning("No Firebase service account configured, falling back to application default credentials")
    return credentials.ApplicationDefault()


def get_firebase_app() -> firebase_admin.App:
    if firebase_admin._apps:  # type: ignore[attr-defined]
        return firebase_admin.get_app()
    options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
    app = firebase_admin.initialize_app(_load_credentials(), options)
    logger.info("Firebase Admin initialized")
    return app


class FirestoreBusinessRepository(BusinessRepository):
    """businesses/{id} documents in Firestore."""

    def __init__(self, client: Optional[Any] = None, collection: Optional[str] = None):
        if client is None:
            try:
                client = firestore.client(app=get_firebase_app())
            except (auth_exceptions.DefaultCredentialsError, ValueError) as e:
                # no credentials found, or no project id to go with them
                raise ExternalServiceError(
                    message=f"Firestore client could not be created: {e}",
                    category=CATEGORY_AUTHENTICATION,
                    public_message="Database not initialized",
                ) from e
        self.client = client
        self.collection = collection or settings.BUSINESSES_COLLECTION

    def _doc(self, business_id: str):
        return self.client.collection(self.collection).document(business_id)

    def get(self, business_id: str) -> Optional[BusinessRecord]:
        try:
            snapshot = self._doc(business_id).get()
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Firestore read failed for business {business_id}: {e}")
            raise ExternalServiceError(message=str(e), category=CATEGORY_TRANSIENT) from e
        if not snapshot.exists:
            return None
        return BusinessRecord.from_document(business_id, snapshot.to_dict() or {})

    def update(self, business_id: str, fields: Dict[str, Any]) -> None:
        try:
            self._doc(business_id).update(fields)
        except google_exceptions.NotFound as e:
            raise NotFoundError("Business not found") from e
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Firestore update failed for business {business_id}: {e}")
            raise ExternalServiceError(message=str(e), category=CATEGORY_TRANSIENT) from e

    def health_check(self) -> Dict[str, Any]:
        return {"status": "configured", "backend": "firestore", "collection": self.collection}
