"""Short-lived handoff of one publication between views.

The listing hands the selected record to the reader (and either view
hands it to the request form) through a signed, expiring token carried in
the query string. Nothing is kept on the server.
"""
import logging
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from .models import Publication

logger = logging.getLogger(__name__)

READER_SLOT = "reader"
REQUEST_SLOT = "request"


class HandoffCodec:
    """Signs and verifies publication handoff tokens for one slot."""

    def __init__(self, secret_key: str, slot: str = READER_SLOT, max_age: int = 1800):
        self.slot = slot
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=f"handoff-{slot}")

    def dumps(self, pub: Publication) -> str:
        return self._serializer.dumps(pub.to_dict())

    def loads(self, token: Optional[str]) -> Optional[Publication]:
        """Return the handed-off publication, or None if absent, tampered or expired."""
        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except SignatureExpired:
            logger.info(f"Expired {self.slot} handoff token")
            return None
        except BadSignature:
            logger.warning(f"Rejected {self.slot} handoff token with bad signature")
            return None

        try:
            return Publication.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed {self.slot} handoff payload: {e}")
            return None
