"""Bounded document preview sessions.

A session shows at most ``total`` pages of one publication's preview
document, however long the document actually is.
"""
import logging
from typing import Callable, Optional

from .catalog import PublicationCatalog
from .exceptions import CatalogLoadError, PublicationNotFound
from .handoff import HandoffCodec
from .models import Publication

logger = logging.getLogger(__name__)

PREVIEW_PAGE_LIMIT = 10
WATERMARK_TEXT = "PREVIEW - DO NOT DISTRIBUTE"
VIEWER_FLAGS = "toolbar=0&navpanes=0&scrollbar=0"


class PreviewSession:
    """Page cursor over one publication's preview, 1 <= cursor <= total."""

    def __init__(self, publication: Optional[Publication], cursor: int = 1,
                 total: int = PREVIEW_PAGE_LIMIT, requested_id: Optional[str] = None):
        self.publication = publication
        self.requested_id = requested_id
        self.total = total
        self.cursor = cursor if 1 <= cursor <= total else 1

    @classmethod
    def resolve(cls, handoff_token: Optional[str], pub_id: Optional[str],
                catalog_factory: Callable[[], PublicationCatalog],
                codec: HandoffCodec, page: int = 1,
                total: int = PREVIEW_PAGE_LIMIT) -> "PreviewSession":
        """Build a session from a handoff token, falling back to a catalog lookup.

        The fallback covers direct navigation and reloads after the token
        expired. A session that resolves nothing is in the not-found state.
        """
        publication = codec.loads(handoff_token)
        if publication is not None and pub_id and publication.id != pub_id:
            logger.warning(f"Handoff carries {publication.id}, location asks for {pub_id}")
            publication = None

        if publication is None and pub_id:
            catalog = catalog_factory()
            try:
                catalog.load()
            except CatalogLoadError as e:
                logger.error(f"Error loading publication {pub_id}: {e}")
            else:
                publication = catalog.find(pub_id)

        if publication is None:
            logger.info(f"No publication resolved for preview (id={pub_id!r})")
        return cls(publication, cursor=page, total=total, requested_id=pub_id)

    @property
    def found(self) -> bool:
        return self.publication is not None

    def require_publication(self) -> Publication:
        """The publication being previewed.

        Raises:
            PublicationNotFound: nothing was resolved, or the session was
                handed off to the request form.
        """
        if self.publication is None:
            raise PublicationNotFound(self.requested_id)
        return self.publication

    @property
    def can_go_back(self) -> bool:
        return self.found and self.cursor > 1

    @property
    def can_go_forward(self) -> bool:
        return self.found and self.cursor < self.total

    @property
    def page_info(self) -> str:
        return f"Page {self.cursor} of {self.total}"

    @property
    def limit_message(self) -> str:
        return f"Only pages 1-{self.total} are available for preview."

    def navigate(self, direction: int) -> bool:
        """Move one page back (-1) or forward (+1).

        Returns True when the cursor moved and the page surface should
        refresh. Moves past either bound are no-ops.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        if not self.found:
            return False

        new_page = self.cursor + direction
        if new_page < 1 or new_page > self.total:
            return False

        self.cursor = new_page
        return True

    def document_url(self, base_url: str) -> Optional[str]:
        """URL of the current page in the embedded viewer."""
        if not self.found or not self.publication.preview_file:
            return None
        return f"{base_url.rstrip('/')}/{self.publication.preview_file}#page={self.cursor}&{VIEWER_FLAGS}"

    def start_download_request(self, codec: HandoffCodec) -> Optional[str]:
        """Hand the publication to the request form and close the session."""
        if not self.found:
            return None
        token = codec.dumps(self.publication)
        self.publication = None
        self.cursor = 1
        return token

    def to_dict(self, base_url: str) -> dict:
        return {
            "id": self.publication.id if self.found else None,
            "page": self.cursor,
            "total": self.total,
            "pageInfo": self.page_info,
            "documentUrl": self.document_url(base_url),
            "prevDisabled": not self.can_go_back,
            "nextDisabled": not self.can_go_forward,
        }
