"""Publication catalog loading.

The catalog is a read-only JSON document with a top-level ``publications``
list. It may live on disk or behind an unauthenticated HTTP GET.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional

import requests

from .exceptions import CatalogLoadError
from .models import Publication

logger = logging.getLogger(__name__)


def parse_catalog(payload, source: str = "<memory>") -> List[Publication]:
    """Turn a decoded catalog document into publication records.

    All-or-nothing: any malformed record fails the whole catalog.
    """
    if not isinstance(payload, dict) or "publications" not in payload:
        raise CatalogLoadError(source, "missing 'publications' field")
    entries = payload["publications"]
    if not isinstance(entries, list):
        raise CatalogLoadError(source, "'publications' is not a list")

    records = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogLoadError(source, f"entry {index} is not an object")
        try:
            records.append(Publication.from_dict(entry))
        except (TypeError, ValueError) as e:
            raise CatalogLoadError(source, f"entry {index}: {e}") from e
    return records


class PublicationCatalog:
    """Owns the in-memory list of publications for one page lifetime."""

    def __init__(self, source: str, timeout: Optional[float] = None):
        self.source = str(source)
        self.timeout = timeout
        self.publications: List[Publication] = []
        self.error: Optional[CatalogLoadError] = None
        self._loaded = False

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def load(self) -> List[Publication]:
        """Fetch the catalog once.

        Later calls return the cached records, or re-raise the first
        failure without fetching again.

        Raises:
            CatalogLoadError: on network, I/O or parse failure.
        """
        if self._loaded:
            if self.error is not None:
                raise self.error
            return self.publications

        self._loaded = True
        try:
            payload = self._fetch()
            records = parse_catalog(payload, self.source)
        except CatalogLoadError as e:
            self.error = e
            logger.error(f"Error loading publications: {e}")
            raise

        self.publications = records
        logger.info(f"Loaded {len(records)} publications from {self.source}")
        return self.publications

    def _fetch(self):
        if self.is_remote:
            try:
                response = requests.get(self.source, timeout=self.timeout)
                response.raise_for_status()
                return response.json()
            except requests.RequestException as e:
                raise CatalogLoadError(self.source, str(e)) from e
            except ValueError as e:
                raise CatalogLoadError(self.source, f"invalid JSON: {e}") from e

        try:
            with open(Path(self.source), "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise CatalogLoadError(self.source, str(e)) from e
        except json.JSONDecodeError as e:
            raise CatalogLoadError(self.source, f"invalid JSON: {e}") from e

    def find(self, pub_id: str) -> Optional[Publication]:
        for pub in self.publications:
            if pub.id == pub_id:
                return pub
        return None

    def featured(self, limit: int = 3) -> List[Publication]:
        """Featured publications for the home page, in catalog order."""
        return [pub for pub in self.publications if pub.featured][:limit]
