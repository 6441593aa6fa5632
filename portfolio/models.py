"""Data models for the portfolio site."""
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional

# Catalog JSON keys that differ from the attribute names
_JSON_KEYS = {
    "download_requestable": "downloadRequestable",
    "preview_file": "previewFile",
}


@dataclass(frozen=True)
class Publication:
    """A publication record from the catalog.

    A record carries either journal metadata (journal, volume, issue,
    pages) or book metadata (book, pages, publisher).
    """
    id: str
    title: str = ""
    authors: List[str] = field(default_factory=list)
    year: Optional[int] = None
    category: str = ""
    keywords: List[str] = field(default_factory=list)
    abstract: str = ""

    # Journal article
    journal: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None

    # Book chapter
    book: Optional[str] = None
    publisher: Optional[str] = None

    download_requestable: bool = False
    featured: bool = False
    preview_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Publication":
        """Create a Publication from a catalog entry.

        Raises:
            ValueError: if the entry has no identifier.
        """
        pub_id = data.get("id")
        if pub_id is None or not str(pub_id).strip():
            raise ValueError("publication record has no id")

        authors = _as_list(data.get("authors"))

        year = data.get("year")
        if year not in (None, ""):
            year = int(year)
        else:
            year = None

        return cls(
            id=str(pub_id),
            title=data.get("title") or "",
            authors=[str(a) for a in authors],
            year=year,
            category=data.get("category") or "",
            keywords=[str(k) for k in _as_list(data.get("keywords"))],
            abstract=data.get("abstract") or "",
            journal=data.get("journal"),
            volume=_opt_str(data.get("volume")),
            issue=_opt_str(data.get("issue")),
            pages=_opt_str(data.get("pages")),
            book=data.get("book"),
            publisher=data.get("publisher"),
            download_requestable=bool(data.get("downloadRequestable", False)),
            featured=bool(data.get("featured", False)),
            preview_file=data.get("previewFile"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the catalog's JSON shape, dropping empty metadata."""
        data = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            data[_JSON_KEYS.get(key, key)] = value
        return data


def _as_list(value: Any) -> List[Any]:
    """A bare string is a single-item list."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
