"""Facet filtering and free-text search over the catalog.

Facet filtering and search are independent: each call replaces the
working view, so whichever ran last decides what is displayed.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .models import Publication

ALL = "all"
FACET = "facet"
SEARCH = "search"


def category_token(category: str) -> str:
    """Token used for filter-button and card ``data-category`` values."""
    return category.lower().replace(" ", "-", 1)


def matches_facet(pub: Publication, facet: str) -> bool:
    """Category substring OR exact year.

    One control surface doubles as a category filter and a year filter.
    """
    return facet in pub.category.lower() or str(pub.year) == facet


def matches_query(pub: Publication, term: str) -> bool:
    """Case-insensitive substring match on title, abstract, keywords and authors.

    ``term`` must already be lowercased.
    """
    return (
        term in pub.title.lower()
        or term in pub.abstract.lower()
        or any(term in keyword.lower() for keyword in pub.keywords)
        or any(term in author.lower() for author in pub.authors)
    )


@dataclass
class FilterState:
    facet: str = ALL
    query: str = ""
    last_action: Optional[str] = None


class PublicationFilter:
    """Derives the filtered view of a loaded catalog."""

    def __init__(self, publications: Iterable[Publication]):
        self.publications: List[Publication] = list(publications)
        self.filtered: List[Publication] = list(self.publications)
        self.state = FilterState()

    def filter_by_facet(self, facet: str) -> List[Publication]:
        self.state.facet = facet
        self.state.last_action = FACET

        if facet == ALL:
            self.filtered = list(self.publications)
        else:
            self.filtered = [pub for pub in self.publications if matches_facet(pub, facet)]
        return self.filtered

    def search(self, query: str) -> List[Publication]:
        self.state.query = query
        self.state.last_action = SEARCH

        if not query.strip():
            self.filtered = list(self.publications)
        else:
            term = query.lower()
            self.filtered = [pub for pub in self.publications if matches_query(pub, term)]
        return self.filtered

    def apply_args(self, args: Iterable[Tuple[str, str]]) -> List[Publication]:
        """Apply ``filter`` / ``q`` query arguments in the order given.

        The last one wins, mirroring a click on a filter button followed by
        typing in the search box (or the reverse).
        """
        for key, value in args:
            if key == "filter":
                self.filter_by_facet(value)
            elif key == "q":
                self.search(value)
        return self.filtered

    def facets(self) -> List[str]:
        """Distinct lowercased categories followed by distinct years, newest first.

        Every value returned here selects at least one record.
        """
        categories = []
        for pub in self.publications:
            name = pub.category.lower()
            if name and name not in categories:
                categories.append(name)
        years = sorted({pub.year for pub in self.publications if pub.year is not None}, reverse=True)
        return categories + [str(year) for year in years]
