"""Citation formatting utilities."""
from typing import List

from markupsafe import Markup

from .models import Publication


def format_authors(authors: List[str]) -> str:
    """Authors in catalog order, comma separated."""
    return ", ".join(authors)


class CitationFormatter:
    """Format the short citation line shown on cards and in the reader."""

    @staticmethod
    def citation(pub: Publication) -> Markup:
        """Journal or book citation; empty when the record has neither.

        Journal: ``<em>Journal</em>, 12(3), 45-67``
        Book:    ``In <em>Book</em> (pp. 45-67). Publisher``
        """
        if pub.journal:
            return CitationFormatter._journal(pub)
        if pub.book:
            return Markup("In <em>{}</em> (pp. {}). {}").format(
                pub.book, pub.pages or "", pub.publisher or ""
            )
        return Markup("")

    @staticmethod
    def reader_citation(pub: Publication) -> Markup:
        """Journal citation with the year appended, for the reader header."""
        if not pub.journal:
            return Markup("")
        return CitationFormatter._journal(pub) + Markup(" ({})").format(pub.year or "")

    @staticmethod
    def _journal(pub: Publication) -> Markup:
        return Markup("<em>{}</em>, {}({}), {}").format(
            pub.journal, pub.volume or "", pub.issue or "", pub.pages or ""
        )

