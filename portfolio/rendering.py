"""Publication card rendering.

Cards are rendered server-side with Jinja2 into listing containers. A
container holds either cards, a single "no results" notice, or a single
error notice.
"""
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union
from urllib.parse import urlencode

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from .filtering import category_token
from .formatting import CitationFormatter, format_authors
from .models import Publication

NO_RESULTS_MESSAGE = "No publications found."
LOAD_ERROR_MESSAGE = "Unable to load publications. Please try again later."

# Reveal transition: first card after 100 ms, then one more step per card
REVEAL_BASE_DELAY_MS = 100
REVEAL_STEP_MS = 100

UrlBuilder = Callable[[Publication], str]


def default_read_url(pub: Publication) -> str:
    return "reader?" + urlencode({"id": pub.id})


def default_request_url(pub: Publication) -> str:
    return "contact?" + urlencode({"type": "download", "id": pub.id})


_env = Environment(
    loader=PackageLoader("portfolio", "templates"),
    autoescape=select_autoescape(["html"]),
)


@dataclass
class CardFragment:
    publication: Publication
    index: int
    reveal_delay_ms: int
    read_url: str
    request_url: Optional[str]
    html: Markup
    kind: str = "card"

    @property
    def has_request_action(self) -> bool:
        return self.request_url is not None


@dataclass
class Notice:
    kind: str  # "no-results" or "error"
    message: str
    html: Markup


Node = Union[CardFragment, Notice]


@dataclass
class ListingContainer:
    """A mount point for publication cards, e.g. ``publications-grid``."""
    container_id: str
    children: List[Node] = field(default_factory=list)

    def clear(self) -> None:
        self.children = []

    def mount(self, node: Node) -> None:
        self.children.append(node)

    @property
    def fragments(self) -> List[CardFragment]:
        return [node for node in self.children if isinstance(node, CardFragment)]

    @property
    def notice(self) -> Optional[Notice]:
        for node in self.children:
            if isinstance(node, Notice):
                return node
        return None

    def __html__(self) -> str:
        return "\n".join(str(node.html) for node in self.children)


class CardRenderer:
    """Projects publications onto card fragments and mounts them."""

    def __init__(self, read_url: UrlBuilder = default_read_url,
                 request_url: UrlBuilder = default_request_url,
                 env: Environment = _env):
        self.read_url = read_url
        self.request_url = request_url
        self.env = env

    def render(self, records: Iterable[Publication], container: ListingContainer) -> ListingContainer:
        container.clear()
        records = list(records)

        if not records:
            container.mount(self._notice("no-results", NO_RESULTS_MESSAGE))
            return container

        for index, pub in enumerate(records):
            container.mount(self.render_card(pub, index))
        return container

    def render_card(self, pub: Publication, index: int = 0) -> CardFragment:
        delay = REVEAL_BASE_DELAY_MS + index * REVEAL_STEP_MS
        read_url = self.read_url(pub)
        request_url = self.request_url(pub) if pub.download_requestable else None

        html = Markup(self.env.get_template("card.html").render(
            pub=pub,
            category=category_token(pub.category),
            authors=format_authors(pub.authors),
            citation=CitationFormatter.citation(pub),
            delay=delay,
            read_url=read_url,
            request_url=request_url,
        ))
        return CardFragment(
            publication=pub,
            index=index,
            reveal_delay_ms=delay,
            read_url=read_url,
            request_url=request_url,
            html=html,
        )

    def show_error(self, containers: Iterable[ListingContainer],
                   message: str = LOAD_ERROR_MESSAGE) -> None:
        """Replace the contents of every container with an error notice."""
        for container in containers:
            container.clear()
            container.mount(self._notice("error", message))

    def _notice(self, kind: str, message: str) -> Notice:
        html = Markup(self.env.get_template("notice.html").render(kind=kind, message=message))
        return Notice(kind=kind, message=message, html=html)
