"""Tests for publication card rendering."""
import pytest

from portfolio.models import Publication
from portfolio.rendering import (
    CardRenderer,
    ListingContainer,
    NO_RESULTS_MESSAGE,
    LOAD_ERROR_MESSAGE,
)


@pytest.fixture
def renderer():
    return CardRenderer()


class TestRender:
    def test_empty_renders_single_no_results_node(self, renderer):
        container = renderer.render([], ListingContainer("publications-grid"))

        assert len(container.children) == 1
        assert container.fragments == []
        assert container.notice.kind == "no-results"
        assert NO_RESULTS_MESSAGE in container.__html__()
        assert "publication-card" not in container.__html__()

    def test_one_fragment_per_record_in_order(self, renderer, publications):
        container = renderer.render(publications, ListingContainer("publications-grid"))

        assert len(container.fragments) == len(publications)
        assert [f.publication.id for f in container.fragments] == ["j1", "b1", "c1"]
        assert container.notice is None

    def test_request_action_only_when_requestable(self, renderer, publications):
        container = renderer.render(publications, ListingContainer("publications-grid"))

        for fragment in container.fragments:
            requestable = fragment.publication.download_requestable
            assert fragment.has_request_action is requestable
            assert ("Request Download" in fragment.html) is requestable
            assert "Read Online" in fragment.html

    def test_render_clears_previous_content(self, renderer, publications):
        container = ListingContainer("publications-grid")
        renderer.render(publications, container)
        renderer.render(publications[:1], container)

        assert len(container.children) == 1

    def test_reveal_delay_grows_with_index(self, renderer, publications):
        container = renderer.render(publications, ListingContainer("publications-grid"))

        assert [f.reveal_delay_ms for f in container.fragments] == [100, 200, 300]
        assert "--reveal-delay: 200ms" in container.fragments[1].html


class TestCardContent:
    def test_card_exposes_record_fields(self, renderer, publications):
        html = renderer.render_card(publications[0]).html

        assert "Deep Roots of Soil Carbon" in html
        assert "Alice Smith, Bob Jones" in html
        assert "2020" in html
        assert "<em>Soil Journal</em>, 3(2), 10-20" in html
        assert html.count('class="tag"') == 2
        assert 'data-category="journal-article"' in html

    def test_read_action_bound_to_id(self, publications):
        renderer = CardRenderer(read_url=lambda pub: f"/read/{pub.id}")
        fragment = renderer.render_card(publications[1])

        assert fragment.read_url == "/read/b1"
        assert 'href="/read/b1"' in fragment.html
        assert 'data-id="b1"' in fragment.html

    def test_default_urls(self, renderer, publications):
        fragment = renderer.render_card(publications[0])

        assert fragment.read_url == "reader?id=j1"
        assert fragment.request_url == "contact?type=download&id=j1"

    def test_text_is_escaped(self, renderer):
        pub = Publication(id="x", title="<script>alert(1)</script>", authors=["O'Brien & Co"])
        html = renderer.render_card(pub).html

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "O&#39;Brien &amp; Co" in html


class TestShowError:
    def test_error_in_every_container(self, renderer, publications):
        grid = renderer.render(publications, ListingContainer("publications-grid"))
        featured = ListingContainer("featured-publications")

        renderer.show_error([grid, featured])

        for container in (grid, featured):
            assert container.fragments == []
            assert container.notice.kind == "error"
            assert LOAD_ERROR_MESSAGE in container.__html__()
