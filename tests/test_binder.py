"""
Unit tests for the HTML binder and edit-link decoration.
"""

import pytest

from blackstar_client.application.urls import ApiRoutes
from blackstar_client.client import Client
from blackstar_client.application.dto import ClientOptions
from blackstar_client.domain.errors import BinderError
from blackstar_client.domain.models import Chunk
from blackstar_client.infrastructure.binding.binder import HtmlBinder, chunk_markup


PAGE = (
    "<!DOCTYPE html><html><body>"
    '<h1 data-blackstar-name="index-heading">placeholder <b>old</b></h1>'
    '<div data-blackstar-name="index-content"><div>nested</div></div>'
    '<p class="static">Keep &amp; me</p>'
    "</body></html>"
)


@pytest.fixture
def chunks():
    return [
        Chunk(id=6, name="index-heading", html="The heading"),
        Chunk(id=8, name="index-content", html="<p>Seebeck</p>"),
        Chunk(id=10, name="not-on-page", html="unused"),
    ]


class TestBind:

    def test_fills_named_elements(self, chunks):
        out = HtmlBinder(ApiRoutes("http://h")).bind(chunks, PAGE)

        assert '<h1 data-blackstar-name="index-heading" data-blackstar-id="6">The heading</h1>' in out
        assert '<div data-blackstar-name="index-content" data-blackstar-id="8"><p>Seebeck</p></div>' in out
        assert "placeholder" not in out
        assert "nested" not in out

    def test_untouched_markup_is_preserved(self, chunks):
        out = HtmlBinder(ApiRoutes("http://h")).bind(chunks, PAGE)
        assert out.startswith("<!DOCTYPE html><html><body>")
        assert '<p class="static">Keep &amp; me</p>' in out
        assert out.endswith("</body></html>")

    def test_no_edit_links_by_default(self, chunks):
        out = HtmlBinder(ApiRoutes("http://h")).bind(chunks, PAGE)
        assert "blackstar-edit-link" not in out

    def test_edit_links_when_enabled(self, chunks):
        out = HtmlBinder(ApiRoutes("http://h"), show_edit_controls=True).bind(chunks, PAGE)
        assert 'The heading <a class="blackstar-edit-link" target="_admin" href="http://h/chunk/6">edit</a></h1>' in out
        assert out.count("blackstar-edit-link") == 2

    def test_selector_matches_element_id(self):
        page = '<section id="hero"></section><section id="other">x</section>'
        chunk = Chunk(id=3, name="hero-text", html="Hi")
        out = HtmlBinder(ApiRoutes("http://h")).bind([chunk], page, selector=lambda c: "hero")
        assert out == '<section id="hero" data-blackstar-id="3">Hi</section><section id="other">x</section>'

    def test_first_matching_element_only(self):
        page = '<span data-blackstar-name="a">1</span><span data-blackstar-name="a">2</span>'
        out = HtmlBinder(ApiRoutes("http://h")).bind([Chunk(id=1, name="a", html="X")], page)
        assert out == '<span data-blackstar-name="a" data-blackstar-id="1">X</span><span data-blackstar-name="a">2</span>'

    def test_unsaved_chunk_gets_no_id(self):
        binder = HtmlBinder(ApiRoutes("http://h"), show_edit_controls=True)
        out = binder.bind([Chunk(id=None, name="a", html="X")], '<p data-blackstar-name="a">old</p>')
        assert out == '<p data-blackstar-name="a">X</p>'

    def test_rejects_non_string_document(self, chunks):
        with pytest.raises(BinderError):
            HtmlBinder(ApiRoutes("http://h")).bind(chunks, None)


class TestBindOmittedEndTags:

    @pytest.fixture
    def binder(self):
        return HtmlBinder(ApiRoutes("http://h"))

    def test_paragraph_closed_by_next_paragraph(self, binder):
        page = '<p data-blackstar-name="a">old<p>after</p><footer>tail</footer>'
        out = binder.bind([Chunk(id=1, name="a", html="X")], page)
        assert out == '<p data-blackstar-name="a" data-blackstar-id="1">X</p><p>after</p><footer>tail</footer>'

    def test_paragraph_closed_by_block_inside_inline(self, binder):
        page = '<p data-blackstar-name="a"><b>old<div>after</div>'
        out = binder.bind([Chunk(id=1, name="a", html="X")], page)
        assert out == '<p data-blackstar-name="a" data-blackstar-id="1">X</p><div>after</div>'

    def test_list_item_closed_by_sibling(self, binder):
        page = '<ul><li data-blackstar-name="a">old<li>second</ul><span>tail</span>'
        out = binder.bind([Chunk(id=1, name="a", html="X")], page)
        assert out == '<ul><li data-blackstar-name="a" data-blackstar-id="1">X</li><li>second</ul><span>tail</span>'

    def test_nested_list_does_not_close_item(self, binder):
        page = '<ul><li data-blackstar-name="a"><ul><li>inner</ul></li><li>next</ul>'
        out = binder.bind([Chunk(id=1, name="a", html="X")], page)
        assert out == '<ul><li data-blackstar-name="a" data-blackstar-id="1">X</li><li>next</ul>'

    def test_closed_by_parent_end_tag(self, binder):
        page = '<div><p data-blackstar-name="a">old</div><span>tail</span>'
        out = binder.bind([Chunk(id=1, name="a", html="X")], page)
        assert out == '<div><p data-blackstar-name="a" data-blackstar-id="1">X</p></div><span>tail</span>'

    def test_closed_at_end_of_document(self, binder):
        out = binder.bind([Chunk(id=1, name="a", html="X")], '<p data-blackstar-name="a">old')
        assert out == '<p data-blackstar-name="a" data-blackstar-id="1">X</p>'

    def test_later_targets_still_bound(self, binder):
        page = '<p data-blackstar-name="a">old<p data-blackstar-name="b">older'
        out = binder.bind([Chunk(id=1, name="a", html="X"), Chunk(id=2, name="b", html="Y")], page)
        assert out == (
            '<p data-blackstar-name="a" data-blackstar-id="1">X</p>'
            '<p data-blackstar-name="b" data-blackstar-id="2">Y</p>'
        )


class TestAddEditLinks:

    def test_decorates_existing_ids(self):
        page = '<div data-blackstar-id="12">Text<br></div>'
        out = HtmlBinder(ApiRoutes("http://h"), show_edit_controls=True).add_edit_links(page)
        assert out == '<div data-blackstar-id="12">Text<br> <a class="blackstar-edit-link" target="_admin" href="http://h/chunk/12">edit</a></div>'

    def test_disabled_returns_document_unchanged(self):
        page = '<div data-blackstar-id="12">Text</div>'
        assert HtmlBinder(ApiRoutes("http://h")).add_edit_links(page) == page

    def test_client_delegates(self):
        client = Client("http://h", ClientOptions(show_edit_controls=True))
        out = client.add_edit_links('<i data-blackstar-id="1"></i>')
        assert 'href="http://h/chunk/1"' in out


class TestChunkMarkup:

    def test_prefers_html(self):
        assert chunk_markup(Chunk(id=1, name="a", value="v", html="<b>h</b>")) == "<b>h</b>"

    def test_escapes_value(self):
        assert chunk_markup(Chunk(id=1, name="a", value="<x>")) == "&lt;x&gt;"

    def test_empty(self):
        assert chunk_markup(Chunk(id=1, name="a")) == ""
