"""Unit tests for document sessions (user edit handlers)."""

import pytest

from storyglot.core.exceptions import StructuralError, UnknownLanguageError
from storyglot.core.models import PageContent, TextBlock
from storyglot.core.session import DocumentSession

from conftest import FakeGateway


def _page(*texts):
    return PageContent(blocks=[TextBlock(t) for t in texts])


class TestDocumentSession:
    """Test editing operations on a session."""

    def test_languages_default_first(self):
        session = DocumentSession("English", [_page("Hi")])
        session.add_language("Spanish")
        session.add_language("French")

        assert session.languages == ["English", "French", "Spanish"]

    def test_edit_and_add_page(self):
        session = DocumentSession("English", [_page("Hi")])
        session.edit_page(0, _page("Hello"))
        index = session.add_page(_page("Bye"))

        version = session.get_version("English")
        assert index == 1
        assert [p.blocks[0].content for p in version.pages] == ["Hello", "Bye"]

    def test_get_unknown_version(self):
        session = DocumentSession("English")
        with pytest.raises(UnknownLanguageError):
            session.get_version("French")

    def test_cannot_remove_default_language(self):
        session = DocumentSession("English")
        with pytest.raises(StructuralError):
            session.remove_language("English")

    def test_empty_language_name_rejected(self):
        session = DocumentSession("English")
        with pytest.raises(StructuralError):
            session.add_language("  ")

    def test_delete_missing_page(self):
        session = DocumentSession("English", [_page("Hi")])
        with pytest.raises(StructuralError):
            session.delete_page(3)

    @pytest.mark.asyncio
    async def test_translate_all_defaults_to_known_languages(self):
        """Without explicit targets every non-source language is translated."""
        gateway = FakeGateway()
        session = DocumentSession("English", [_page("Hello")], gateway=gateway)
        session.add_language("French")
        session.add_language("German")

        await session.translate_all()

        assert session.get_version("French").pages[0].blocks[0].content == "[French] Hello"
        assert session.get_version("German").pages[0].blocks[0].content == "[German] Hello"
        assert session.progress == 100

    @pytest.mark.asyncio
    async def test_delete_page_keeps_later_pages_cached(self):
        """After deleting a page the following pages still reuse their translations."""
        gateway = FakeGateway()
        session = DocumentSession("English", [_page("A"), _page("B"), _page("C")], gateway=gateway)

        await session.translate_all(["French"])
        session.delete_page(0)
        gateway.calls.clear()
        await session.translate_all(["French"])

        assert gateway.calls == []
        french = session.get_version("French")
        assert [p.blocks[0].content for p in french.pages] == ["[French] B", "[French] C"]

    @pytest.mark.asyncio
    async def test_removed_language_starts_fresh(self):
        gateway = FakeGateway()
        session = DocumentSession("English", [_page("A")], gateway=gateway)

        await session.translate_all(["French"])
        session.remove_language("French")
        gateway.calls.clear()
        await session.translate_all(["French"])

        assert gateway.calls == [("A", "English", "French")]

    def test_to_dict(self):
        session = DocumentSession("English", [_page("Hi")])
        data = session.to_dict()

        assert data["default_language"] == "English"
        assert data["languages"] == ["English"]
        assert data["language_versions"][0]["pages"][0]["blocks"][0]["content"] == "Hi"
