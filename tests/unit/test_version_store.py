"""Unit tests for the version store."""

import threading

import pytest

from storyglot.core.exceptions import StructuralError, UnknownLanguageError
from storyglot.core.models import LanguageVersion, PageContent, TextBlock
from storyglot.core.version_store import VersionStore


def _page(*texts):
    return PageContent(blocks=[TextBlock(t) for t in texts])


class TestVersionStore:
    """Test reads and writes of language versions."""

    def test_get_version_returns_copy(self):
        """Mutating a returned version does not touch the store."""
        store = VersionStore(LanguageVersion("English", [_page("Hello")]))
        version = store.get_version("English")
        version.pages.append(_page("extra"))

        assert store.page_count("English") == 1

    def test_missing_language(self):
        store = VersionStore()
        assert store.get_version("French") is None
        assert store.get_page("French", 0) is None
        assert store.page_count("French") == 0

    def test_upsert_creates_and_pads(self):
        """Writing page 2 of a new language pads pages 0 and 1 with empty pages."""
        store = VersionStore()
        store.upsert_page("French", 2, _page("Bonjour"))

        version = store.get_version("French")
        assert len(version.pages) == 3
        assert version.pages[0].blocks == []
        assert version.pages[2].blocks[0].content == "Bonjour"

    def test_upsert_replaces_existing_page(self):
        store = VersionStore(LanguageVersion("English", [_page("a"), _page("b")]))
        store.update_page("English", 1, _page("c"))

        assert store.get_page("English", 1).blocks[0].content == "c"
        assert store.page_count("English") == 2

    def test_negative_index_raises(self):
        store = VersionStore()
        with pytest.raises(StructuralError):
            store.upsert_page("English", -1, _page("x"))

    def test_append_page(self):
        store = VersionStore(LanguageVersion("English", [_page("a")]))
        index = store.append_page("English")

        assert index == 1
        assert store.get_page("English", 1).blocks == []

    def test_delete_page_from_every_version(self):
        """Deleting a page keeps indices aligned across languages."""
        store = VersionStore(LanguageVersion("English", [_page("a"), _page("b")]))
        store.set_version(LanguageVersion("French", [_page("fa"), _page("fb")]))

        store.delete_page(0)

        assert store.get_page("English", 0).blocks[0].content == "b"
        assert store.get_page("French", 0).blocks[0].content == "fb"
        assert store.page_count("French") == 1

    def test_add_and_remove_language(self):
        store = VersionStore(LanguageVersion("English"))

        assert store.add_language("French") is True
        assert store.add_language("French") is False
        assert store.list_languages() == {"English", "French"}

        store.remove_language("French")
        assert not store.has_language("French")

    def test_remove_unknown_language_raises(self):
        store = VersionStore()
        with pytest.raises(UnknownLanguageError):
            store.remove_language("Klingon")

    def test_dict_round_trip(self):
        store = VersionStore(LanguageVersion("English", [_page("Hello")]))
        store.upsert_page("French", 0, _page("Bonjour"))

        restored = VersionStore.from_dict(store.to_dict())

        assert restored.list_languages() == {"English", "French"}
        assert restored.get_page("French", 0).blocks[0].content == "Bonjour"

    def test_from_dict_rejects_duplicates(self):
        data = {"language_versions": [
            {"language": "English", "pages": []},
            {"language": "English", "pages": []}
        ]}
        with pytest.raises(StructuralError):
            VersionStore.from_dict(data)

    def test_from_dict_requires_versions_list(self):
        with pytest.raises(StructuralError):
            VersionStore.from_dict({"pages": []})

    def test_concurrent_writers_keep_all_pages(self):
        """Writes from several threads are all applied."""
        store = VersionStore()

        def write(offset):
            for i in range(50):
                store.upsert_page("French", offset * 50 + i, _page(str(i)))

        threads = [threading.Thread(target=write, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        version = store.get_version("French")
        assert len(version.pages) == 200
        assert all(page.blocks for page in version.pages)

    def test_truncate(self):
        store = VersionStore(LanguageVersion("French", [_page("a"), _page("b"), _page("c")]))

        assert store.truncate("French", 1) == 2
        assert store.page_count("French") == 1
        assert store.truncate("French", 5) == 0
        assert store.truncate("German", 0) == 0

    def test_truncate_rejects_negative_count(self):
        store = VersionStore()
        with pytest.raises(StructuralError):
            store.truncate("French", -1)
