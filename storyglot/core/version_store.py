"""
Version store: every language version of the document, keyed by language.

All mutation goes through this class. Each call holds the store lock for
its whole duration, so a reader never observes a half-written page.
"""
import threading
from typing import Any, Dict, List, Optional, Set

from .exceptions import StructuralError, UnknownLanguageError
from .models import LanguageVersion, PageContent


class VersionStore:
    """Thread-safe collection of language versions."""

    def __init__(self, default_version: Optional[LanguageVersion] = None):
        self._versions: Dict[str, LanguageVersion] = {}
        self._lock = threading.RLock()
        if default_version is not None:
            self._versions[default_version.language] = default_version.copy()

    def get_version(self, language: str) -> Optional[LanguageVersion]:
        """Return a copy of the version for ``language``, or None."""
        with self._lock:
            version = self._versions.get(language)
            return version.copy() if version else None

    def has_language(self, language: str) -> bool:
        with self._lock:
            return language in self._versions

    def list_languages(self) -> Set[str]:
        with self._lock:
            return set(self._versions)

    def get_page(self, language: str, page_index: int) -> Optional[PageContent]:
        with self._lock:
            version = self._versions.get(language)
            if version is None or not 0 <= page_index < len(version.pages):
                return None
            return version.pages[page_index].copy()

    def page_count(self, language: str) -> int:
        with self._lock:
            version = self._versions.get(language)
            return len(version.pages) if version else 0

    def upsert_page(self, language: str, page_index: int, content: PageContent) -> None:
        """Set page ``page_index`` of ``language``.

        Missing versions are created and short page lists are padded with
        empty pages so indices stay aligned across languages.
        """
        if not isinstance(page_index, int) or page_index < 0:
            raise StructuralError(f"Invalid page index: {page_index!r}", page_index=page_index)
        with self._lock:
            version = self._versions.get(language)
            if version is None:
                version = LanguageVersion(language=language)
                self._versions[language] = version
            while len(version.pages) <= page_index:
                version.pages.append(PageContent())
            version.pages[page_index] = content.copy()

    # Edit handlers call it by this name
    update_page = upsert_page

    def append_page(self, language: str, content: Optional[PageContent] = None) -> int:
        """Append a page to ``language`` and return its index."""
        with self._lock:
            index = self.page_count(language)
            self.upsert_page(language, index, content or PageContent())
            return index

    def delete_page(self, page_index: int) -> None:
        """Remove ``page_index`` from every language version."""
        with self._lock:
            for version in self._versions.values():
                if 0 <= page_index < len(version.pages):
                    del version.pages[page_index]

    def truncate(self, language: str, page_count: int) -> int:
        """Drop pages of ``language`` beyond ``page_count``. Returns how many were dropped."""
        if not isinstance(page_count, int) or page_count < 0:
            raise StructuralError(f"Invalid page count: {page_count!r}")
        with self._lock:
            version = self._versions.get(language)
            if version is None or len(version.pages) <= page_count:
                return 0
            dropped = len(version.pages) - page_count
            del version.pages[page_count:]
            return dropped

    def set_version(self, version: LanguageVersion) -> None:
        with self._lock:
            self._versions[version.language] = version.copy()

    def add_language(self, language: str) -> bool:
        """Create an empty version. Returns False if it already existed."""
        with self._lock:
            if language in self._versions:
                return False
            self._versions[language] = LanguageVersion(language=language)
            return True

    def remove_language(self, language: str) -> None:
        with self._lock:
            if language not in self._versions:
                raise UnknownLanguageError(language)
            del self._versions[language]

    def snapshot(self) -> List[LanguageVersion]:
        with self._lock:
            return [version.copy() for version in self._versions.values()]

    def to_dict(self) -> Dict[str, Any]:
        return {"language_versions": [version.to_dict() for version in self.snapshot()]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionStore":
        if not isinstance(data, dict) or not isinstance(data.get("language_versions"), list):
            raise StructuralError("Document must have a 'language_versions' list")
        store = cls()
        for raw in data["language_versions"]:
            version = LanguageVersion.from_dict(raw)
            if store.has_language(version.language):
                raise StructuralError(f"Duplicate language version: {version.language}")
            store.set_version(version)
        return store
