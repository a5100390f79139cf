"""
Document editing session.

A session owns one version store, its fingerprint cache and the
orchestrator that keeps them in sync. User edits only ever touch the
default-language version; other languages are written by translation.
"""
from typing import Callable, List, Optional, Sequence

from storyglot.config import DEFAULT_LANGUAGE, FINGERPRINT_PER_TARGET
from storyglot.utils.unified_logger import UnifiedLogger
from .events import EventBus
from .exceptions import StructuralError, UnknownLanguageError
from .fingerprint_cache import FingerprintCache
from .gateway.base import TranslationGateway
from .models import LanguageVersion, PageContent
from .orchestrator import TranslationOrchestrator
from .version_store import VersionStore


class DocumentSession:
    """Explicitly owned state for one story being edited."""

    def __init__(self,
                 default_language: str = DEFAULT_LANGUAGE,
                 pages: Optional[Sequence[PageContent]] = None,
                 gateway: Optional[TranslationGateway] = None,
                 per_target_cache: bool = FINGERPRINT_PER_TARGET,
                 event_bus: Optional[EventBus] = None,
                 logger: Optional[UnifiedLogger] = None,
                 progress_callback: Optional[Callable[[float], None]] = None):
        self.default_language = default_language
        self.store = VersionStore(LanguageVersion(language=default_language, pages=list(pages or [])))
        self.cache = FingerprintCache(per_target=per_target_cache)
        self.orchestrator = TranslationOrchestrator(
            self.store, gateway, self.cache,
            event_bus=event_bus, logger=logger, progress_callback=progress_callback
        )

    @property
    def languages(self) -> List[str]:
        """Default language first, the others sorted."""
        others = sorted(self.store.list_languages() - {self.default_language})
        return [self.default_language] + others

    @property
    def is_translating(self) -> bool:
        return self.orchestrator.is_translating

    @property
    def progress(self) -> float:
        return self.orchestrator.progress

    def get_version(self, language: str) -> LanguageVersion:
        version = self.store.get_version(language)
        if version is None:
            raise UnknownLanguageError(language)
        return version

    def edit_page(self, page_index: int, content: PageContent) -> None:
        """Overwrite a default-language page (creating it if needed)."""
        self.store.upsert_page(self.default_language, page_index, content)

    def add_page(self, content: Optional[PageContent] = None) -> int:
        return self.store.append_page(self.default_language, content)

    def delete_page(self, page_index: int) -> None:
        """Delete a page from every language and re-align the cache."""
        if not 0 <= page_index < self.store.page_count(self.default_language):
            raise StructuralError(f"Page {page_index} does not exist", page_index=page_index)
        self.store.delete_page(page_index)
        self.cache.remove_page(page_index)

    def add_language(self, language: str) -> bool:
        if not language or not language.strip():
            raise StructuralError("Language name must not be empty")
        return self.store.add_language(language.strip())

    def remove_language(self, language: str) -> None:
        if language == self.default_language:
            raise StructuralError("The default language cannot be removed")
        self.store.remove_language(language)
        self.cache.remove_language(language)

    def request_cancel(self) -> None:
        self.orchestrator.request_cancel()

    async def translate_all(self,
                            target_languages: Optional[Sequence[str]] = None,
                            source_language: Optional[str] = None,
                            check_interruption_callback: Optional[Callable[[], bool]] = None,
                            gateway: Optional[TranslationGateway] = None) -> VersionStore:
        """Translate into ``target_languages`` (all known languages by default)."""
        source_language = source_language or self.default_language
        if target_languages is None:
            target_languages = [lang for lang in self.languages if lang != source_language]
        return await self.orchestrator.translate_all(
            source_language, target_languages,
            check_interruption_callback=check_interruption_callback,
            gateway=gateway
        )

    def to_dict(self) -> dict:
        return {
            "default_language": self.default_language,
            "languages": self.languages,
            **self.store.to_dict()
        }
