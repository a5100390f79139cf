"""
Translation orchestrator: brings every target language in line with the
source-language document.

Pages are translated one block at a time, in order, and each rebuilt page
is committed to the version store in a single call. Text blocks whose
source fingerprint matches the cache reuse the translation already stored
for that position instead of calling the gateway again.
"""

import threading
import time
from dataclasses import dataclass, field, asdict
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .events import Event, EventBus, EventType
from .exceptions import StructuralError, TranslationInProgressError, TranslationInterrupted
from .fingerprint import fingerprint
from .fingerprint_cache import FingerprintCache
from .gateway.base import TranslationGateway
from .models import LanguageVersion, PageContent, TextBlock
from .version_store import VersionStore
from storyglot.config import FINGERPRINT_PER_TARGET
from storyglot.utils.unified_logger import LogType, UnifiedLogger, get_logger


@dataclass
class TranslationRunStats:
    """Counters for one translate-all run.

    ``status`` is one of idle, running, completed, interrupted, failed, noop.
    """
    status: str = "idle"
    total_units: int = 0
    completed_units: int = 0
    gateway_calls: int = 0
    translated: int = 0
    reused: int = 0
    failed: int = 0
    carried_over: int = 0
    pages_committed: int = 0
    error: Optional[str] = None
    start_time: float = field(default_factory=time.time)
    elapsed_time: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


class TranslationProgress:
    """Progress in [0, 100] that never goes backwards, plus a busy flag.

    Safe to poll from another thread while a run is in flight.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._progress = 0.0
        self._is_translating = False

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    @property
    def is_translating(self) -> bool:
        with self._lock:
            return self._is_translating

    def start(self) -> None:
        with self._lock:
            self._progress = 0.0
            self._is_translating = True

    def advance(self, value: float) -> float:
        with self._lock:
            self._progress = max(self._progress, min(100.0, max(0.0, value)))
            return self._progress

    def complete(self) -> float:
        return self.advance(100.0)

    def finish(self) -> None:
        with self._lock:
            self._is_translating = False

    def to_dict(self) -> Dict:
        with self._lock:
            return {"progress": self._progress, "is_translating": self._is_translating}


class TranslationOrchestrator:
    """Coordinates incremental translation of a version store.

    One run at a time: a second ``translate_all`` while busy raises
    TranslationInProgressError.
    """

    def __init__(self,
                 store: VersionStore,
                 gateway: Optional[TranslationGateway] = None,
                 cache: Optional[FingerprintCache] = None,
                 event_bus: Optional[EventBus] = None,
                 logger: Optional[UnifiedLogger] = None,
                 progress_callback: Optional[Callable[[float], None]] = None):
        """
        Args:
            store: Version store to read the source from and commit pages to
            gateway: Translation gateway used for changed text blocks
            cache: Fingerprint cache (a per-target cache is created if omitted)
            event_bus: Optional event bus for observability
            logger: Logger, defaults to the global unified logger
            progress_callback: Called with the percentage after every page commit
        """
        self.store = store
        self.gateway = gateway
        self.cache = cache if cache is not None else FingerprintCache(per_target=FINGERPRINT_PER_TARGET)
        self.event_bus = event_bus
        self.logger = logger
        self.progress_callback = progress_callback
        self.tracker = TranslationProgress()
        self.last_run = TranslationRunStats()
        self._run_lock = threading.Lock()
        self._cancel_requested = threading.Event()

    @property
    def progress(self) -> float:
        return self.tracker.progress

    @property
    def is_translating(self) -> bool:
        return self.tracker.is_translating

    def request_cancel(self) -> None:
        """Ask the running translation to stop at its next checkpoint."""
        self._cancel_requested.set()

    def _log(self) -> UnifiedLogger:
        return self.logger or get_logger()

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self.event_bus:
            self.event_bus.publish(Event(type=event_type, data=data, source="orchestrator"))

    def _should_interrupt(self, check_interruption_callback: Optional[Callable[[], bool]]) -> bool:
        if self._cancel_requested.is_set():
            return True
        return bool(check_interruption_callback and check_interruption_callback())

    def _ensure_source(self, source_language: str,
                       default_document: Optional[Sequence[PageContent]]) -> LanguageVersion:
        version = self.store.get_version(source_language)
        if version is not None:
            return version
        if default_document is None:
            raise StructuralError(f"No {source_language} version to translate from and no document given")
        if not all(isinstance(page, PageContent) for page in default_document):
            raise StructuralError("Default document must be a sequence of pages")
        self.store.set_version(LanguageVersion(language=source_language, pages=list(default_document)))
        return self.store.get_version(source_language)

    def _publish_progress(self, completed: int, total: int) -> None:
        percentage = self.tracker.advance(completed / total * 100 if total else 100.0)
        self._log().debug("Progress Update", LogType.PROGRESS, {
            'current': completed, 'total': total, 'percentage': percentage
        })
        self._emit(EventType.PROGRESS_UPDATED, {
            "completed_units": completed, "total_units": total, "progress": percentage
        })
        if self.progress_callback:
            self.progress_callback(percentage)

    async def translate_all(self,
                            source_language: str,
                            target_languages: Sequence[str],
                            default_document: Optional[Sequence[PageContent]] = None,
                            check_interruption_callback: Optional[Callable[[], bool]] = None,
                            gateway: Optional[TranslationGateway] = None) -> VersionStore:
        """
        Translate the source version into every target language.

        Args:
            source_language: Language whose version is the source of truth
            target_languages: Languages to produce, processed in this order
            default_document: Pages used to seed the source version if missing
            check_interruption_callback: Polled before every page and gateway call
            gateway: Gateway for this run only (defaults to ``self.gateway``)

        Returns:
            The version store, holding every page committed so far

        Raises:
            TranslationInProgressError: If a run is already in flight
            StructuralError: If there is no source version to translate from
        """
        if not self._run_lock.acquire(blocking=False):
            raise TranslationInProgressError("A translation is already running for this document")

        stats = TranslationRunStats(status="running")
        self.last_run = stats
        self._cancel_requested.clear()
        self.tracker.start()
        log = self._log()

        try:
            if not target_languages:
                stats.status = "noop"
                self.tracker.complete()
                return self.store

            source_pages = self._ensure_source(source_language, default_document).pages

            targets: List[str] = []
            for language in target_languages:
                if language != source_language and language not in targets:
                    targets.append(language)

            if gateway is None:
                gateway = self.gateway
            if targets and gateway is None:
                raise StructuralError("No translation gateway configured")

            stats.total_units = sum(len(page.blocks) for page in source_pages) * len(targets)
            if stats.total_units == 0:
                self.tracker.complete()

            log.info("Translation Started", LogType.TRANSLATION_START, {
                'source_language': source_language,
                'target_languages': targets,
                'total_units': stats.total_units
            })
            self._emit(EventType.TRANSLATION_STARTED, {
                "source_language": source_language,
                "target_languages": targets,
                "total_units": stats.total_units
            })

            await self._run(source_language, targets, source_pages, gateway, stats,
                            check_interruption_callback)

            stats.status = "completed"
            self.tracker.complete()
            if self.progress_callback:
                self.progress_callback(100.0)
            log.info("Translation Completed", LogType.TRANSLATION_END, {'stats': stats.to_dict()})
            self._emit(EventType.TRANSLATION_COMPLETED, stats.to_dict())

        except TranslationInterrupted:
            stats.status = "interrupted"
            log.warning(f"Translation interrupted after {stats.pages_committed} page commit(s)")
            self._emit(EventType.TRANSLATION_INTERRUPTED, stats.to_dict())

        except StructuralError as e:
            stats.status = "failed"
            stats.error = str(e)
            raise

        except Exception as e:
            # Committed pages stay in the store; nothing is rolled back
            stats.status = "failed"
            stats.error = str(e)
            log.error("Translation failed", LogType.ERROR_DETAIL, {'details': str(e)})
            self._emit(EventType.TRANSLATION_FAILED, stats.to_dict())

        finally:
            stats.elapsed_time = time.time() - stats.start_time
            self.tracker.finish()
            self._run_lock.release()

        return self.store

    async def _run(self, source_language: str, targets: List[str],
                   source_pages: List[PageContent], gateway: TranslationGateway,
                   stats: TranslationRunStats,
                   check_interruption_callback: Optional[Callable[[], bool]]) -> None:
        for target_language in targets:
            self.store.add_language(target_language)
            self._emit(EventType.LANGUAGE_STARTED, {"target_language": target_language})

            for page_index, page in enumerate(source_pages):
                if self._should_interrupt(check_interruption_callback):
                    raise TranslationInterrupted()

                rebuilt, cache_updates = await self._translate_page(
                    source_language, target_language, page_index, page, gateway,
                    stats, check_interruption_callback
                )

                self.store.upsert_page(target_language, page_index, rebuilt)
                # Fingerprints only change once their page is visible
                for block_index, value in cache_updates:
                    if value is None:
                        self.cache.discard(source_language, target_language, page_index, block_index)
                    else:
                        self.cache.set(source_language, target_language, page_index, block_index, value)

                stats.pages_committed += 1
                stats.completed_units += len(page.blocks)
                self._log().debug(f"Committed {target_language} page {page_index + 1}/{len(source_pages)}",
                                  LogType.PAGE_COMMIT)
                self._emit(EventType.PAGE_COMMITTED, {
                    "target_language": target_language, "page_index": page_index
                })
                self._publish_progress(stats.completed_units, stats.total_units)

            dropped = self.store.truncate(target_language, len(source_pages))
            if dropped:
                self._log().debug(f"Dropped {dropped} extra {target_language} page(s)", LogType.PAGE_COMMIT)

    async def _translate_page(self, source_language: str, target_language: str,
                              page_index: int, page: PageContent,
                              gateway: TranslationGateway, stats: TranslationRunStats,
                              check_interruption_callback: Optional[Callable[[], bool]]
                              ) -> Tuple[PageContent, List[Tuple[int, Optional[str]]]]:
        """Rebuild one page for ``target_language``.

        Returns:
            The rebuilt page and the (block_index, fingerprint) pairs to apply
            to the cache once the page is committed; None drops the entry
        """
        previous_page = self.store.get_page(target_language, page_index)
        previous_blocks = previous_page.blocks if previous_page else []
        blocks = []
        cache_updates: List[Tuple[int, Optional[str]]] = []

        for block_index, block in enumerate(page.blocks):
            if not isinstance(block, TextBlock) or block.generating or not block.content.strip():
                # Media, provisional and empty text pass through as the same object
                blocks.append(block)
                # The target now holds untranslated content at this position
                cache_updates.append((block_index, None))
                stats.carried_over += 1
                continue

            block_fp = fingerprint(block.content)
            cached_fp = self.cache.get(source_language, target_language, page_index, block_index)
            previous = previous_blocks[block_index] if block_index < len(previous_blocks) else None

            if cached_fp == block_fp and isinstance(previous, TextBlock):
                blocks.append(block.with_content(previous.content))
                stats.reused += 1
                self._emit(EventType.BLOCK_REUSED, {
                    "target_language": target_language, "page_index": page_index, "block_index": block_index
                })
                continue

            if self._should_interrupt(check_interruption_callback):
                raise TranslationInterrupted()

            stats.gateway_calls += 1
            try:
                translated = await gateway.translate(block.content, source_language, target_language)
            except Exception as e:
                self._log().warning(
                    f"Block {block_index} of page {page_index} could not be translated to "
                    f"{target_language}, keeping source text: {e}"
                )
                blocks.append(block)
                cache_updates.append((block_index, None))
                stats.failed += 1
                self._emit(EventType.BLOCK_FAILED, {
                    "target_language": target_language, "page_index": page_index,
                    "block_index": block_index, "error": str(e)
                })
                continue

            blocks.append(block.with_content(translated))
            cache_updates.append((block_index, block_fp))
            stats.translated += 1
            self._emit(EventType.BLOCK_TRANSLATED, {
                "target_language": target_language, "page_index": page_index, "block_index": block_index
            })

        return PageContent(blocks=blocks), cache_updates
