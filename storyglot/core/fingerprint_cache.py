"""
Fingerprint cache: last successfully translated source fingerprint per block.

The cache never stores translated text (that lives in the version store).
It only answers "has this source block changed since it was translated?".
"""
import threading
from typing import Dict, Optional, Tuple

CacheKey = Tuple


class FingerprintCache:
    """Thread-safe map from block coordinates to source fingerprints.

    With ``per_target=True`` (default) keys are
    ``(source_language, target_language, page_index, block_index)``, so a
    freshly added target language never inherits another language's hit.
    With ``per_target=False`` keys are ``(source_language, page_index,
    block_index)`` and one fingerprint is shared by all target languages.
    """

    def __init__(self, per_target: bool = True):
        self.per_target = per_target
        self._entries: Dict[CacheKey, str] = {}
        self._lock = threading.RLock()

    def key(self, source_language: str, target_language: str,
            page_index: int, block_index: int) -> CacheKey:
        if self.per_target:
            return (source_language, target_language, page_index, block_index)
        return (source_language, page_index, block_index)

    def get(self, source_language: str, target_language: str,
            page_index: int, block_index: int) -> Optional[str]:
        with self._lock:
            return self._entries.get(self.key(source_language, target_language, page_index, block_index))

    def set(self, source_language: str, target_language: str,
            page_index: int, block_index: int, value: str) -> None:
        with self._lock:
            self._entries[self.key(source_language, target_language, page_index, block_index)] = value

    def discard(self, source_language: str, target_language: str,
                page_index: int, block_index: int) -> bool:
        """Forget one entry. Returns True if it existed."""
        with self._lock:
            return self._entries.pop(
                self.key(source_language, target_language, page_index, block_index), None
            ) is not None

    def remove_page(self, page_index: int) -> int:
        """Drop entries of a deleted page and shift later pages down by one.

        Returns:
            Number of entries dropped
        """
        page_pos = 2 if self.per_target else 1
        with self._lock:
            shifted: Dict[CacheKey, str] = {}
            dropped = 0
            for key, value in self._entries.items():
                page = key[page_pos]
                if page == page_index:
                    dropped += 1
                    continue
                if page > page_index:
                    key = key[:page_pos] + (page - 1,) + key[page_pos + 1:]
                shifted[key] = value
            self._entries = shifted
            return dropped

    def remove_language(self, language: str) -> None:
        """Forget every entry that involves ``language`` as source or target."""
        with self._lock:
            self._entries = {
                key: value for key, value in self._entries.items()
                if language not in (key[:2] if self.per_target else key[:1])
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def entries(self) -> Dict[CacheKey, str]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
