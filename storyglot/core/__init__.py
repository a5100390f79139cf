"""
Translation synchronization core.
"""

from .exceptions import (
    StoryglotError,
    StructuralError,
    UnknownLanguageError,
    TranslationGatewayError,
    TranslationInProgressError,
    TranslationInterrupted
)
from .models import (
    ImageResponse,
    TextBlock,
    ImageBlock,
    VideoBlock,
    ContentBlock,
    PageContent,
    LanguageVersion,
    block_from_dict,
    pages_from_list
)
from .fingerprint import fingerprint
from .fingerprint_cache import FingerprintCache
from .version_store import VersionStore
from .events import EventBus, Event, EventType
from .orchestrator import TranslationOrchestrator, TranslationProgress, TranslationRunStats
from .session import DocumentSession

__all__ = [
    'StoryglotError', 'StructuralError', 'UnknownLanguageError',
    'TranslationGatewayError', 'TranslationInProgressError', 'TranslationInterrupted',
    'ImageResponse', 'TextBlock', 'ImageBlock', 'VideoBlock', 'ContentBlock',
    'PageContent', 'LanguageVersion', 'block_from_dict', 'pages_from_list',
    'fingerprint', 'FingerprintCache', 'VersionStore',
    'EventBus', 'Event', 'EventType',
    'TranslationOrchestrator', 'TranslationProgress', 'TranslationRunStats',
    'DocumentSession'
]
