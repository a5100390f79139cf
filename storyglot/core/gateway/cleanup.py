"""
Pre- and post-processing of text sent to a translation gateway.

Long blocks are cut into fixed-size character chunks. Model output is
scrubbed of the commentary chat models tend to add around a translation.
"""
import re
from typing import List

_META_PREFIX = re.compile(r"^I'll provide feedback.*?(?=Once upon a time)", re.IGNORECASE)
_NOTE_LINE = re.compile(r"Note:.*?(?=\n|$)", re.IGNORECASE)
_PARENTHETICAL = re.compile(r"\( .*?\)")
_DUPLICATE_WORDS = re.compile(r"\b(\S+)(?:\s+\1\b)+")
_WHITESPACE = re.compile(r"\s+")
_REPEATED_SECTION = re.compile(r"(.{100,}?)\1+")


def split_into_chunks(text: str, chunk_size: int) -> List[str]:
    """Cut ``text`` into consecutive slices of at most ``chunk_size`` characters."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


def clean_translation(text: str) -> str:
    """Strip model commentary, duplicated words and repeated sections."""
    cleaned = _META_PREFIX.sub('', text)
    cleaned = _NOTE_LINE.sub('', cleaned)
    cleaned = _PARENTHETICAL.sub('', cleaned)
    cleaned = '\n'.join(line for line in cleaned.split('\n') if line.strip())
    cleaned = _DUPLICATE_WORDS.sub(r'\1', cleaned)
    cleaned = _WHITESPACE.sub(' ', cleaned)
    cleaned = _REPEATED_SECTION.sub(r'\1', cleaned)
    return cleaned.strip()
