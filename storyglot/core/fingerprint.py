"""
Content fingerprinting for change detection.

MD5 is used for speed and stability across runs; it only needs to tell
whether a source block changed since it was last translated.
"""
import hashlib


def fingerprint(content: str) -> str:
    """Return the hex MD5 digest of ``content`` (UTF-8)."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()
