"""
StoryGlot - keeps every language version of an illustrated story in sync
with the default-language document, translating only what changed.
"""

__version__ = "1.0.0"
