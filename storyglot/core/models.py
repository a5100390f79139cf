"""
Data model for paginated, multi-language story documents.

A page is an ordered list of content blocks. Blocks are immutable: a
translation produces a new text block, while image and video blocks are
carried into other languages as the very same object.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union

from .exceptions import StructuralError


@dataclass(frozen=True)
class ImageResponse:
    """Generated image payload (base64 raster plus optional timings)."""
    b64_json: str
    timings: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"b64_json": self.b64_json}
        if self.timings is not None:
            data["timings"] = dict(self.timings)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageResponse":
        if not isinstance(data, dict) or not isinstance(data.get("b64_json"), str):
            raise StructuralError("Image content must be an object with a 'b64_json' string")
        timings = data.get("timings")
        return cls(b64_json=data["b64_json"], timings=dict(timings) if timings else None)


@dataclass(frozen=True)
class TextBlock:
    """Text block. ``context`` records the selection it was generated from."""
    content: str
    generating: bool = False
    context: Optional[str] = None
    type: str = field(default="text", init=False)

    def with_content(self, content: str) -> "TextBlock":
        return replace(self, content=content)

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": "text", "content": self.content, "generating": self.generating}
        if self.context is not None:
            data["context"] = self.context
        return data


@dataclass(frozen=True)
class ImageBlock:
    """Image block; ``content`` is None until generation finishes."""
    content: Optional[ImageResponse] = None
    generating: bool = False
    prompt: str = ""
    type: str = field(default="image", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "image",
            "content": self.content.to_dict() if self.content else None,
            "generating": self.generating,
            "prompt": self.prompt,
        }


@dataclass(frozen=True)
class VideoBlock:
    """Video block holding a URL."""
    content: str = ""
    generating: bool = False
    type: str = field(default="video", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "video", "content": self.content, "generating": self.generating}


ContentBlock = Union[TextBlock, ImageBlock, VideoBlock]


def block_from_dict(data: Dict[str, Any]) -> ContentBlock:
    """Build a content block from its JSON shape.

    Raises:
        StructuralError: If the type is unknown or the payload is malformed
    """
    if not isinstance(data, dict):
        raise StructuralError(f"Block must be an object, got {type(data).__name__}")

    block_type = data.get("type")
    generating = bool(data.get("generating", False))

    if block_type == "text":
        content = data.get("content", "")
        if not isinstance(content, str):
            raise StructuralError("Text block content must be a string")
        context = data.get("context")
        return TextBlock(content=content, generating=generating,
                         context=context if isinstance(context, str) else None)

    if block_type == "image":
        raw = data.get("content")
        image = ImageResponse.from_dict(raw) if raw is not None else None
        return ImageBlock(content=image, generating=generating, prompt=str(data.get("prompt", "")))

    if block_type == "video":
        content = data.get("content", "")
        if not isinstance(content, str):
            raise StructuralError("Video block content must be a URL string")
        return VideoBlock(content=content, generating=generating)

    raise StructuralError(f"Unknown block type: {block_type!r}")


@dataclass
class PageContent:
    """One page: blocks in reading order."""
    blocks: List[ContentBlock] = field(default_factory=list)

    def copy(self) -> "PageContent":
        # Blocks are frozen, so a new list is enough to isolate the page
        return PageContent(blocks=list(self.blocks))

    def to_dict(self) -> Dict[str, Any]:
        return {"blocks": [block.to_dict() for block in self.blocks]}

    @classmethod
    def from_dict(cls, data: Any) -> "PageContent":
        # Sparse page lists store missing pages as null
        if data is None:
            return cls()
        if not isinstance(data, dict) or not isinstance(data.get("blocks", []), list):
            raise StructuralError("Page must be an object with a 'blocks' list")
        blocks = []
        for block_index, raw in enumerate(data.get("blocks", [])):
            try:
                blocks.append(block_from_dict(raw))
            except StructuralError as e:
                raise StructuralError(str(e), block_index=block_index) from e
        return cls(blocks=blocks)


@dataclass
class LanguageVersion:
    """The whole document expressed in one language."""
    language: str
    pages: List[PageContent] = field(default_factory=list)

    @property
    def block_count(self) -> int:
        return sum(len(page.blocks) for page in self.pages)

    def copy(self) -> "LanguageVersion":
        return LanguageVersion(language=self.language, pages=[page.copy() for page in self.pages])

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "pages": [page.to_dict() for page in self.pages]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LanguageVersion":
        if not isinstance(data, dict) or not isinstance(data.get("language"), str):
            raise StructuralError("Language version must have a 'language' string")
        return cls(language=data["language"], pages=pages_from_list(data.get("pages", [])))


def pages_from_list(raw_pages: Any) -> List[PageContent]:
    """Parse a list of page dicts, tagging errors with the page index."""
    if not isinstance(raw_pages, list):
        raise StructuralError("Pages must be a list")
    pages = []
    for page_index, raw in enumerate(raw_pages):
        try:
            pages.append(PageContent.from_dict(raw))
        except StructuralError as e:
            raise StructuralError(str(e), page_index=page_index, block_index=e.block_index) from e
    return pages
