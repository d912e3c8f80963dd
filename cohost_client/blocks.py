"""
Post body blocks and the post payload builder.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union


class PostState(IntEnum):
    """Lifecycle state of a post."""
    DRAFT = 0
    PUBLISHED = 1


@dataclass(frozen=True)
class MarkdownBlock:
    content: str

    type = "markdown"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "markdown": {"content": self.content}}


@dataclass(frozen=True)
class AttachmentBlock:
    """Reference to an attachment uploaded with Project.upload_attachment()."""
    attachment_id: str
    file_url: str = ""
    alt_text: str = ""

    type = "attachment"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "attachment": {
                "attachmentId": self.attachment_id,
                "fileURL": self.file_url,
                "altText": self.alt_text,
            },
        }


@dataclass(frozen=True)
class RawBlock:
    """A block of a type this library does not model, kept verbatim."""
    type: str
    data: Dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data)


Block = Union[MarkdownBlock, AttachmentBlock, RawBlock]


def parse_block(data: Mapping[str, Any]) -> Block:
    """Build a block from its API representation."""
    block_type = data.get("type")

    if block_type == MarkdownBlock.type:
        return MarkdownBlock(content=data.get("markdown", {}).get("content", ""))

    if block_type == AttachmentBlock.type:
        attachment = data.get("attachment", {})
        return AttachmentBlock(
            attachment_id=attachment.get("attachmentId", ""),
            file_url=attachment.get("fileURL", ""),
            alt_text=attachment.get("altText", ""),
        )

    return RawBlock(type=block_type, data=dict(data))


def serialize_blocks(blocks: Iterable[Union[Block, Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """Convert blocks to their API representation; dicts pass through."""
    return [b.to_dict() if hasattr(b, "to_dict") else dict(b) for b in blocks]


@dataclass
class PostDraft:
    """
    Body of a post create or update call.

    Nothing is validated locally; the server is authoritative.
    """
    headline: str = ""
    blocks: List[Union[Block, Dict[str, Any]]] = field(default_factory=list)
    post_state: PostState = PostState.PUBLISHED
    adult_content: bool = False
    cws: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "postState": int(self.post_state),
            "headline": self.headline,
            "adultContent": self.adult_content,
            "blocks": serialize_blocks(self.blocks),
            "cws": list(self.cws),
            "tags": list(self.tags),
        }


def as_payload(data: Union[PostDraft, Mapping[str, Any]]) -> Any:
    """Return the request body for a post payload given as draft or mapping."""
    if isinstance(data, PostDraft):
        return data.to_payload()
    return data


def blocks_from_api(data: Iterable[Mapping[str, Any]]) -> Tuple[Block, ...]:
    return tuple(parse_block(b) for b in data or ())
