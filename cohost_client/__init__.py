"""
cohost client library

A Python client for the cohost API: log in, list projects and posts,
create and update posts, and upload attachments.

Example usage:
    from cohost_client import User, Post, PostDraft, MarkdownBlock

    user = User()
    user.login("john.doe@gmail.com", "password")
    project = user.get_projects()[0]
    post_id = Post.create(project, PostDraft(
        headline="hello",
        blocks=[MarkdownBlock("first post")],
    ))
"""

from .client import CohostClient, RawResponse
from .user import User
from .models import Project, Post, AvatarShape, OpaqueJSON
from .blocks import (
    PostState,
    PostDraft,
    MarkdownBlock,
    AttachmentBlock,
    RawBlock,
    parse_block
)
from .hashing import decode_salt, derive_login_hash
from .exceptions import (
    CohostClientError,
    ConfigurationError,
    NotAuthenticatedError,
    HTTPError,
    RemoteAPIError,
    AuthenticationError
)
from .constants import API_BASE, DEFAULT_CONFIG

__version__ = "1.0.0"
__all__ = [
    "CohostClient",
    "RawResponse",
    "User",
    "Project",
    "Post",
    "AvatarShape",
    "OpaqueJSON",
    "PostState",
    "PostDraft",
    "MarkdownBlock",
    "AttachmentBlock",
    "RawBlock",
    "parse_block",
    "decode_salt",
    "derive_login_hash",
    "CohostClientError",
    "ConfigurationError",
    "NotAuthenticatedError",
    "HTTPError",
    "RemoteAPIError",
    "AuthenticationError",
    "API_BASE",
    "DEFAULT_CONFIG"
]
