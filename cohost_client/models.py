"""
Projects and posts.

Both are immutable snapshots of one API payload, built by ``from_api``.
Fetching again builds a new object; snapshots are never merged. Each
snapshot keeps a reference to the logged-in User it was fetched with, and
operations on it use that user's session cookie.

There is intentionally no way to fetch a single post by id: the API
endpoint for it is disabled upstream.
"""

import logging
import mimetypes
import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, FrozenSet, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from .blocks import Block, PostDraft, PostState, as_payload, blocks_from_api
from .constants import FALLBACK_CONTENT_TYPE

logger = logging.getLogger(__name__)

# Shape defined entirely by the API and returned without schema checks
OpaqueJSON = Any


class AvatarShape(str, Enum):
    CIRCLE = "circle"
    ROUNDRECT = "roundrect"
    SQUIRCLE = "squircle"
    CAPSULE_BIG = "capsule-big"
    CAPSULE_SMALL = "capsule-small"
    EGG = "egg"


def _avatar_shape(value) -> Union[AvatarShape, str, None]:
    try:
        return AvatarShape(value)
    except ValueError:
        return value


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def _log_ignored(kind: str, data: Mapping[str, Any], known: FrozenSet[str]):
    ignored = set(data) - known
    if ignored:
        logger.debug("Ignoring unknown %s fields: %s", kind, ", ".join(sorted(ignored)))


def _project_path(handle: str) -> str:
    return f"/project/{quote(handle, safe='')}"


@dataclass(frozen=True)
class Project:
    """A cohost project (e.g. @mog)."""

    id: Optional[int] = None
    handle: str = ""
    display_name: str = ""
    dek: str = ""
    description: str = ""
    avatar_url: str = ""
    header_url: str = ""
    privacy: str = ""
    pronouns: str = ""
    url: str = ""
    flags: Tuple[str, ...] = ()
    avatar_shape: Union[AvatarShape, str, None] = None
    user: Any = field(default=None, compare=False, repr=False)

    API_FIELDS = frozenset({
        "projectId", "handle", "displayName", "dek", "description",
        "avatarURL", "headerURL", "privacy", "pronouns", "url", "flags",
        "avatarShape",
    })

    @classmethod
    def from_api(cls, user, data: Optional[Mapping[str, Any]]) -> "Project":
        data = data or {}
        _log_ignored("project", data, cls.API_FIELDS)
        return cls(
            id=data.get("projectId"),
            handle=data.get("handle", ""),
            display_name=data.get("displayName", ""),
            dek=data.get("dek", ""),
            description=data.get("description", ""),
            avatar_url=data.get("avatarURL", ""),
            header_url=data.get("headerURL", ""),
            privacy=data.get("privacy", ""),
            pronouns=data.get("pronouns", ""),
            url=data.get("url", ""),
            flags=tuple(data.get("flags") or ()),
            avatar_shape=_avatar_shape(data.get("avatarShape")),
            user=user,
        )

    @staticmethod
    def create(user, data: OpaqueJSON) -> OpaqueJSON:
        """
        Create a project.

        The payload is forwarded as-is and the response returned unparsed;
        the API does not document either shape.
        """
        cookie = user.require_session()
        return user.client.request("POST", "/project", cookie, data)

    def get_posts(self, page: int = 0) -> List["Post"]:
        """
        Get one page of this project's posts (20 per page, set by the server).

        Args:
            page: Zero-based page number

        Returns:
            Posts in the order the API lists them
        """
        cookie = self.user.require_session()
        endpoint = f"{_project_path(self.handle)}/posts?page={quote(str(page))}"
        res = self.user.client.request("GET", endpoint, cookie)
        return [Post.from_api(self.user, item) for item in res["items"]]

    def upload_attachment(self, post_id, file_path: str) -> OpaqueJSON:
        """
        Upload a file as an attachment of a post.

        The upload runs in three steps: the API hands out an upload target,
        the file is posted there as a multipart form, and the API is told
        the upload finished. If a later step fails the attachment started in
        the first step is left behind on the server.

        Args:
            post_id: Post to attach the file to
            file_path: Local file to upload

        Returns:
            Response of the finishing call
        """
        cookie = self.user.require_session()
        client = self.user.client
        content_type = mimetypes.guess_type(file_path)[0] or FALLBACK_CONTENT_TYPE
        post_path = f"{_project_path(self.handle)}/posts/{post_id}"

        target = client.request(
            "POST",
            f"{post_path}/attach/start",
            cookie,
            {
                "filename": os.path.basename(file_path),
                "content_type": content_type,
                "content_length": os.path.getsize(file_path),
            }
        )

        client.upload(target["url"], target.get("requiredFields") or {}, file_path, content_type)

        res = client.request(
            "POST",
            f"{post_path}/attach/finish/{target['attachmentId']}",
            cookie
        )
        logger.info("Uploaded attachment %s to post %s", target["attachmentId"], post_id)
        return res


@dataclass(frozen=True)
class Post:
    """A cohost post, including the project it was posted to."""

    id: Optional[int] = None
    headline: str = ""
    published_at: Optional[datetime] = None
    filename: str = ""
    transparent_share_of_post_id: Optional[int] = None
    state: Union[PostState, int, None] = None
    num_comments: int = 0
    num_shared_comments: int = 0
    cws: FrozenSet[str] = frozenset()
    tags: Tuple[str, ...] = ()
    blocks: Tuple[Block, ...] = ()
    plain_text_body: str = ""
    project: Optional[Project] = None
    share_tree: Tuple["Post", ...] = ()
    related_projects: Tuple[Project, ...] = ()
    effective_adult_content: bool = False
    is_editor: bool = False
    contributor_block_incoming_or_outgoing: bool = False
    has_any_contributor_muted: bool = False
    is_liked: bool = False
    can_share: bool = False
    can_publish: bool = False
    single_post_page_url: str = ""
    render_in_iframe: bool = False
    post_preview_iframe_url: str = ""
    post_edit_url: str = ""
    user: Any = field(default=None, compare=False, repr=False)

    API_FIELDS = frozenset({
        "postId", "headline", "publishedAt", "filename",
        "transparentShareOfPostId", "state", "numComments",
        "numSharedComments", "cws", "tags", "blocks", "plainTextBody",
        "postingProject", "shareTree", "relatedProjects",
        "effectiveAdultContent", "isEditor",
        "contributorBlockIncomingOrOutgoing", "hasAnyContributorMuted",
        "isLiked", "canShare", "canPublish", "singlePostPageUrl",
        "renderInIframe", "postPreviewIFrameUrl", "postEditUrl",
    })

    @classmethod
    def from_api(cls, user, data: Mapping[str, Any]) -> "Post":
        _log_ignored("post", data, cls.API_FIELDS)
        state = data.get("state")
        if state in (PostState.DRAFT, PostState.PUBLISHED):
            state = PostState(state)
        return cls(
            id=data.get("postId"),
            headline=data.get("headline", ""),
            published_at=_parse_timestamp(data.get("publishedAt")),
            filename=data.get("filename", ""),
            transparent_share_of_post_id=data.get("transparentShareOfPostId"),
            state=state,
            num_comments=data.get("numComments", 0),
            num_shared_comments=data.get("numSharedComments", 0),
            cws=frozenset(data.get("cws") or ()),
            tags=tuple(data.get("tags") or ()),
            blocks=blocks_from_api(data.get("blocks")),
            plain_text_body=data.get("plainTextBody", ""),
            project=Project.from_api(user, data.get("postingProject")),
            share_tree=tuple(cls.from_api(user, p) for p in data.get("shareTree") or ()),
            related_projects=tuple(
                Project.from_api(user, p) for p in data.get("relatedProjects") or ()
            ),
            effective_adult_content=data.get("effectiveAdultContent", False),
            is_editor=data.get("isEditor", False),
            contributor_block_incoming_or_outgoing=data.get(
                "contributorBlockIncomingOrOutgoing", False
            ),
            has_any_contributor_muted=data.get("hasAnyContributorMuted", False),
            is_liked=data.get("isLiked", False),
            can_share=data.get("canShare", False),
            can_publish=data.get("canPublish", False),
            single_post_page_url=data.get("singlePostPageUrl", ""),
            render_in_iframe=data.get("renderInIframe", False),
            post_preview_iframe_url=data.get("postPreviewIFrameUrl", ""),
            post_edit_url=data.get("postEditUrl", ""),
            user=user,
        )

    @staticmethod
    def create(project: Project, data: Union[PostDraft, Mapping[str, Any]]):
        """
        Create a post on a project.

        Args:
            project: Project to post to
            data: PostDraft, or a payload mapping sent unchanged

        Returns:
            ID of the new post; fetch the project's posts for its contents
        """
        cookie = project.user.require_session()
        res = project.user.client.request(
            "POST",
            f"{_project_path(project.handle)}/posts",
            cookie,
            as_payload(data)
        )
        return res["postId"]

    @staticmethod
    def update(project: Project, post_id, data: Union[PostDraft, Mapping[str, Any]]):
        """
        Replace the contents of an existing post.

        Returns:
            post_id, unchanged
        """
        cookie = project.user.require_session()
        project.user.client.request(
            "PUT",
            f"{_project_path(project.handle)}/posts/{post_id}",
            cookie,
            as_payload(data)
        )
        return post_id


