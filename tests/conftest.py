"""
Shared fixtures for cohost client tests.
"""

import json
from unittest.mock import Mock

import pytest
from requests.structures import CaseInsensitiveDict

from cohost_client import CohostClient, User


def make_response(body=None, status_code=200, headers=None, text=None):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.text = text if text is not None else json.dumps(body)
    response.headers = CaseInsensitiveDict(headers or {})
    return response


PROJECT_PAYLOAD = {
    "projectId": 1234,
    "handle": "test",
    "displayName": "Test Project",
    "dek": "a tagline",
    "description": "a description",
    "avatarURL": "https://staging.cohostcdn.org/avatar/1234.png",
    "headerURL": "https://staging.cohostcdn.org/header/1234.png",
    "privacy": "public",
    "pronouns": "they/them",
    "url": "https://example.com",
    "flags": ["staff"],
    "avatarShape": "squircle",
}


POST_PAYLOAD = {
    "postId": 42,
    "headline": "hi",
    "publishedAt": "2022-07-30T18:20:01.123Z",
    "filename": "42-hi",
    "transparentShareOfPostId": None,
    "state": 1,
    "numComments": 3,
    "numSharedComments": 0,
    "cws": ["spoilers"],
    "tags": ["one", "two"],
    "blocks": [
        {"type": "markdown", "markdown": {"content": "hello world"}},
        {
            "type": "attachment",
            "attachment": {
                "fileURL": "https://staging.cohostcdn.org/attachment/abc/cat.png",
                "attachmentId": "abc",
                "altText": "a cat",
            },
        },
    ],
    "plainTextBody": "hello world",
    "postingProject": PROJECT_PAYLOAD,
    "shareTree": [],
    "relatedProjects": [PROJECT_PAYLOAD],
    "effectiveAdultContent": False,
    "isEditor": True,
    "contributorBlockIncomingOrOutgoing": False,
    "hasAnyContributorMuted": False,
    "isLiked": False,
    "canShare": True,
    "canPublish": True,
    "singlePostPageUrl": "https://cohost.org/test/post/42-hi",
    "renderInIframe": False,
    "postPreviewIFrameUrl": "https://cohost.org/rc/post/42/preview",
    "postEditUrl": "https://cohost.org/test/post/42-hi/edit",
}


@pytest.fixture
def client():
    """Create test client pointed at a local origin."""
    return CohostClient("http://localhost:8080/api/v1")


@pytest.fixture
def user(client):
    """Create a logged-out user."""
    return User(client)


@pytest.fixture
def logged_in_user(client):
    """Create a user with credentials set as if login() succeeded."""
    user = User(client)
    user.session_cookie = "connect.sid=s%3Atest"
    user.user_id = 7
    user.email = "test@example.com"
    return user
