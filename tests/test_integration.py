"""
Integration tests against the live cohost API.

Skipped unless COHOST_EMAIL and COHOST_PASSWORD are set. Only read-only
calls are made.
"""

import os

import pytest

from cohost_client import AuthenticationError, Project, User


EMAIL = os.environ.get("COHOST_EMAIL")
PASSWORD = os.environ.get("COHOST_PASSWORD")

pytestmark = pytest.mark.skipif(
    not (EMAIL and PASSWORD),
    reason="COHOST_EMAIL and COHOST_PASSWORD not set"
)


class TestIntegration:
    """Integration tests with the cohost API."""

    @pytest.fixture(scope="class")
    def user(self):
        """Create a logged-in user."""
        with User() as user:
            user.login(EMAIL, PASSWORD)
            yield user

    def test_login(self, user):
        """Test login sets the session credentials."""
        assert user.is_authenticated
        assert user.user_id is not None
        assert user.email == EMAIL

    def test_wrong_password(self):
        """Test a wrong password is rejected."""
        with User() as user:
            with pytest.raises(AuthenticationError):
                user.login(EMAIL, PASSWORD + "-wrong")

            assert not user.is_authenticated

    def test_get_projects(self, user):
        """Test listing edited projects."""
        projects = user.get_projects()

        assert projects
        assert all(isinstance(p, Project) for p in projects)
        assert all(p.handle for p in projects)

    def test_get_posts(self, user):
        """Test listing posts of the first project."""
        project = user.get_projects()[0]
        posts = project.get_posts()

        assert len(posts) <= 20
        for post in posts:
            assert post.project.handle

    def test_get_notifications(self, user):
        """Test notifications are returned."""
        assert user.get_notifications(limit=5) is not None
