"""
The logged-in cohost user.
"""

import logging
from typing import Any, List, Optional

from .client import CohostClient
from .constants import DEFAULT_NOTIFICATIONS_LIMIT, HEADER_SET_COOKIE
from .exceptions import AuthenticationError, NotAuthenticatedError, RemoteAPIError
from .hashing import decode_salt, derive_login_hash
from .models import Project

logger = logging.getLogger(__name__)


def _login_field(body, key: str):
    """Read a field of a login response, failing the login if it is missing."""
    try:
        return body[key]
    except (KeyError, TypeError, IndexError) as e:
        raise AuthenticationError(None, body) from e


class User:
    """
    Represents a cohost user (e.g. john.doe@gmail.com).

    login() must succeed before anything else is called on this instance
    or on the projects and posts fetched through it.
    """

    def __init__(self, client: Optional[CohostClient] = None, **config):
        """
        Initialize a logged-out user.

        Args:
            client: Transport to use; one is created from config if omitted
            **config: Options for a new CohostClient (base_url, timeout)
        """
        self.client = client if client is not None else CohostClient(**config)
        self.session_cookie: Optional[str] = None
        self.user_id: Optional[int] = None
        self.email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session_cookie)

    def require_session(self) -> str:
        """
        Return the session cookie.

        Raises:
            NotAuthenticatedError: If login() has not succeeded yet
        """
        if not self.session_cookie:
            raise NotAuthenticatedError("login() must succeed before making authenticated calls")
        return self.session_cookie

    def login(self, email: str, password: str):
        """
        Authenticate the user.

        The session cookie, user id and email are only stored once every
        step succeeded; on failure the user is left as it was.

        Args:
            email: E-mail address
            password: Password

        Raises:
            AuthenticationError: If any step of the login fails
        """
        try:
            salt = _login_field(
                self.client.request("GET", "/login/salt", data={"email": email}), "salt"
            )
            client_hash = derive_login_hash(password, decode_salt(salt))
            res = self.client.request(
                "POST",
                "/login",
                data={"email": email, "clientHash": client_hash},
                with_headers=True
            )
        except AuthenticationError:
            raise
        except RemoteAPIError as e:
            raise AuthenticationError(e.status_code, e.payload) from e

        set_cookie = res.headers.get(HEADER_SET_COOKIE)
        if not set_cookie:
            raise AuthenticationError(None, "login response did not set a session cookie")

        session_cookie = set_cookie.split(";")[0]
        user_id = _login_field(res.body, "userId")
        email = _login_field(res.body, "email")

        self.session_cookie, self.user_id, self.email = session_cookie, user_id, email
        logger.info("Logged in as user %s", self.user_id)

    def get_projects(self) -> List[Project]:
        """
        Get projects the user has edit permissions on.

        Returns:
            The user's projects
        """
        cookie = self.require_session()
        res = self.client.request("GET", "/projects/edited", cookie)
        return [Project.from_api(self, p) for p in res["projects"]]

    def get_notifications(self, offset: int = 0, limit: int = DEFAULT_NOTIFICATIONS_LIMIT) -> Any:
        """
        Get the user's notifications.

        The response is returned as parsed JSON; its shape is not
        documented by the API.
        """
        cookie = self.require_session()
        return self.client.request(
            "GET",
            "/notifications/list",
            cookie,
            {"offset": offset, "limit": limit}
        )

    def close(self):
        """Close the underlying HTTP session."""
        self.client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
