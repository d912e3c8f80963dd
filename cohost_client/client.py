"""
HTTP transport for the cohost API.

This module turns a method, a relative endpoint and an optional payload
into one cookie-authenticated request against the API origin, and parses
the response body back into JSON where possible.
"""

import http.cookiejar
import json
import logging
import os
from typing import Any, Dict, NamedTuple, Optional
from urllib.parse import urlencode

import requests

from .constants import (
    API_BASE,
    HEADER_COOKIE,
    HEADER_CONTENT_TYPE,
    CONTENT_TYPE_JSON,
    DEFAULT_CONFIG
)
from .exceptions import (
    ConfigurationError,
    HTTPError,
    RemoteAPIError
)

logger = logging.getLogger(__name__)


class RawResponse(NamedTuple):
    """Response headers together with the parsed body."""
    headers: Any
    body: Any


def _is_binary(data) -> bool:
    return isinstance(data, (bytes, bytearray)) or hasattr(data, 'read')


class CohostClient:
    """
    Transport for requests to the cohost API.

    One client wraps one ``requests.Session`` whose cookie jar accepts
    nothing; the session cookie is passed per call and never stored here.
    """

    def __init__(self, base_url: str = API_BASE, **config):
        """
        Initialize the client.

        Args:
            base_url: API origin every endpoint is appended to
            **config: Configuration options (timeout)
        """
        self.base_url = (base_url or '').rstrip('/')

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self.session = requests.Session()
        # The session cookie belongs to the User; never store or replay it here
        self.session.cookies.set_policy(http.cookiejar.DefaultCookiePolicy(allowed_domains=[]))

    def _validate_config(self):
        """Validate client configuration."""
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty")

        timeout = self.config['timeout']
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def _build_url(self, method: str, endpoint: str, data=None) -> str:
        """Build the full URL, carrying GET payloads as the query string."""
        url = self.base_url + endpoint
        if method == 'GET' and data:
            separator = '&' if '?' in endpoint else '?'
            url = url + separator + urlencode(data)
        return url

    def _request_kwargs(self, method: str, cookie: Optional[str], data=None) -> Dict[str, Any]:
        """Prepare headers and body for a request."""
        headers = {}
        kwargs: Dict[str, Any] = {'headers': headers}

        if cookie:
            headers[HEADER_COOKIE] = cookie

        if method != 'GET' and data is not None:
            if _is_binary(data):
                kwargs['data'] = data
            else:
                headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
                kwargs['data'] = json.dumps(data).encode('utf-8')

        if self.config['timeout'] is not None:
            kwargs['timeout'] = self.config['timeout']

        return kwargs

    @staticmethod
    def _parse_body(response: requests.Response):
        """Parse the response text as JSON, keeping the raw text on failure."""
        text = response.text
        try:
            return json.loads(text)
        except ValueError:
            return text

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}")

    def _handle_response(self, method: str, path: str, response: requests.Response):
        """Parse the body and raise RemoteAPIError on error statuses."""
        body = self._parse_body(response)
        logger.debug("%s %s -> %s", method, path, response.status_code)

        if response.status_code >= 400:
            logger.warning("%s %s failed with status %s", method, path, response.status_code)
            raise RemoteAPIError(response.status_code, body)

        return body

    def request(
        self,
        method: str,
        endpoint: str,
        cookie: Optional[str] = None,
        data=None,
        with_headers: bool = False
    ):
        """
        Make a request to the API.

        Args:
            method: HTTP method
            endpoint: Endpoint relative to base_url, starting with '/'
            cookie: Cookie header to send, used for auth
            data: Query parameters for GET, body for any other method.
                Mappings are sent as JSON; bytes and file-like objects
                are passed through untouched.
            with_headers: Return RawResponse(headers, body) instead of the body

        Returns:
            Parsed JSON body, or the raw text when it is not JSON

        Raises:
            RemoteAPIError: If the response status is 400 or above
            HTTPError: If the request fails
        """
        url = self._build_url(method, endpoint, data)
        kwargs = self._request_kwargs(method, cookie, data)

        response = self._send(method, url, **kwargs)
        body = self._handle_response(method, endpoint.split('?')[0], response)

        if with_headers:
            return RawResponse(headers=response.headers, body=body)
        return body

    def upload(self, url: str, fields: Dict[str, Any], file_path: str, content_type: str):
        """
        Upload a file as a multipart form to an absolute URL.

        The form fields are sent verbatim ahead of the file part, which is
        named ``file``. No cookie is attached.

        Args:
            url: Upload target issued by the API
            fields: Form fields required by the upload target
            file_path: Local file to upload
            content_type: Content type of the file part

        Returns:
            Parsed response body, or the raw text when it is not JSON

        Raises:
            RemoteAPIError: If the response status is 400 or above
            HTTPError: If the request fails
        """
        kwargs: Dict[str, Any] = {}
        if self.config['timeout'] is not None:
            kwargs['timeout'] = self.config['timeout']

        with open(file_path, 'rb') as fh:
            files = {'file': (os.path.basename(file_path), fh, content_type)}
            response = self._send('POST', url, data=fields or {}, files=files, **kwargs)

        return self._handle_response('POST', url.split('?')[0], response)

    def get(self, endpoint: str, cookie: Optional[str] = None, params=None, **kwargs):
        """Make a GET request."""
        return self.request('GET', endpoint, cookie, params, **kwargs)

    def post(self, endpoint: str, cookie: Optional[str] = None, data=None, **kwargs):
        """Make a POST request."""
        return self.request('POST', endpoint, cookie, data, **kwargs)

    def put(self, endpoint: str, cookie: Optional[str] = None, data=None, **kwargs):
        """Make a PUT request."""
        return self.request('PUT', endpoint, cookie, data, **kwargs)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
