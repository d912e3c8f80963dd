"""
Tests against a local HTTP server that the login cookie is never replayed
by the transport.
"""

import base64
import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from cohost_client import CohostClient, User


SALT = base64.b64encode(b"0123456789abcdef").decode()


class RecordingHandler(BaseHTTPRequestHandler):
    """Answers the login endpoints and records each request's Cookie header."""

    def _reply(self, body, headers=None):
        data = json.dumps(body).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(data)

    def _record(self):
        self.server.seen.append((self.path, self.headers.get("Cookie")))

    def do_GET(self):
        self._record()
        if self.path.startswith("/api/v1/login/salt"):
            self._reply({"salt": SALT})
        else:
            self._reply({})

    def do_POST(self):
        self._record()
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self._reply(
            {"userId": 7, "email": "test@example.com"},
            {"Set-Cookie": "connect.sid=SECRET; Path=/; HttpOnly"}
        )

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    """Start a local HTTP server on a free port."""
    httpd = HTTPServer(("127.0.0.1", 0), RecordingHandler)
    httpd.seen = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()

    yield httpd

    httpd.shutdown()
    httpd.server_close()
    thread.join()


@pytest.fixture
def local_client(server):
    host, port = server.server_address
    with CohostClient(f"http://{host}:{port}/api/v1") as client:
        yield client


class TestSessionIsolation:
    """Test the transport keeps no cookies between requests."""

    def test_login_cookie_not_replayed(self, server, local_client):
        """Test requests made without a cookie send none after a login."""
        user = User(local_client)
        user.login("test@example.com", "hunter2")
        assert user.session_cookie == "connect.sid=SECRET"

        local_client.request("GET", "/login/salt", data={"email": "other@example.com"})
        User(local_client).client.request("GET", "/anything")

        assert server.seen[-2] == ("/api/v1/login/salt?email=other%40example.com", None)
        assert server.seen[-1] == ("/api/v1/anything", None)
        assert len(local_client.session.cookies) == 0

    def test_explicit_cookie_sent(self, server, local_client):
        """Test a given cookie is still sent."""
        local_client.request("GET", "/projects/edited", "connect.sid=SECRET")

        assert server.seen[-1] == ("/api/v1/projects/edited", "connect.sid=SECRET")

    def test_second_login_sends_no_cookie(self, server, local_client):
        """Test logging in again does not carry the earlier session."""
        User(local_client).login("test@example.com", "hunter2")
        User(local_client).login("other@example.com", "hunter2")

        assert [cookie for _, cookie in server.seen] == [None, None, None, None]
