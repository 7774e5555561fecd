"""
Integration tests for the Publitio client against a local stub server.

The stub echoes the received query string as JSON and, for uploads, the
parts of the multipart body it received.
"""

import hashlib
import io
import json
import re
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from email import policy
from email.parser import BytesParser
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

import pytest

from publitio_client import PublitioClient, ResponseParseError, TransportError


def parse_multipart(content_type, body):
    """Split a multipart/form-data body into its parts."""
    message = BytesParser(policy=policy.HTTP).parsebytes(
        b"Content-Type: " + content_type.encode("latin-1") + b"\r\n\r\n" + body
    )
    if not message.is_multipart():
        return []
    return [
        {
            "name": part.get_param("name", header="content-disposition"),
            "content": part.get_payload(decode=True).decode("latin-1"),
        }
        for part in message.iter_parts()
    ]


class StubHandler(BaseHTTPRequestHandler):
    """Echoes requests back as JSON."""

    def log_message(self, format, *args):
        pass

    def _reply(self, status, body, content_type="application/json"):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _echo(self):
        parts = urlsplit(self.path)
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""

        if parts.path == "/v1/error":
            self._reply(404, json.dumps({
                "success": False,
                "error": {"code": 404, "message": "Not found"},
            }).encode())
            return

        if parts.path == "/v1/gateway":
            self._reply(502, b"<html>Bad Gateway</html>", content_type="text/html")
            return

        content_type = self.headers.get("Content-Type", "")
        self._reply(200, json.dumps({
            "method": self.command,
            "path": parts.path,
            "query": parse_qs(parts.query),
            "content_type": content_type,
            "body_length": len(body),
            "parts": parse_multipart(content_type, body) if body else [],
        }).encode())

    do_GET = _echo
    do_PUT = _echo
    do_DELETE = _echo
    do_POST = _echo


class TestIntegration:
    """Integration tests with a stub Publitio server."""
    KEY = "xxx"
    SECRET = "yyy"

    @pytest.fixture(scope="class")
    def server_url(self):
        """Start stub server for integration tests."""
        server = ThreadingHTTPServer(("127.0.0.1", 0), StubHandler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()

        yield f"http://127.0.0.1:{server.server_address[1]}/v1"

        server.shutdown()
        server.server_close()
        thread.join()

    @pytest.fixture
    def client(self, server_url):
        """Create client pointed at the stub server."""
        with PublitioClient(self.KEY, self.SECRET, base_url=server_url, timeout=10) as client:
            yield client

    def test_get_signed_query(self, client):
        """Test the server receives the signing fields and caller params."""
        result = client.get("files/list", {"limit": ["12"]})
        query = result["query"]

        assert result["method"] == "GET"
        assert result["path"] == "/v1/files/list"
        assert query["api_key"] == ["xxx"]
        assert query["limit"] == ["12"]
        assert re.fullmatch(r"[0-9]{8}", query["api_nonce"][0])

        now = int(time.time()) % 2 ** 32
        assert abs(int(query["api_timestamp"][0]) - now) <= 5

        expected = hashlib.sha1(
            (query["api_timestamp"][0] + query["api_nonce"][0] + self.SECRET).encode()
        ).hexdigest()
        assert query["api_signature"] == [expected]

    def test_leading_slash(self, client):
        """Test both path forms reach the same resource."""
        assert client.get("/files/list")["path"] == client.get("files/list")["path"]

    def test_put_and_delete(self, client):
        """Test PUT and DELETE reach the server with their params."""
        put = client.put("files/update/abc", {"title": ["New title"]})
        delete = client.delete("files/delete/abc")

        assert put["method"] == "PUT"
        assert put["query"]["title"] == ["New title"]
        assert delete["method"] == "DELETE"
        assert delete["path"] == "/v1/files/delete/abc"

    def test_upload_local_content(self, client):
        """Test the server receives exactly one file part with the content."""
        result = client.upload_file(io.BytesIO(b"abc"), {"title": ["t"]})

        assert result["method"] == "POST"
        assert result["path"] == "/v1/files/create"
        assert result["query"]["title"] == ["t"]
        assert result["content_type"].startswith("multipart/form-data; boundary=")
        assert result["parts"] == [{"name": "file", "content": "abc"}]

    def test_upload_remote_reference(self, client):
        """Test remote uploads send an empty body and the file_url param."""
        result = client.upload_file(None, {"file_url": ["https://example.org/a.png"]})

        assert result["body_length"] == 0
        assert result["content_type"] == "multipart/form-data"
        assert result["query"]["file_url"] == ["https://example.org/a.png"]

    def test_service_error_returned(self, client):
        """Test JSON error bodies come back as values."""
        result = client.get("error")

        assert result["success"] is False
        assert result["error"]["code"] == 404

    def test_non_json_error(self, client):
        """Test a non-JSON error page raises ResponseParseError."""
        with pytest.raises(ResponseParseError) as exc_info:
            client.get("gateway")

        assert exc_info.value.status_code == 502
        assert b"Bad Gateway" in exc_info.value.body

    def test_concurrent_calls(self, client):
        """Test concurrent calls are each signed with their own nonce."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda i: client.get("files/list", {"i": [str(i)]}), range(32)))

        for i, result in enumerate(results):
            query = result["query"]
            assert query["i"] == [str(i)]
            expected = hashlib.sha1(
                (query["api_timestamp"][0] + query["api_nonce"][0] + self.SECRET).encode()
            ).hexdigest()
            assert query["api_signature"] == [expected]

    def test_connection_refused(self):
        """Test an unreachable server raises TransportError."""
        server = ThreadingHTTPServer(("127.0.0.1", 0), StubHandler)
        port = server.server_address[1]
        server.server_close()

        with PublitioClient(self.KEY, self.SECRET, base_url=f"http://127.0.0.1:{port}/v1", timeout=5) as client:
            with pytest.raises(TransportError):
                client.get("files/list")
