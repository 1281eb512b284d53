from pathlib import Path
from http.server import HTTPServer
import json
import socket
import sys
import threading

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from api.index import handler


@pytest.fixture
def base_url():
    server = HTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_port}/api/gemini"
    server.shutdown()
    server.server_close()


@pytest.fixture
def client():
    with httpx.Client(trust_env=False) as http:
        yield http


def test_options_preflight(client, base_url):
    response = client.options(base_url)
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST, GET, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_non_post_methods_rejected(client, base_url, method):
    response = client.request(method, base_url)
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_head_rejected_without_body(client, base_url):
    response = client.head(base_url)
    assert response.status_code == 405
    assert response.content == b""
    expected = json.dumps({"error": "Method Not Allowed"}).encode()
    assert response.headers["content-length"] == str(len(expected))


def test_post_without_key(client, base_url, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    response = client.post(base_url, json={"userPrompt": "hi"})
    assert response.status_code == 500
    assert response.json() == {"error": "Server-side API key is not configured."}
    assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_bad_content_length_still_answers(base_url):
    host, port = base_url.split("/")[2].split(":")
    with socket.create_connection((host, int(port)), timeout=5) as sock:
        sock.sendall(
            b"POST /api/gemini HTTP/1.1\r\n"
            b"Host: localhost\r\n"
            b"Content-Type: application/json\r\n"
            b"Content-Length: abc\r\n"
            b"\r\n"
        )
        raw = b""
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            raw += chunk

    head, _, body = raw.partition(b"\r\n\r\n")
    assert head.startswith(b"HTTP/1.0 500") or head.startswith(b"HTTP/1.1 500")
    assert b"Access-Control-Allow-Origin: *" in head
    payload = json.loads(body)
    assert payload["error"] == "Internal Server Error"
    assert "abc" in payload["details"]
