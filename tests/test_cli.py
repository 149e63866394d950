import json

import pytest

from fetchlib.cli import main, parse_headers
from fetchlib.types import TransportProtocol


class StubResponse:
    def __init__(self, status=200, reason="OK", headers=None, body=b""):
        self.status = status
        self.reason = reason
        self.headers = headers or {}
        self._body = body

    def read(self) -> bytes:
        return self._body

    def release(self) -> None:
        pass


class StubHttp(TransportProtocol):
    def __init__(self):
        self.calls = []

    def send(self, url, options):
        self.calls.append((url, options))
        if "broken" in url:
            return StubResponse(status=500, reason="Internal Server Error")
        if url.endswith("/users"):
            data = {"data": [{"first_name": "Emma", "last_name": "Wong", "avatar": "e.jpg"}]}
            return StubResponse(headers={"content-type": "application/json"}, body=json.dumps(data).encode())
        if "joke" in url:
            joke = {"setup": "Knock knock.", "delivery": "Race condition. Who's there?"}
            return StubResponse(headers={"content-type": "application/json"}, body=json.dumps(joke).encode())
        if url.endswith("/text"):
            return StubResponse(headers={"content-type": "text/plain"}, body=b"hello")
        return StubResponse(status=404, reason="Not Found")

    def close(self) -> None:
        pass


def test_fetch_text(capsys):
    assert main(["fetch", "https://example.com/text"], transport=StubHttp()) == 0
    assert capsys.readouterr().out == "hello\n"


def test_fetch_passes_method_headers_body():
    http = StubHttp()
    main(["fetch", "https://example.com/text", "-X", "put", "-H", "X-A: 1", "-d", "x"], transport=http)
    _, options = http.calls[0]
    assert options.method == "PUT"
    assert options.headers == {"X-A": "1"}
    assert options.body == "x"


def test_users_writes_html(tmp_path, capsys):
    out = tmp_path / "users.html"
    assert main(["users", "--html", str(out)], transport=StubHttp()) == 0
    assert json.loads(capsys.readouterr().out)["data"][0]["first_name"] == "Emma"
    assert "<p>Emma Wong</p>" in out.read_text(encoding="utf-8")


def test_users_error_is_rendered(tmp_path, capsys):
    out = tmp_path / "users.html"
    status = main(["--base-url", "https://example.com/broken", "users", "--html", str(out)], transport=StubHttp())
    assert status == 1
    assert "Fetch failed. 500 Internal Server Error" in capsys.readouterr().err
    assert "Fetch failed. 500 Internal Server Error" in out.read_text(encoding="utf-8")


def test_missing_user(capsys):
    assert main(["user", "5"], transport=StubHttp()) == 1
    assert "Fetch failed. 404 Not Found" in capsys.readouterr().err


def test_joke(capsys):
    assert main(["--joke-endpoint", "https://example.com/joke", "joke"], transport=StubHttp()) == 0
    assert capsys.readouterr().out.splitlines() == ["Knock knock.", "Race condition. Who's there?"]


def test_read_file_count(tmp_path, capsys):
    path = tmp_path / "the-raven.txt"
    path.write_text("Raven raven RAVEN", encoding="utf-8")
    assert main(["read-file", str(path), "--count", "raven"], transport=StubHttp()) == 0
    assert capsys.readouterr().out.strip() == 'There were 3 mentions of "raven".'


def test_read_missing_file(tmp_path, capsys):
    assert main(["read-file", str(tmp_path / "missing.txt")], transport=StubHttp()) == 1
    assert "Something went wrong!" in capsys.readouterr().err


def test_parse_headers_rejects_malformed():
    assert parse_headers(["A: b: c"]) == {"A": "b: c"}
    with pytest.raises(ValueError):
        parse_headers(["no-colon"])


def test_fetch_malformed_header_exits_nonzero(capsys):
    http = StubHttp()
    assert main(["fetch", "https://example.com/text", "-H", "nocolon"], transport=http) == 2
    assert "Malformed header" in capsys.readouterr().err
    assert http.calls == []


def test_read_file_wrong_encoding(tmp_path, capsys):
    path = tmp_path / "latin1.txt"
    path.write_bytes("caf\xe9".encode("latin-1"))
    assert main(["read-file", str(path)], transport=StubHttp()) == 1
    assert "Something went wrong!" in capsys.readouterr().err
