import pytest
import requests


class FakeResponse:
    def __init__(self, body=b"", status_code=200, encoding="utf-8"):
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.status_code = status_code; self.encoding = encoding
        self.closed = False

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), 2):  # small chunks to exercise accumulation
            yield self.content[i:i + 2]

    def __enter__(self): return self
    def __exit__(self, *exc): self.closed = True


class FakeSession:
    """Stands in for requests.Session; replies are queued, calls recorded."""
    def __init__(self):
        self.calls = []; self.replies = []; self.responses = []; self.closed = False

    def reply(self, body="", status_code=200, encoding="utf-8"):
        self.replies.append(FakeResponse(body, status_code, encoding)); return self

    def fail(self, exc=None):
        self.replies.append(exc or requests.ConnectionError("connection refused")); return self

    def request(self, method, url, **kw):
        self.calls.append((method, url, kw))
        r = self.replies.pop(0)
        if isinstance(r, Exception):
            raise r
        self.responses.append(r)
        return r

    def close(self): self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def files(tmp_path):
    temp = tmp_path / "temp"; status = tmp_path / "status"
    temp.write_text("72.5"); status.write_text("")
    return temp, status
