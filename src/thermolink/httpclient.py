from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Optional, Union
import requests
from thermolink.errors import ClientInitError, TransportError

VERBS = ("GET", "POST", "PUT", "DELETE")
CHUNK_SIZE = 1024
# same default as a curl POSTFIELDS request
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}

@dataclass(frozen=True)
class HttpResponse:
    status: int
    text: str
    content: bytes = b""

class HttpClient:
    """
    Blocking HTTP client over a requests.Session.

    GET never carries a body, does not follow redirects and accumulates the
    streamed body into a buffer owned by that call. POST/PUT/DELETE send the
    body verbatim and follow redirects. Every request is bounded by `timeout_s`.
    Connection errors, timeouts and statuses >= 400 raise TransportError.
    """
    def __init__(self, timeout_s: float = 2.0, session: Optional[requests.Session] = None):
        self.timeout_s = timeout_s
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        try:
            self.session = session if session is not None else requests.Session()
        except Exception as e:
            raise ClientInitError(f"HTTP session could not be created: {e}") from e

    def __enter__(self): return self
    def __exit__(self, *exc): self.close()

    def close(self) -> None:
        self.session.close()

    def request(self, verb: str, url: str, body: Optional[Union[str, bytes]] = None) -> HttpResponse:
        verb = verb.upper()
        if verb not in VERBS:
            raise ValueError(f"unsupported HTTP verb {verb!r}")
        self._log.debug("%s %s body=%r", verb, url, body)
        try:
            if verb == "GET":
                return self._get(url)
            return self._send(verb, url, body)
        except requests.RequestException as e:
            raise TransportError(verb, url, str(e)) from e

    def _get(self, url: str) -> HttpResponse:
        buf = bytearray()
        # requests' timeout bounds each read; the deadline bounds the whole body
        deadline = time.monotonic() + self.timeout_s
        with self.session.request("GET", url, stream=True, allow_redirects=False,
                                  timeout=self.timeout_s) as r:
            self._check(r, "GET", url)
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                buf.extend(chunk)
                if time.monotonic() > deadline:
                    raise TransportError("GET", url, f"body not received within {self.timeout_s}s")
            return HttpResponse(r.status_code, _decode(bytes(buf), r.encoding), bytes(buf))

    def _send(self, verb: str, url: str, body: Optional[Union[str, bytes]]) -> HttpResponse:
        data = body.encode("utf-8") if isinstance(body, str) else body
        with self.session.request(verb, url, data=data, headers=FORM_HEADERS if data is not None else None,
                                  allow_redirects=True, timeout=self.timeout_s) as r:
            self._check(r, verb, url)
            return HttpResponse(r.status_code, _decode(r.content, r.encoding), r.content)

    @staticmethod
    def _check(r, verb: str, url: str) -> None:
        if r.status_code >= 400:
            raise TransportError(verb, url, f"HTTP {r.status_code}", status=r.status_code)

def _decode(content: bytes, encoding: Optional[str]) -> str:
    # charset comes from the server; unknown ones fall back to utf-8
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")
