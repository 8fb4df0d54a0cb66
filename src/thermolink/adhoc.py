from __future__ import annotations
import logging, sys
from dataclasses import dataclass
from typing import Optional, TextIO
from thermolink.errors import ExitCode, RequestValidationError, TransportError
from thermolink.httpclient import HttpClient, VERBS

MUTATING_VERBS = ("POST", "PUT", "DELETE")

log = logging.getLogger(__name__)

@dataclass
class AdHocRequest:
    url: Optional[str] = None
    verb: Optional[str] = None
    body: Optional[str] = None

    def validate(self) -> None:
        if not self.url:
            raise RequestValidationError("Invalid URL provided.")
        if not self.verb:
            raise RequestValidationError("http request type missing.")
        if self.verb.upper() not in VERBS:
            raise RequestValidationError(f"unsupported http request type {self.verb!r}.")
        if self.verb.upper() in MUTATING_VERBS and self.body is None:
            raise RequestValidationError(f"{self.verb.upper()} needs a body argument.")

def run_request(client: HttpClient, req: AdHocRequest, out: Optional[TextIO] = None) -> ExitCode:
    """Validate, then send exactly one request and print the response body."""
    req.validate()
    verb = req.verb.upper()
    try:
        r = client.request(verb, req.url, None if verb == "GET" else req.body)
    except TransportError as e:
        log.error("%s", e)
        return ExitCode.REQ_ERR
    log.info("%s %s -> HTTP %d (%d chars)", verb, req.url, r.status, len(r.text))
    if r.text:
        (out or sys.stdout).write(r.text if r.text.endswith("\n") else r.text + "\n")
    return ExitCode.OK
