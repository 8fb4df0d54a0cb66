from __future__ import annotations
from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    NO_FORK = 1
    NO_SETSID = 2
    RECV_SIGTERM = 3
    RECV_SIGKILL = 4
    REQ_ERR = 5
    NO_FILE = 6
    INIT_ERR = 7
    ERR_CHDIR = 8
    WEIRD_EXIT = 9
    UNKNOWN_HEATER_STATE = 10


_MESSAGES = {
    ExitCode.OK: "Everything is just fine.",
    ExitCode.NO_FORK: "Unable to fork a child process.",
    ExitCode.NO_SETSID: "Unable to set the session id.",
    ExitCode.RECV_SIGTERM: "Received a termination signal; exiting.",
    ExitCode.RECV_SIGKILL: "Received a kill signal; exiting.",
    ExitCode.REQ_ERR: "Requested resource is unavailable.",
    ExitCode.NO_FILE: "File not found/opened.",
    ExitCode.INIT_ERR: "Unable to initialize object.",
    ExitCode.ERR_CHDIR: "Unable to change directories.",
    ExitCode.WEIRD_EXIT: "An unexpected condition has come up, exiting.",
    ExitCode.UNKNOWN_HEATER_STATE: "Encountered an unknown heater state!",
}


def describe(code: int) -> str:
    """Human readable message for an exit code."""
    try:
        return _MESSAGES[ExitCode(code)]
    except ValueError:
        return f"Unknown exit code {code}."


class ThermolinkError(Exception):
    code: ExitCode = ExitCode.WEIRD_EXIT

    def __init__(self, message: str = "", code: ExitCode | None = None):
        if code is not None:
            self.code = code
        super().__init__(message or describe(self.code))


class ProcessSetupError(ThermolinkError):
    code = ExitCode.NO_FORK


class ClientInitError(ThermolinkError):
    code = ExitCode.INIT_ERR


class ConfigError(ThermolinkError):
    code = ExitCode.INIT_ERR


class RequestValidationError(ThermolinkError):
    code = ExitCode.REQ_ERR


class LocalInterfaceMissing(ThermolinkError):
    code = ExitCode.NO_FILE


class SensorNotFound(ThermolinkError):
    code = ExitCode.NO_FILE


class ActuatorWriteError(ThermolinkError):
    code = ExitCode.UNKNOWN_HEATER_STATE


class TransportError(ThermolinkError):
    """A request could not be sent or did not complete with a success status."""
    code = ExitCode.REQ_ERR

    def __init__(self, verb: str, url: str, reason: str, status: int | None = None):
        self.verb = verb; self.url = url; self.status = status
        super().__init__(f"{verb} {url} failed: {reason}")
