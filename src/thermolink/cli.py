"""Command-line entry point: no arguments runs the agent, anything else is a one-shot request."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from thermolink.adhoc import AdHocRequest, run_request
from thermolink.config import load_config
from thermolink.errors import ExitCode, RequestValidationError, ThermolinkError
from thermolink.httpclient import HttpClient
from thermolink.logging_config import resolve_logging_from_env_and_cfg, setup_logging
from thermolink.runtime import LifecycleManager, exit_process

LOGGER = logging.getLogger(__name__)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        raise RequestValidationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="thermolink",
        description="Thermostat agent. Run without arguments to start the control loop, "
        "or issue a single request against the remote API.",
    )
    parser.add_argument("-u", "--url", help="URL to send the request to")
    verbs = parser.add_mutually_exclusive_group()
    verbs.add_argument("-g", "--get", dest="verb", action="store_const", const="GET", help="GET request")
    verbs.add_argument("-o", "--post", dest="verb", action="store_const", const="POST", help="POST request (needs ARG)")
    verbs.add_argument("-p", "--put", dest="verb", action="store_const", const="PUT", help="PUT request (needs ARG)")
    verbs.add_argument("-d", "--delete", dest="verb", action="store_const", const="DELETE", help="DELETE request (needs ARG)")
    parser.add_argument("arg", nargs="*", metavar="ARG", help="request body; quote it if it contains spaces")
    return parser


def parse_request(argv: list[str]) -> AdHocRequest:
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.arg) > 1:
        parser.print_usage(sys.stderr)
        raise RequestValidationError("Too many arguments, use quotes around your extra argument.")
    req = AdHocRequest(url=args.url, verb=args.verb, body=args.arg[0] if args.arg else None)
    try:
        req.validate()
    except RequestValidationError:
        parser.print_usage(sys.stderr)
        raise
    return req


def run_adhoc(argv: list[str], timeout_s: float) -> ExitCode:
    LOGGER.info("-Using CLI-")
    try:
        req = parse_request(argv)
    except RequestValidationError as exc:
        LOGGER.error("%s", exc)
        print(f"thermolink: {exc}", file=sys.stderr)
        return exc.code
    try:
        with HttpClient(timeout_s=timeout_s) as client:
            return run_request(client, req)
    except ThermolinkError as exc:
        LOGGER.error("%s", exc)
        return exc.code


def main(argv: Optional[list[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = load_config()
    except ThermolinkError as exc:
        print(f"thermolink: {exc}", file=sys.stderr)
        return int(exc.code)
    enabled, level, log_file, syslog = resolve_logging_from_env_and_cfg(config)
    setup_logging(enabled, level, log_file, syslog=syslog, ident=config.daemon.name)

    if argv:
        return exit_process(run_adhoc(argv, config.remote.timeout_s))
    return exit_process(LifecycleManager(config).start())


if __name__ == "__main__":
    sys.exit(main())
