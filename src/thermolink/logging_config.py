from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler, SysLogHandler

SYSLOG_ADDRESS = "/dev/log"

class ShortFormatter(logging.Formatter):
    """
    Formatter that exposes %(shortname)s = last component of logger name (e.g., ControlLoop)
    """
    def format(self, record: logging.LogRecord) -> str:
        record.shortname = record.name.rsplit('.', 1)[-1]
        return super().format(record)

def setup_logging(enabled: bool = True, level: str | int = "INFO", log_file: str | None = None,
                  syslog: bool = False, ident: str = "thermolink") -> None:
    """
    Configure root logging once. Format: timestamp level [logger.func] message
    Console always; rotating file and syslog (/dev/log, LOG_DAEMON) when requested.
    """
    if getattr(setup_logging, "_configured", False):
        return

    if not enabled:
        logging.disable(logging.CRITICAL)
        setup_logging._configured = True
        return

    logging.disable(logging.NOTSET)
    lvl = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    formatter = ShortFormatter(fmt="%(asctime)s %(levelname)s [%(shortname)s.%(funcName)s] %(message)s",
                               datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []
    sh = logging.StreamHandler(stream=sys.stdout)
    sh.setFormatter(formatter)
    handlers.append(sh)

    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            fh = RotatingFileHandler(log_file, maxBytes=512_000, backupCount=3)
            fh.setFormatter(formatter)
            handlers.append(fh)
        except OSError as e:
            print(f"log file {log_file} unavailable: {e}", file=sys.stderr)

    if syslog:
        try:
            slh = SysLogHandler(address=SYSLOG_ADDRESS, facility=SysLogHandler.LOG_DAEMON)
            slh.ident = f"{ident}: "
            slh.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
            handlers.append(slh)
        except OSError as e:
            print(f"syslog unavailable: {e}", file=sys.stderr)

    logging.basicConfig(level=lvl, handlers=handlers, force=True)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    setup_logging._configured = True

def reset_logging() -> None:
    """Allow setup_logging to run again with new settings."""
    setup_logging._configured = False

def resolve_logging_from_env_and_cfg(cfg) -> tuple[bool, str, str | None, bool]:
    """
    Determine enabled/level/file/syslog using env first, then cfg.logging.
    Env:
      THERMOLINK_LOGGING=1|0, THERMOLINK_LOG_LEVEL=DEBUG|INFO|..., THERMOLINK_LOG_FILE=/path/to/log
    """
    lcfg = cfg.logging
    env_enabled = os.getenv("THERMOLINK_LOGGING")
    enabled = lcfg.enabled if env_enabled is None else env_enabled.lower() not in ("0", "false", "no")
    level = os.getenv("THERMOLINK_LOG_LEVEL") or lcfg.level
    log_file = os.getenv("THERMOLINK_LOG_FILE") or lcfg.file
    return enabled, level, log_file, lcfg.syslog
