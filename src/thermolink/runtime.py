from __future__ import annotations
import logging, os, signal, threading
from typing import Callable, Optional
from thermolink.actuators import FileHeaterActuator
from thermolink.config import AppConfig
from thermolink.controller import ControlLoop, StopFlag
from thermolink.errors import ExitCode, ProcessSetupError, ThermolinkError, describe
from thermolink.httpclient import HttpClient
from thermolink.remote import RemoteThermostatAPI
from thermolink.sensors import FileTemperatureSensor

UNEXPECTED_SIGNALS = tuple(getattr(signal, n) for n in ("SIGINT", "SIGQUIT", "SIGUSR1", "SIGUSR2") if hasattr(signal, n))

log = logging.getLogger(__name__)

def build_loop(cfg: AppConfig, client: HttpClient) -> ControlLoop:
    sensor = FileTemperatureSensor(cfg.paths.temperature)
    actuator = FileHeaterActuator(cfg.paths.status)
    remote = RemoteThermostatAPI(client, cfg.remote.measurement_url, cfg.remote.status_url)
    return ControlLoop(sensor, remote, actuator, cfg.control)

class LifecycleManager:
    """
    Owns the process side of the agent: detaching, signals and the single
    control loop. Signal handlers only record an exit code and set the
    StopFlag; the loop notices it at the next cycle boundary. SIGHUP is ignored.
    """
    _active_lock = threading.Lock()
    _active = False

    def __init__(self, cfg: AppConfig,
                 client_factory: Callable[[float], HttpClient] = lambda t: HttpClient(timeout_s=t),
                 loop_factory: Callable[[AppConfig, HttpClient], ControlLoop] = build_loop):
        self.cfg = cfg; self.client_factory = client_factory; self.loop_factory = loop_factory
        self.cancel = StopFlag()
        self.exit_code = ExitCode.OK
        self.loop: Optional[ControlLoop] = None
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # --- process setup -------------------------------------------------
    def daemonize(self) -> None:
        try:
            pid = os.fork()
        except OSError as e:
            raise ProcessSetupError(f"fork failed: {e}", ExitCode.NO_FORK) from e
        if pid > 0:
            # parent
            os._exit(ExitCode.OK)
        try:
            os.setsid()
        except OSError as e:
            raise ProcessSetupError(f"setsid failed: {e}", ExitCode.NO_SETSID) from e
        os.umask(self.cfg.daemon.umask)
        try:
            os.chdir(self.cfg.daemon.workdir)
        except OSError as e:
            raise ProcessSetupError(f"chdir {self.cfg.daemon.workdir} failed: {e}", ExitCode.ERR_CHDIR) from e
        devnull = os.open(os.devnull, os.O_RDWR)
        for fd in (0, 1, 2):
            os.dup2(devnull, fd)
        if devnull > 2:
            os.close(devnull)
        self._log.info("Detached as pid %d", os.getpid())

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGHUP, self._on_signal)
        signal.signal(signal.SIGTERM, self._on_signal)
        for s in UNEXPECTED_SIGNALS:
            signal.signal(s, self._on_signal)

    def _on_signal(self, signum, frame=None) -> None:
        # runs between bytecodes of the main thread: plain attribute writes only
        if signum == signal.SIGHUP:
            return
        self.request_stop(ExitCode.RECV_SIGTERM if signum == signal.SIGTERM else ExitCode.WEIRD_EXIT)

    def request_stop(self, code: ExitCode) -> None:
        if self.cancel.is_set():
            return
        self.exit_code = code
        if self.loop is not None:
            self.loop.request_stop(code)
        self.cancel.set()

    # --- main ---------------------------------------------------------
    def run(self) -> ExitCode:
        """Run the control loop to completion and return the process exit code."""
        with LifecycleManager._active_lock:
            if LifecycleManager._active:
                raise RuntimeError("a control loop is already running in this process")
            LifecycleManager._active = True
        try:
            try:
                client = self.client_factory(self.cfg.remote.timeout_s)
            except ThermolinkError as e:
                self._log.error("%s", e)
                return e.code
            with client:
                self.loop = self.loop_factory(self.cfg, client)
                try:
                    self.loop.run(self.cancel)
                except ThermolinkError as e:
                    self._log.error("%s", e)
                    return e.code
            if not self.cancel.is_set():
                return ExitCode.WEIRD_EXIT
            self._log.info("Stop requested (%s); loop finished its cycle", self.exit_code.name)
            return self.exit_code
        finally:
            with LifecycleManager._active_lock:
                LifecycleManager._active = False

    def start(self) -> ExitCode:
        """Daemon entry: detach when configured, install handlers, run."""
        if self.cfg.daemon.detach:
            self._log.info("-Using daemon-")
            try:
                self.daemonize()
            except ProcessSetupError as e:
                self._log.error("%s", e)
                return e.code
        else:
            self._log.info("-Using foreground-")
        self.install_signal_handlers()
        return self.run()

def exit_process(code: ExitCode) -> int:
    log.info("%s", describe(code))
    return int(code)
