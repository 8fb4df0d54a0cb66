from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from thermolink.actuators import FileHeaterActuator, HeaterState
from thermolink.config import Control
from thermolink.errors import (ActuatorWriteError, ExitCode, LocalInterfaceMissing,
                               SensorNotFound, TransportError)
from thermolink.remote import RemoteThermostatAPI
from thermolink.sensors import TemperatureSensor

class LoopState(Enum):
    IDLE = "idle"; RUNNING = "running"; STOPPING = "stopping"; STOPPED = "stopped"

@dataclass
class CycleReport:
    measurement: Optional[bytes] = None
    published: bool = False
    desired_heat: Optional[bool] = None
    command: Optional[HeaterState] = None
    written: bool = False

@dataclass
class State:
    loop: LoopState = LoopState.IDLE
    cycles: int = 0
    last_report: CycleReport | None = None
    last_cycle_at: float | None = None
    exit_code: ExitCode = ExitCode.OK

class ControlLoop:
    """
    read sensor -> publish -> fetch desired state -> actuate -> wait.

    Step failures are logged and the cycle carries on; a stop request is only
    honoured between cycles.
    """
    def __init__(self, sensor: TemperatureSensor, remote: RemoteThermostatAPI,
                 actuator: FileHeaterActuator, control: Control):
        self.sensor = sensor; self.remote = remote; self.act = actuator; self.cfg = control
        self.s = State()
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def check_interfaces(self) -> None:
        missing = [name for name, ok in (("sensor", self.sensor.exists()), ("actuator", self.act.exists())) if not ok]
        if missing:
            self._log.error("Thermocouple failed: missing %s", ", ".join(missing))
            raise LocalInterfaceMissing(f"required local interface missing: {', '.join(missing)}")
        self._log.info("Thermocouple succeeded.")

    def run_cycle(self) -> CycleReport:
        rep = CycleReport()
        try:
            rep.measurement = self.sensor.read()
        except SensorNotFound as e:
            self._log.error("Sensor read failed, skipping publish: %s", e)
        if rep.measurement is not None:
            try:
                self.remote.publish(rep.measurement); rep.published = True
            except TransportError as e:
                self._log.error("Publish failed: %s", e)
        try:
            rep.desired_heat = self.remote.fetch_desired_state()
        except TransportError as e:
            self._log.error("Status request failed, heater left %s: %s",
                            self.act.state.value if self.act.state else "unchanged", e)
        if rep.desired_heat is not None:
            rep.command = HeaterState.from_desired(rep.desired_heat)
            try:
                self.act.write(rep.command); rep.written = True
            except ActuatorWriteError as e:
                self._log.error("%s (%s)", e, rep.command.value)
        self.s.cycles += 1; self.s.last_report = rep; self.s.last_cycle_at = time.time()
        self._log.info("Cycle %d: temp=%r published=%s heater=%s", self.s.cycles, rep.measurement,
                       rep.published, rep.command.value if rep.written else "unchanged")
        return rep

    def request_stop(self, code: ExitCode = ExitCode.RECV_SIGTERM) -> None:
        if self.s.loop == LoopState.RUNNING:
            self.s.loop = LoopState.STOPPING
        self.s.exit_code = code

    def run(self, cancel: "StopFlag") -> ExitCode:
        """Run until `cancel` is set; returns the exit code recorded with the stop request."""
        self.check_interfaces()
        self.s.loop = LoopState.RUNNING
        try:
            while not cancel.is_set():
                self.run_cycle()
                if cancel.wait(self.cfg.interval_s):
                    break
        finally:
            self.s.loop = LoopState.STOPPED
            self._log.info("Control loop stopped after %d cycles", self.s.cycles)
        return self.s.exit_code

class StopFlag:
    """
    Cancellation flag safe to set from a signal handler: a plain attribute,
    no locks. wait() sleeps in short slices and returns early once set.
    """
    slice_s = 0.1

    def __init__(self):
        self.requested = False

    def set(self) -> None: self.requested = True
    def is_set(self) -> bool: return self.requested

    def wait(self, timeout: float) -> bool:
        end = time.monotonic() + timeout
        while not self.requested:
            left = end - time.monotonic()
            if left <= 0:
                break
            time.sleep(min(self.slice_s, left))
        return self.requested
