from enum import Enum
from pathlib import Path
from thermolink.errors import ActuatorWriteError

class HeaterState(str, Enum):
    ON = "ON"; OFF = "OFF"

    @classmethod
    def from_desired(cls, heat: bool) -> "HeaterState":
        return cls.ON if heat else cls.OFF

class FileHeaterActuator:
    """Heater sink file; each write replaces the whole content with ON or OFF."""
    def __init__(self, path: str):
        self.path = Path(path); self.state: HeaterState | None = None
    def exists(self) -> bool: return self.path.exists()
    def write(self, state: HeaterState) -> None:
        state = HeaterState(state)
        try:
            with open(self.path, 'w') as f:
                f.write(state.value)
        except OSError as e:
            raise ActuatorWriteError(f"heater state {state.value} not written to {self.path}: {e.strerror or e}") from e
        self.state = state
