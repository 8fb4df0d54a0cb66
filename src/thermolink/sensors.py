from pathlib import Path
from thermolink.errors import SensorNotFound

class TemperatureSensor:
    def read(self) -> bytes: raise NotImplementedError
    def exists(self) -> bool: raise NotImplementedError

class FileTemperatureSensor(TemperatureSensor):
    """Temperature reading exposed by the local sensor subsystem as a plain file."""
    def __init__(self, path: str):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> bytes:
        # raw bytes; whatever the file holds is what gets published
        try:
            with open(self.path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise SensorNotFound(f"temperature source {self.path}: {e.strerror or e}") from e
