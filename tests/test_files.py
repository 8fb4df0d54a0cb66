import pytest
from thermolink.actuators import FileHeaterActuator, HeaterState
from thermolink.errors import ActuatorWriteError, SensorNotFound
from thermolink.sensors import FileTemperatureSensor

def test_sensor_reads_verbatim(tmp_path):
    p = tmp_path / "temp"; p.write_bytes(b" 21.25\r\n")
    assert FileTemperatureSensor(str(p)).read() == b" 21.25\r\n"

def test_sensor_missing(tmp_path):
    s = FileTemperatureSensor(str(tmp_path / "nope"))
    assert not s.exists()
    with pytest.raises(SensorNotFound):
        s.read()

def test_actuator_overwrites(tmp_path):
    p = tmp_path / "status"; p.write_text("something much longer\n")
    a = FileHeaterActuator(str(p))
    a.write(HeaterState.OFF)
    assert p.read_bytes() == b"OFF"
    a.write("ON")
    assert p.read_bytes() == b"ON" and a.state is HeaterState.ON

def test_actuator_write_failure(tmp_path):
    a = FileHeaterActuator(str(tmp_path / "no" / "status"))
    with pytest.raises(ActuatorWriteError):
        a.write(HeaterState.ON)
    assert a.state is None

def test_actuator_rejects_other_states(tmp_path):
    with pytest.raises(ValueError):
        FileHeaterActuator(str(tmp_path / "status")).write("MAYBE")

def test_heater_state_from_desired():
    assert HeaterState.from_desired(True) is HeaterState.ON
    assert HeaterState.from_desired(False) is HeaterState.OFF

def test_sensor_returns_undecodable_bytes_unchanged(tmp_path):
    p = tmp_path / "temp"; p.write_bytes(b"\xff\xfe72.5")
    assert FileTemperatureSensor(str(p)).read() == b"\xff\xfe72.5"
