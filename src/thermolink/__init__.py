"""Local thermostat agent bridging a sensor file and heater file to a cloud API."""

__version__ = "0.1.0"
