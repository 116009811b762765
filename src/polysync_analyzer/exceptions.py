"""
Exception types raised by the syncopation analyzer.

Only caller configuration problems are raised. Data anomalies such as
out-of-range quantized steps are logged and skipped instead.
"""


class PolysyncError(Exception):
    """Base class for analyzer errors."""


class UnknownInstrumentError(PolysyncError, KeyError):
    """Raised when a pitch has no entry in the instrument map."""

    def __init__(self, pitch: int):
        self.pitch = pitch
        super().__init__(f"unknown instrument for pitch {pitch}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class GridConfigurationError(PolysyncError, ValueError):
    """Raised when grid length and metrical weights do not agree."""
