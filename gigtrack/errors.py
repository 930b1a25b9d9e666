"""Exceptions raised by the record store and metrics engine."""


class GigTrackError(Exception):
    """Base class for all tracker errors."""


class InvalidRecordError(GigTrackError, ValueError):
    """A record violates the data contract (e.g. unparseable date)."""


class OdometerError(GigTrackError, ValueError):
    """A fuel log odometer reading does not advance past the car's."""

    def __init__(self, odometer: float, current: float):
        self.odometer = odometer
        self.current = current
        super().__init__(
            f"Odometer must be higher than previous reading "
            f"({odometer:,.0f} <= {current:,.0f})"
        )


class RecordNotFoundError(GigTrackError, KeyError):
    """No record with the given id exists in the store."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "record not found"
