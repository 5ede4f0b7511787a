"""Runtime services shared by the buffer core and its hosts."""

from . import telemetry

__all__ = ["telemetry"]
