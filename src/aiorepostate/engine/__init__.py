"""Client for the external repository engine."""

from .client import EngineClient, EngineTransport

__all__ = [
    "EngineClient",
    "EngineTransport",
]
