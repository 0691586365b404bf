"""Telemetry and configuration shared by every layer."""

from . import telemetry
from .config import MacroSettings

__all__ = ["telemetry", "MacroSettings"]
