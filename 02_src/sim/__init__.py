"""Simulated event source."""

from .sim import Sim

__all__ = ["Sim"]
