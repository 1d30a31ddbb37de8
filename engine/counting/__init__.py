"""Card counting systems."""

from engine.counting.base import CountingSystem
from engine.counting.hilo import HiLoSystem

__all__ = [
    "CountingSystem",
    "HiLoSystem",
]
