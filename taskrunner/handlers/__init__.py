"""Handler abstraction and factory."""

from .base import Handler
from .factory import HandlerFactory

__all__ = ["Handler", "HandlerFactory"]
