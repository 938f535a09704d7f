"""Base formatter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..metrics import Registry


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, registry: Registry) -> str:
        """Format a populated registry to string."""
        ...
