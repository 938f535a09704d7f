"""Base collector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from ..errors import CollectionError

if TYPE_CHECKING:
    from .disk import DiskCounters, Partition

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Either a value or a CollectionError, never both."""

    value: T | None = None
    error: CollectionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, code: str, message: str) -> Outcome[T]:
        return cls(error=CollectionError(code=code, message=message))


class BaseCollector(ABC):
    """Abstract base class for disk I/O sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Collector name used in diagnostics."""
        ...

    @abstractmethod
    def partitions(self) -> Outcome[list[Partition]]:
        """List mounted partitions."""
        ...

    @abstractmethod
    def counters(self, device: str) -> Outcome[list[DiskCounters]]:
        """Return I/O counter records for one partition device."""
        ...
