from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CollectionError(Exception):
    """A controlled failure from one of the OS collaborators.

    Never propagated past the collector boundary: it travels inside an
    ``Outcome`` and is logged by the collection pass.
    """

    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


ENUMERATION_FAILED = "enumeration_failed"
COUNTER_RETRIEVAL_FAILED = "counter_retrieval_failed"
