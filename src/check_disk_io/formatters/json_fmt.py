"""JSON formatter."""

from __future__ import annotations

import json
from typing import Any

from ..metrics import MetricSeries, Registry
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Format a registry as a JSON list of series."""

    def __init__(self, *, sort: bool = False) -> None:
        self.sort = sort

    def _series(self, s: MetricSeries) -> dict[str, Any]:
        observations = []
        for o in s.observations:
            tags = dict(sorted(o.tags.items())) if self.sort else dict(o.tags)
            observations.append({"tags": tags, "value": o.value})
        return {"name": s.name, "type": s.type.value, "help": s.help, "observations": observations}

    def format(self, registry: Registry) -> str:
        payload = [self._series(s) for s in registry.series()]
        if self.sort:
            payload.sort(key=lambda item: item["name"])
        return json.dumps(payload, ensure_ascii=False, indent=2)
