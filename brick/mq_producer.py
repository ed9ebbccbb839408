"""Retry policy and tracing for message-queue producers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from brick.trace import Metadata

DEFAULT_MAX_RETRY_TIMES = 2


def default_retry_time_interval(times: int) -> float:
    """Return the wait in seconds before the given retry."""
    return {1: 1.0, 2: 2.0, 3: 4.0, 4: 16.0}.get(times, 60.0)


@dataclass
class ProducerTrace(Metadata):
    """Trace metadata for one published message."""

    typ: str = ""
    body: str = ""
    cost: int = 0
    err: BaseException | None = None
    _module: str = "rabbitmq-producer"

    def module(self) -> str:
        return self._module

    def __str__(self) -> str:
        out = f"module: {self._module} | type: {self.typ} | body: {self.body} | cost: {self.cost}"
        if self.err is not None:
            out += f" | err: {self.err}"
        return out

    def as_dict(self) -> dict[str, Any]:
        """Return the trace as a log field mapping."""
        return {
            "module": self._module,
            "type": self.typ,
            "body": self.body,
            "cost": self.cost,
            "err": "" if self.err is None else str(self.err),
        }


def new_trace_md(typ: str, err: BaseException | None, body: str, cost: int) -> ProducerTrace:
    """Create trace metadata for a message; ``cost`` is in milliseconds."""
    return ProducerTrace(typ=typ, body=body, cost=cost, err=err)