"""Handler chains, retry policy and tracing for message-queue consumers."""

from __future__ import annotations

import base64
import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from brick import jsonutil
from brick.trace import Context, Metadata

logger = logging.getLogger(__name__)

EVENT_CODE_ACK_FAIL = 5010001
EVENT_CODE_NACK_FAIL = 5010002
EVENT_CODE_RETRY_INFINITELY = 5010003

DEFAULT_MAX_RETRY_TIMES = 5

_NETWORK_ERRORS: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError)


class EventError(Exception):
    """An error that carries a consumer event code."""

    def __init__(self, code: int, reason: str, cause: BaseException | None = None) -> None:
        super().__init__(reason)
        self.code = code
        self.reason = reason
        if cause is not None:
            self.__cause__ = cause


@dataclass
class Delivery:
    """A message received from a broker."""

    body: bytes = b""
    message_id: str = ""
    timestamp: datetime | None = None
    type: str = ""
    app_id: str = ""
    consumer_tag: str = ""
    routing_key: str = ""


Handler = Callable[["HandlerContext", Sequence[Delivery], int], Any]
HandlerRecover = Callable[["HandlerContext", Sequence[Delivery], int, BaseException], "BaseException | None"]


def default_handler_recover(
    ctx: HandlerContext, deliveries: Sequence[Delivery], idx: int, exc: Any
) -> BaseException:
    """Turn what a handler raised into an exception, log it and return it."""
    if isinstance(exc, BaseException):
        err = exc
    elif isinstance(exc, str):
        err = RuntimeError(exc)
    else:
        err = RuntimeError(str(exc))
    first = deliveries[0] if deliveries else Delivery()
    logger.error(
        "[rabbitmq-consumer][%d] delivery handlers recover: %s "
        "(routine_key=%s, message_id=%s, body=%s)",
        idx,
        err,
        first.routing_key,
        first.message_id,
        first.body.decode("utf-8", errors="replace"),
    )
    return err


class HandlerContext(Context):
    """The context passed along a chain of handlers."""

    def __init__(
        self,
        chain: Sequence[Handler],
        ctx: Context | None = None,
        recover: HandlerRecover | None = None,
    ) -> None:
        super().__init__(ctx)
        self._layer = 0
        self._chain = list(chain)
        self._recover = recover or default_handler_recover

    def handle(self, deliveries: Sequence[Delivery], index: int) -> Any:
        """Run the chain from its first handler.

        Whatever a handler raises goes through the recover function; the
        exception it returns is raised again.
        """
        try:
            return self._chain[0](self, deliveries, index)
        except Exception as exc:  # noqa: BLE001
            err = self._recover(self, deliveries, index, exc)
            if err is not None:
                raise err from (None if err is exc else exc)
            return None

    def next(self, deliveries: Sequence[Delivery], index: int) -> Any:
        """Call the next handler of the chain; not safe for concurrent use."""
        self._layer += 1
        if self._layer >= len(self._chain):
            return None
        return self._chain[self._layer](self, deliveries, index)


class Counter:
    """Per-key counters guarded by a lock."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def increase(self, key: str) -> int:
        """Bump the counter for ``key``; the id handed out is always 0."""
        with self._lock:
            if key in self._counts:
                self._counts[key] += 1
            else:
                self._counts[key] = 0
        return 0


def default_retry_time_interval(retry_times: int) -> float:
    """Return the wait in seconds before the given retry."""
    return {1: 1.0, 2: 5.0, 3: 10.0, 4: 30.0}.get(retry_times, 60.0)


def _find(err: BaseException | None, types: type[BaseException] | tuple[type[BaseException], ...]) -> Any:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, types):
            return err
        seen.add(id(err))
        err = err.__cause__
    return None


class RetryHandler:
    """Retry policy for failed consumption."""

    def __init__(
        self,
        enable: bool = True,
        max_retry_times: int = DEFAULT_MAX_RETRY_TIMES,
        time_interval_func: Callable[[int], float] = default_retry_time_interval,
        log_prefix: str = "",
    ) -> None:
        self.enable = enable
        self.retry_times = 0
        self.max_retry_times = max_retry_times
        self.time_interval_func = time_interval_func
        self.log_prefix = log_prefix

    def infinite_retry(self, err: BaseException) -> bool:
        """Report whether the error calls for retrying without limit."""
        if _find(err, _NETWORK_ERRORS) is not None:
            logger.warning("%sinternal network error. triggers continuous retry...: %s", self.log_prefix, err)
            return True
        event = _find(err, EventError)
        if event is not None:
            if event.code == EVENT_CODE_RETRY_INFINITELY:
                return True
            return _find(event.__cause__, _NETWORK_ERRORS) is not None
        return "connection" in str(err)

    def exceeded_limit(self) -> bool:
        """Report whether the retry limit has been reached; 0 means no limit."""
        return self.max_retry_times > 0 and self.retry_times >= self.max_retry_times

    def clear_retried_times(self) -> None:
        """Reset the retry count."""
        self.retry_times = 0

    def clone_config(self, source: RetryHandler) -> None:
        """Copy the policy and state of another handler."""
        self.enable = source.enable
        self.retry_times = source.retry_times
        self.max_retry_times = source.max_retry_times
        self.time_interval_func = source.time_interval_func

    def next_interval(self) -> float:
        """Count one more retry and return the seconds to wait before it."""
        self.retry_times += 1
        return self.time_interval_func(self.retry_times)


def _millis(ts: datetime | None) -> int:
    return int(ts.timestamp() * 1000) if ts is not None else 0


@dataclass(frozen=True)
class TraceItem:
    """The traced fields of one delivery."""

    message_id: str = ""
    timestamp: datetime | None = None
    type: str = ""
    app_id: str = ""
    consumer_tag: str = ""
    routing_key: str = ""
    body: bytes = b""

    @classmethod
    def _from_delivery(cls, d: Delivery) -> TraceItem:
        return cls(d.message_id, d.timestamp, d.type, d.app_id, d.consumer_tag, d.routing_key, d.body)

    def as_dict(self) -> dict[str, Any]:
        """Return the item as a log field mapping."""
        return {
            "message_id": self.message_id,
            "timestamp": _millis(self.timestamp),
            "type": self.type,
            "app_id": self.app_id,
            "consumer_tag": self.consumer_tag,
            "routing_key": self.routing_key,
            "body": self.body.decode("utf-8", errors="replace"),
        }

    def _json_dict(self) -> dict[str, Any]:
        return {
            "MessageId": self.message_id,
            "Timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "Type": self.type,
            "AppId": self.app_id,
            "ConsumerTag": self.consumer_tag,
            "RoutingKey": self.routing_key,
            "Body": base64.b64encode(self.body).decode("ascii"),
        }


@dataclass
class ConsumerTrace(Metadata):
    """Trace metadata for one batch of consumed deliveries."""

    messages: list[TraceItem] = field(default_factory=list)
    consumer_id: int = 0
    cost: int = 0
    err: BaseException | None = None
    _module: str = "rabbitmq-consumer"

    def module(self) -> str:
        return self._module

    def __str__(self) -> str:
        messages = jsonutil.marshal_to_string([m._json_dict() for m in self.messages])
        out = (
            f"module: {self._module} | messages: {messages}"
            f" | consumer_id: {self.consumer_id} | cost: {self.cost}"
        )
        if self.err is not None:
            out += f" | err: {self.err}"
        return out

    def as_dict(self) -> dict[str, Any]:
        """Return the trace as a log field mapping."""
        return {
            "module": self._module,
            "messages": [m.as_dict() for m in self.messages],
            "consumer_id": self.consumer_id,
            "cost": self.cost,
            "err": "" if self.err is None else str(self.err),
        }


def new_trace_md(
    err: BaseException | None, deliveries: Sequence[Delivery], cost: int, idx: int
) -> ConsumerTrace:
    """Create trace metadata for a batch; ``cost`` is in milliseconds."""
    return ConsumerTrace(
        messages=[TraceItem._from_delivery(d) for d in deliveries],
        consumer_id=idx,
        cost=cost,
        err=err,
    )