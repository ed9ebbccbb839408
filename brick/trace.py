"""Trace identifiers and chains of trace metadata carried in a context."""

from __future__ import annotations

import abc
import threading
import uuid
from typing import Any, Protocol

from brick.spinlock import SpinLock

KEY_TRACE_ID = "b_trace_id"
KEY_TRACE_CHAIN = "b_trace_chain"


class Context:
    """A key-value store with an optional parent that lookups fall back to."""

    def __init__(self, parent: Context | None = None) -> None:
        self._parent = parent
        self._values: dict[Any, Any] = {}
        self._lock = threading.RLock()

    def get(self, key: Any) -> Any:
        """Return the value for ``key`` here or in a parent, or None."""
        with self._lock:
            if key in self._values:
                return self._values[key]
        if self._parent is not None:
            return self._parent.get(key)
        return None

    def set(self, key: Any, value: Any) -> Context:
        """Store a value in this context and return it."""
        with self._lock:
            self._values[key] = value
        return self

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a new child context that holds the value."""
        return Context(self).set(key, value)


class Metadata(abc.ABC):
    """One entry of a trace chain."""

    @abc.abstractmethod
    def module(self) -> str:
        """Return the name of the module the metadata belongs to."""

    @abc.abstractmethod
    def __str__(self) -> str:
        ...


class DefaultMetadata(Metadata):
    """Metadata made of a module name and a free-form value."""

    __slots__ = ("_module", "_value")

    def __init__(self, module: str, value: str) -> None:
        self._module = module
        self._value = value

    def module(self) -> str:
        return self._module

    def __str__(self) -> str:
        return f"module: {self._module}, value: {self._value}"

    def __repr__(self) -> str:
        return f"DefaultMetadata({self._module!r}, {self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefaultMetadata):
            return NotImplemented
        return (self._module, self._value) == (other._module, other._value)

    def __hash__(self) -> int:
        return hash((self._module, self._value))

    def as_dict(self) -> dict[str, str]:
        """Return the metadata as a log field mapping."""
        return {"module": self._module, "value": self._value}


class Chain:
    """An ordered, thread-safe list of trace metadata."""

    def __init__(self) -> None:
        self._items: list[Metadata] = []
        self._lock = SpinLock()

    def append(self, *metadata: Metadata) -> None:
        """Add metadata to the end of the chain."""
        with self._lock:
            self._items.extend(metadata)

    def get(self) -> list[Metadata]:
        """Return a copy of the chain's metadata."""
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        """Remove all metadata."""
        with self._lock:
            self._items = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __str__(self) -> str:
        with self._lock:
            return " --> ".join(
                f"[{number}]{{{item}}}" for number, item in enumerate(self._items, start=1)
            )


def new_md(module: str, value: str) -> Metadata:
    """Create default metadata."""
    return DefaultMetadata(module, value)


def new_chain() -> Chain:
    """Create an empty chain."""
    return Chain()


def append_md_into_ctx(ctx: Any, md: Metadata) -> bool:
    """Append metadata to the chain stored in the context.

    A new chain is created when the context holds none. Returns False, doing
    nothing, if ``ctx`` is not a Context.
    """
    if not isinstance(ctx, Context):
        return False
    chain = ctx.get(KEY_TRACE_CHAIN)
    if not isinstance(chain, Chain):
        chain = new_chain()
    chain.append(md)
    ctx.set(KEY_TRACE_CHAIN, chain)
    return True


def get_md_from_ctx(ctx: Context) -> Chain | None:
    """Return the chain stored in the context, or None."""
    chain = ctx.get(KEY_TRACE_CHAIN)
    return chain if isinstance(chain, Chain) else None


class TraceIDGenerator(Protocol):
    def gen_trace_id(self) -> str:
        ...


class UUIDTraceIDGenerator:
    """Generates trace IDs as hex-encoded random UUIDs."""

    def gen_trace_id(self) -> str:
        return uuid.uuid4().hex


_generator: TraceIDGenerator = UUIDTraceIDGenerator()


def replace_trace_id_generator(gen: TraceIDGenerator) -> None:
    """Use ``gen`` to generate trace IDs from now on."""
    global _generator
    _generator = gen


def gen_trace_id() -> str:
    """Generate a new trace ID."""
    return _generator.gen_trace_id()


def set_trace_id(ctx: Context, *trace_ids: str) -> Context:
    """Store a trace ID in the context and return it.

    The first given ID is used; with none, a new one is generated.
    """
    if not isinstance(ctx, Context):
        raise TypeError(f"expected a Context, got {type(ctx).__name__}")
    trace_id = trace_ids[0] if trace_ids else _generator.gen_trace_id()
    return ctx.set(KEY_TRACE_ID, trace_id)


def get_trace_id(ctx: Context) -> str:
    """Return the trace ID stored in the context, or an empty string."""
    value = ctx.get(KEY_TRACE_ID)
    return value if isinstance(value, str) else ""