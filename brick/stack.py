"""Capture of the current call stack as a list of frame descriptions."""

from __future__ import annotations

import enum
import inspect
import sys
from dataclasses import dataclass
from types import FrameType

from brick import jsonutil


class StacktraceDepth(enum.IntEnum):
    """How many frames of a stack trace to capture."""

    FULL = -1
    FIRST = 1
    MAX = 10


@dataclass(frozen=True)
class StackInfo:
    """One frame of a stack trace."""

    func: str
    file: str
    line: int

    def as_dict(self) -> dict[str, str]:
        """Return the frame as a log field mapping with ``file:line`` joined."""
        return {"func": self.func, "file": f"{self.file}:{self.line}"}


class StackList(list):
    """A list of StackInfo frames, innermost first."""

    def __str__(self) -> str:
        return jsonutil.marshal_to_string(
            [{"func": s.func, "file": s.file, "line": s.line} for s in self]
        )


def _describe(frame: FrameType) -> StackInfo:
    code = frame.f_code
    name = getattr(code, "co_qualname", code.co_name)
    module = inspect.getmodulename(code.co_filename)
    func = f"{module}.{name}" if module else name
    return StackInfo(func=func, file=code.co_filename, line=frame.f_lineno)


def take_stack(skip: int = 0, depth: StacktraceDepth = StacktraceDepth.FULL) -> StackList:
    """Capture the call stack of the caller.

    ``skip`` = 0 starts at the function that called take_stack. The outermost
    interpreter entry frame is left out when the whole stack fits the depth.
    """
    if skip < 0:
        raise ValueError("skip must not be negative")
    try:
        frame: FrameType | None = sys._getframe(skip + 1)
    except ValueError:
        return StackList()
    frames: list[FrameType] = []
    while frame is not None:
        frames.append(frame)
        frame = frame.f_back
    limit = None if depth == StacktraceDepth.FULL else int(depth)
    if limit is None or len(frames) <= limit:
        frames = frames[:-1]
    else:
        frames = frames[:limit]
    return StackList(_describe(f) for f in frames)


def trimmed_path(file: str) -> str:
    """Keep only the leaf directory and file name of a slash-separated path."""
    idx = file.rfind("/")
    if idx == -1:
        return file
    idx = file.rfind("/", 0, idx)
    if idx == -1:
        return file
    return file[idx + 1:]