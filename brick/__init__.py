"""Small building blocks: sets, list and mapping helpers, field extraction, tracing, stacks, JSON, a spin lock and message-queue helpers."""

__version__ = "0.1.0"