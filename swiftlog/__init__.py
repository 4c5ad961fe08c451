"""Structured logging building blocks: fields, array and error marshalers, buffers, clocks and an encoder registry."""

__version__ = "0.1.0"