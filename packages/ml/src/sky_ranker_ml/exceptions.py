"""Errors raised by the ranking engine."""

from __future__ import annotations


class InvalidInput(ValueError):  # noqa: N818
    """Structurally invalid ranking request; terminal for the request."""
