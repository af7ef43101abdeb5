"""Ordering helpers for account codes."""

import re
from typing import Optional

_CHUNKS = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    """Split text into digit and non-digit runs so "Item 2" sorts before "Item 10"."""
    key = []
    for chunk in _CHUNKS.split(text):
        if not chunk:
            continue
        if chunk.isdecimal():
            key.append((0, int(chunk), ""))
        else:
            key.append((1, 0, chunk.casefold()))
    return tuple(key)


def code_sort_key(code: Optional[str], name: str = "") -> tuple:
    """Sort key for account codes.

    Purely numeric codes compare as integers, other codes use natural
    ordering, entries without a code go after every entry with one, and
    ties are broken by name.
    """
    code = (code or "").strip()
    if not code:
        return (1, (), name.casefold())
    if code.isdecimal():
        return (0, ((0, int(code), ""),), name.casefold())
    return (0, natural_key(code), name.casefold())
