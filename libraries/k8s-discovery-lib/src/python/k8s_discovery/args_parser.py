"""Parsing of ``key=value`` discovery strings.

``provider=k8s label_selector="app = cache"`` becomes
``{"provider": "k8s", "label_selector": "app = cache"}``. Values follow
shell quoting rules.
"""

from __future__ import annotations

import shlex
from typing import Iterable

from .exceptions import InvalidArgumentError


def parse_args(text: str) -> dict[str, str]:
    """Parse a whole discovery string into an args map."""
    try:
        tokens = shlex.split(text)
    except ValueError as exc:
        raise InvalidArgumentError("args", text, reason=str(exc)) from exc
    return parse_pairs(tokens)


def parse_pairs(tokens: Iterable[str]) -> dict[str, str]:
    """Parse already split ``key=value`` tokens. Later keys win."""
    args: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise InvalidArgumentError("args", token, reason="expected key=value")
        args[key.strip()] = value
    return args
