"""Placeholder substitution for the HTML shell and error page templates."""

from __future__ import annotations

import re
from enum import Enum
from typing import Collection, Mapping

from ..errors import TemplateError

_MARKER_PATTERN = re.compile(r"%sveltekit\.[\w.]+%")


class Token(str, Enum):
    HEAD = "%sveltekit.head%"
    BODY = "%sveltekit.body%"
    ASSETS = "%sveltekit.assets%"
    NONCE = "%sveltekit.nonce%"
    STATUS = "%sveltekit.status%"
    MESSAGE = "%sveltekit.error.message%"

    @property
    def first_only(self) -> bool:
        return self in (Token.HEAD, Token.BODY)


APP_TOKENS = (Token.HEAD, Token.BODY, Token.ASSETS, Token.NONCE)
APP_REQUIRED = (Token.HEAD, Token.BODY)
ERROR_TOKENS = (Token.STATUS, Token.MESSAGE)


def check_template(
    text: str,
    name: str,
    allowed: Collection[Token],
    required: Collection[Token] = (),
) -> None:
    """Raise :class:`TemplateError` for missing or unrecognized markers."""

    for token in required:
        if token.value not in text:
            raise TemplateError(f"{name} is missing {token.value}")

    known = {token.value for token in allowed}
    for marker in _MARKER_PATTERN.findall(text):
        if marker not in known:
            raise TemplateError(f"{name} contains unrecognized placeholder {marker}")


def substitute(text: str, replacements: Mapping[Token, str]) -> str:
    """Replace each recognized token in ``text``.

    Head and body markers are replaced at their first occurrence only;
    every other marker at each occurrence.
    """

    for token, replacement in replacements.items():
        count = 1 if token.first_only else -1
        text = text.replace(token.value, replacement, count)
    return text
