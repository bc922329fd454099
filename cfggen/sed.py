"""Line-oriented, regex-driven editing of text files in the spirit of ``sed``."""

from __future__ import annotations

import os
import re
from enum import Enum
from typing import Iterable

__all__ = ["EditType", "edit_lines", "sed"]


class EditType(str, Enum):
    """The kind of edit applied to every line of a file."""

    APPEND = "a"
    """Write the new text on its own line after every matching line."""
    INSERT = "O"
    """Write the new text on its own line before every matching line."""
    INSERT_AFTER_MATCH = "i"
    """Insert the new text right after every match inside the line."""
    SUBSTITUTE = "s"
    """Replace every match inside the line with the new text."""
    DELETE = "d"
    """Drop every matching line."""


_DOLLAR_ESCAPE = re.compile(r"\$(\$|&|`|'|\d{1,2})")


def _expand(fmt: str, match: re.Match) -> str:
    """Expand ``$&``, ``$n``, ``$$``, ``$``` and ``$'`` in *fmt* for *match*."""
    groups = match.re.groups

    def _replace(m: re.Match) -> str:
        code = m.group(1)
        if code == "$":
            return "$"
        if code == "&":
            return match.group(0)
        if code == "`":
            return match.string[: match.start()]
        if code == "'":
            return match.string[match.end():]
        if len(code) == 2 and 0 < int(code) <= groups:
            return match.group(int(code)) or ""
        first = int(code[0])
        if 0 < first <= groups:
            return (match.group(first) or "") + code[1:]
        return m.group(0)

    return _DOLLAR_ESCAPE.sub(_replace, fmt)


def edit_lines(
    lines: Iterable[str], edit_type: EditType | str, pattern: str, new_str: str
) -> list[str]:
    """Apply one edit to *lines* and return the resulting lines.

    Raises ``ValueError`` for an unknown edit type.
    """
    kind = EditType(edit_type)
    regex = re.compile(pattern)
    result: list[str] = []
    for line in lines:
        if kind is EditType.APPEND:
            result.append(line)
            if regex.search(line):
                result.append(new_str)
        elif kind is EditType.INSERT:
            if regex.search(line):
                result.append(new_str)
            result.append(line)
        elif kind is EditType.INSERT_AFTER_MATCH:
            fmt = "$&" + new_str
            result.append(regex.sub(lambda m: _expand(fmt, m), line))
        elif kind is EditType.SUBSTITUTE:
            result.append(regex.sub(lambda m: _expand(new_str, m), line))
        elif kind is EditType.DELETE:
            if not regex.search(line):
                result.append(line)
    return result


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def sed(
    file_name: str | os.PathLike, edit_type: EditType | str, pattern: str, new_str: str
) -> None:
    """Edit *file_name* in place; every written line ends with a newline.

    Raises ``ValueError`` for an unknown edit type and ``OSError`` when the
    file cannot be read or written.
    """
    kind = EditType(edit_type)
    with open(file_name, encoding="utf-8", newline="") as handle:
        lines = _split_lines(handle.read())
    edited = edit_lines(lines, kind, pattern, new_str)
    with open(file_name, "w", encoding="utf-8", newline="") as handle:
        handle.writelines(line + "\n" for line in edited)