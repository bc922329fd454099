"""Command line entry point: regenerate config loaders from XML workbooks."""

from __future__ import annotations

import re
import sys
from typing import Sequence

from cfggen.build import compare_files_time

__all__ = ["main"]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``XML_PATH CPP_PATH [COMPARE_TIME]`` and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print("need 2 arg, xml_path and cpp_path", file=sys.stderr)
        return 1
    compare_time = True
    if len(args) == 3:
        compare_time = _to_int(args[2]) != 0
    try:
        compare_files_time(args[0], args[1], compare_time)
    except FileNotFoundError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())