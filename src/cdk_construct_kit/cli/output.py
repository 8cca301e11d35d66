"""Output helpers for the cdk-kit CLI.

Data goes to stdout so it can be piped; everything meant for a human goes to stderr.
"""

from __future__ import annotations

import sys
from typing import Iterable


def data(text: str) -> None:
    print(text, file=sys.stdout)


def data_lines(lines: Iterable[str]) -> None:
    for line in lines:
        data(line)


def info(text: str) -> None:
    print(text, file=sys.stderr)


def error(text: str) -> None:
    print(f"❌ {text}", file=sys.stderr)
