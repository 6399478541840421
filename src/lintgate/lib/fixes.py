"""fixes — newline-convention detection and replacement application.

Rules describe fixes as ``Replacement`` objects holding byte offsets into the
UTF-8 encoded source.  ``apply_replacements`` splices them in source order and
skips any replacement that overlaps one already applied, so a single pass
never produces garbled text; running the linter again picks up whatever was
skipped.
"""

from __future__ import annotations

import re
from typing import Iterable

from lintgate.lib.models import Replacement

_NEWLINE_RE = re.compile(r"\r?\n")


def detect_newline(text: str) -> str:
    """Return the dominant newline sequence of a text.

    ``"\\r\\n"`` wins only when it occurs strictly more often than a bare
    ``"\\n"``; text without any line break falls back to ``"\\n"``.
    """
    newlines = _NEWLINE_RE.findall(text)
    crlf = sum(1 for nl in newlines if nl == "\r\n")
    return "\r\n" if crlf > len(newlines) - crlf else "\n"


def apply_replacements(
    source: str, replacements: Iterable[Replacement]
) -> tuple[str, int]:
    """Apply non-overlapping replacements to a source string.

    Args:
        source: The original source text.
        replacements: Replacements with byte offsets into ``source``.

    Returns:
        Tuple of (new source text, number of replacements applied).

    Raises:
        ValueError: If a replacement range is inverted or out of bounds.
    """
    data = source.encode("utf-8")
    pieces: list[bytes] = []
    cursor = 0
    applied = 0
    for rep in sorted(replacements, key=lambda r: (r.start, r.end)):
        if rep.start > rep.end or rep.end > len(data) or rep.start < 0:
            msg = f"Replacement range {rep.start}..{rep.end} is invalid for {len(data)} bytes"
            raise ValueError(msg)
        if rep.start < cursor:
            continue
        pieces.append(data[cursor:rep.start])
        pieces.append(rep.text.encode("utf-8"))
        cursor = rep.end
        applied += 1
    pieces.append(data[cursor:])
    return b"".join(pieces).decode("utf-8"), applied
