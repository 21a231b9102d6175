from __future__ import annotations

import re

_THAI_DIGITS = str.maketrans("๐๑๒๓๔๕๖๗๘๙", "0123456789")
_SEPARATORS = re.compile(r"[-\s]")


def normalize_identifier(raw: str) -> str:
    """Canonical form of a phone-number-like identifier.

    Thai numerals become ASCII digits; hyphens and whitespace are dropped.
    Nothing is reordered, truncated or validated, so the function is
    idempotent.
    """
    return _SEPARATORS.sub("", raw.translate(_THAI_DIGITS))
