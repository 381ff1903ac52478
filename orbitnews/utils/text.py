from __future__ import annotations

import re

# C0 controls, DEL and C1 controls
_CONTROL_RE = re.compile("[\u0000-\u001f\u007f-\u009f]")


def is_control_character(ch: str) -> bool:
    code = ord(ch)
    return code <= 0x1F or 0x7F <= code <= 0x9F


def sanitize(text: str | None) -> str | None:
    """Strip control characters from untrusted feed text."""
    if text is None:
        return None
    return _CONTROL_RE.sub("", text)
