from __future__ import annotations

import math
from typing import Any, Dict

from coloraide import Color

from .permutations import HEX_DIGITS

INK_DARK = "#000000"
INK_LIGHT = "#ffffff"


def canon_code(s: str | None) -> str:
    """Normalize to 'rrggbb'; accept an optional '#' and 3 or 6 hex digits."""
    raw = (s or "").strip().lower().removeprefix("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    # strip() leaves something behind only if a non-hex character is present
    if len(raw) != 6 or raw.strip(HEX_DIGITS):
        raise ValueError(f"invalid color code: {s!r}")
    return raw


def ink_for(code: str) -> str:
    """Label colour with the better WCAG contrast against the swatch."""
    c = Color("#" + code)
    return INK_DARK if c.contrast(INK_DARK) >= c.contrast(INK_LIGHT) else INK_LIGHT


def swatch(code: str) -> Dict[str, Any]:
    code = canon_code(code)
    c = Color("#" + code)
    h, s, l = c.convert("hsl").coords()
    if math.isnan(h):
        h = 0.0  # achromatic
    return {
        "code": code,
        "css": f"#{code}",
        "clipboard": f"#{code}",
        "rgb": [int(code[i : i + 2], 16) for i in (0, 2, 4)],
        "hsl": [round(h, 2), round(s * 100.0, 2), round(l * 100.0, 2)],
        "ink": ink_for(code),
    }


__all__ = ["canon_code", "ink_for", "swatch"]
