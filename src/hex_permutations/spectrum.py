# spectrum.py – hue-sorted overview strip for a generated palette
#   - strided sampling, capped at ~2000 codes
#   - HSL hue per code (achromatic → 0), vectorised in NumPy
#   - bars drawn left→right in hue order, 10% white→black vertical overlay

from __future__ import annotations

import io
import logging
from typing import List, Sequence

import numpy as np
from PIL import Image

log = logging.getLogger(__name__)

SAMPLE_CAP = 2000
WIDTH = 800
HEIGHT = 200
OVERLAY_ALPHA = 0.1


def sample(codes: Sequence[str], cap: int = SAMPLE_CAP) -> List[str]:
    """Every `step`-th code from index 0; may slightly exceed `cap`."""
    if not codes:
        return []
    size = min(len(codes), max(1, int(cap)))
    step = max(1, len(codes) // size)
    return list(codes[::step])


def to_rgb(codes: Sequence[str]) -> np.ndarray:
    """RRGGBB strings → N×3 uint8."""
    if not codes:
        return np.empty((0, 3), dtype=np.uint8)
    raw = bytes.fromhex("".join(c.lstrip("#") for c in codes))
    return np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3)


def hues(codes: Sequence[str]) -> np.ndarray:
    """HSL hue in degrees [0, 360); grey codes get 0."""
    rgb = to_rgb(codes).astype(np.float64) / 255.0
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    mx = rgb.max(axis=1)
    mn = rgb.min(axis=1)
    d = mx - mn
    grey = d == 0
    d = np.where(grey, 1.0, d)  # avoid 0/0, masked below

    h = np.where(
        mx == r,
        (g - b) / d + np.where(g < b, 6.0, 0.0),
        np.where(mx == g, (b - r) / d + 2.0, (r - g) / d + 4.0),
    )
    return np.where(grey, 0.0, h * 60.0)


def hue_sorted(codes: Sequence[str], cap: int = SAMPLE_CAP) -> List[str]:
    picked = sample(codes, cap)
    order = np.argsort(hues(picked), kind="stable")
    return [picked[i] for i in order]


def render(
    codes: Sequence[str],
    width: int = WIDTH,
    height: int = HEIGHT,
    cap: int = SAMPLE_CAP,
) -> np.ndarray:
    """Draw the spectrum strip as an H×W×3 uint8 array."""
    if width < 1 or height < 1:
        raise ValueError("width and height must be ≥ 1")
    ordered = hue_sorted(codes, cap)
    if not ordered:
        raise ValueError("nothing to render: empty palette")

    n = len(ordered)
    bar_w = width / n
    # column x belongs to the last bar painted over it
    cols = np.minimum((np.arange(width) / bar_w).astype(np.int64), n - 1)
    strip = to_rgb(ordered)[cols].astype(np.float32)  # W×3
    img = np.broadcast_to(strip, (height, width, 3))

    # white at the top fading to black at the bottom
    t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None, None]
    overlay = 255.0 * (1.0 - t)
    out = img * (1.0 - OVERLAY_ALPHA) + overlay * OVERLAY_ALPHA
    log.debug("spectrum: %d bars over %dx%d px", n, width, height)
    return np.clip(np.round(out), 0, 255).astype(np.uint8)


def render_png(
    codes: Sequence[str],
    width: int = WIDTH,
    height: int = HEIGHT,
    cap: int = SAMPLE_CAP,
) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(render(codes, width, height, cap)).save(buf, format="PNG")
    return buf.getvalue()


__all__ = ["hue_sorted", "hues", "render", "render_png", "sample"]
