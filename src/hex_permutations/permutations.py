from __future__ import annotations

import logging
from itertools import product
from typing import Iterator, List, Sequence, Tuple

log = logging.getLogger(__name__)

ColorCode = str

CODE_LENGTH = 6  # RRGGBB
MAX_ALPHABET = 6  # 6**6 = 46,656 codes at most
HEX_DIGITS = "0123456789abcdef"


def canon_alphabet(raw: str | None) -> Tuple[str, bool]:
    """Normalize user input into an alphabet; returns (alphabet, capped).

    Lowercases and strips; any non-hex character is rejected outright.
    Input longer than MAX_ALPHABET is truncated and flagged as capped.
    """
    s = (raw or "").strip().lower()
    bad = sorted({c for c in s if c not in HEX_DIGITS})
    if bad:
        raise ValueError(f"only 0-9 and a-f are allowed (got {''.join(bad)!r})")
    if len(s) > MAX_ALPHABET:
        return s[:MAX_ALPHABET], True
    return s, False


def _check_bound(alphabet: Sequence[str]) -> None:
    if len(alphabet) > MAX_ALPHABET:
        raise ValueError(
            f"alphabet of {len(alphabet)} characters exceeds the limit of {MAX_ALPHABET}"
        )


def iter_permutations(alphabet: Sequence[str]) -> Iterator[ColorCode]:
    """
    Lazily yield every 6-character code drawable from `alphabet`.

    Order is base-n counting, most significant digit leftmost, digits taken
    in the order they appear in `alphabet`. A single character gives exactly
    one code (itself repeated), which is what the general rule produces too.
    Repeated characters are not collapsed.
    """
    _check_bound(alphabet)
    if not alphabet:
        return iter(())
    return ("".join(p) for p in product(alphabet, repeat=CODE_LENGTH))


def generate(alphabet: Sequence[str]) -> List[ColorCode]:
    codes = list(iter_permutations(alphabet))
    log.debug("generated %d codes from %r", len(codes), "".join(alphabet))
    return codes


__all__ = [
    "CODE_LENGTH",
    "ColorCode",
    "HEX_DIGITS",
    "MAX_ALPHABET",
    "canon_alphabet",
    "generate",
    "iter_permutations",
]
