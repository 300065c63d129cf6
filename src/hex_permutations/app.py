from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping, Tuple

from flask import Flask, Response, current_app, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

# Project-local algorithms
from .pagination import PAGE_SIZE, paginate
from .permutations import HEX_DIGITS, MAX_ALPHABET, canon_alphabet, generate
from .spectrum import HEIGHT, SAMPLE_CAP, WIDTH, hue_sorted, render_png
from .swatch import swatch

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "PAGE_SIZE": PAGE_SIZE,
    "SPECTRUM_SAMPLE_CAP": SAMPLE_CAP,
    "SPECTRUM_WIDTH": WIDTH,
    "SPECTRUM_HEIGHT": HEIGHT,
    "SPECTRUM_MAX_WIDTH": 4096,
    "SPECTRUM_MAX_HEIGHT": 2048,
    "DEBOUNCE_THRESHOLD": 4,  # recompute immediately below this many chars
    "DEBOUNCE_MS": 500,
}


@lru_cache(maxsize=8)
def permutation_set(alphabet: str) -> Tuple[str, ...]:
    """Memoised generate(); a new alphabet always yields a fresh set."""
    return tuple(generate(alphabet))


def parse_positive(val: str | None, default: int, name: str) -> int:
    try:
        n = int(val) if val not in (None, "") else default
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if n < 1:
        raise ValueError(f"{name} must be ≥ 1")
    return n


def check_config(cfg: Mapping[str, Any]) -> None:
    """Fail at startup rather than on every request."""
    for key in (
        "PAGE_SIZE",
        "SPECTRUM_SAMPLE_CAP",
        "SPECTRUM_WIDTH",
        "SPECTRUM_HEIGHT",
        "SPECTRUM_MAX_WIDTH",
        "SPECTRUM_MAX_HEIGHT",
        "DEBOUNCE_THRESHOLD",
    ):
        val = cfg[key]
        if isinstance(val, bool) or not isinstance(val, int) or val < 1:
            raise ValueError(f"config {key} must be a positive integer, got {val!r}")
    ms = cfg["DEBOUNCE_MS"]
    if isinstance(ms, bool) or not isinstance(ms, int) or ms < 0:
        raise ValueError(f"config DEBOUNCE_MS must be a non-negative integer, got {ms!r}")


def _alphabet_arg() -> Tuple[str, bool]:
    return canon_alphabet(request.args.get("input", ""))


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder=None, template_folder="templates")
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("HEXPERM")
    if config:
        app.config.from_mapping(config)
    check_config(app.config)

    @app.errorhandler(ValueError)
    def bad_request(exc: ValueError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def failed(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Request failed: %s", request.path)
        return jsonify({"error": str(exc)}), 500

    @app.route("/")
    def index():
        return render_template(
            "index.html",
            hex_digits=HEX_DIGITS,
            max_alphabet=MAX_ALPHABET,
            debounce_threshold=current_app.config["DEBOUNCE_THRESHOLD"],
            debounce_ms=current_app.config["DEBOUNCE_MS"],
            spectrum_width=current_app.config["SPECTRUM_WIDTH"],
            spectrum_height=current_app.config["SPECTRUM_HEIGHT"],
        )

    @app.route("/palette")
    def palette():
        alphabet, capped = _alphabet_arg()
        page_number = parse_positive(request.args.get("page"), 1, "page")
        codes = permutation_set(alphabet)
        page = paginate(codes, current_app.config["PAGE_SIZE"], page_number)
        return jsonify(
            {
                "input": alphabet,
                "capped": capped,
                "count": page.total,
                "page": page.page,
                "page_size": page.page_size,
                "total_pages": page.total_pages,
                "start": page.start_ordinal,
                "end": page.end_ordinal,
                "has_prev": page.has_prev,
                "has_next": page.has_next,
                "items": [{"code": c, "css": f"#{c}"} for c in page.items],
            }
        )

    @app.route("/spectrum")
    def spectrum():
        alphabet, _ = _alphabet_arg()
        codes = permutation_set(alphabet)
        colors = hue_sorted(codes, current_app.config["SPECTRUM_SAMPLE_CAP"])
        return jsonify(
            {"input": alphabet, "count": len(codes), "sampled": len(colors), "colors": colors}
        )

    @app.route("/spectrum.png")
    def spectrum_png():
        alphabet, _ = _alphabet_arg()
        cfg = current_app.config
        width = min(
            parse_positive(request.args.get("width"), cfg["SPECTRUM_WIDTH"], "width"),
            cfg["SPECTRUM_MAX_WIDTH"],
        )
        height = min(
            parse_positive(request.args.get("height"), cfg["SPECTRUM_HEIGHT"], "height"),
            cfg["SPECTRUM_MAX_HEIGHT"],
        )
        codes = permutation_set(alphabet)
        if not codes:
            return Response(status=204)
        png = render_png(codes, width, height, cfg["SPECTRUM_SAMPLE_CAP"])
        return Response(png, mimetype="image/png")

    @app.route("/swatch/<code>")
    def swatch_details(code: str):
        return jsonify(swatch(code))

    return app
