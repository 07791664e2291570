"""
QR code rendering for generated GS1 Digital Links.

Produces PNG (via Pillow) or SVG image bytes for a link string, and the
base64 data URI used for the inline preview on the result fragment.
"""

from __future__ import annotations

import base64
import io
from typing import Literal

import qrcode
import qrcode.image.svg
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage

QRFormat = Literal["png", "svg"]

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

MIMETYPES = {
    "png": "image/png",
    "svg": "image/svg+xml",
}


def error_correction_constant(level: str) -> int:
    """Map an ``L``/``M``/``Q``/``H`` level (any case) to its qrcode constant.

    Raises:
        ValueError: If the level is not one of the four QR levels.
    """
    key = (level or "").strip().upper()
    if key not in ERROR_CORRECTION_LEVELS:
        raise ValueError(f"Unknown error correction level: {level!r}")
    return ERROR_CORRECTION_LEVELS[key]


def build_qr(
    data: str,
    error_correction: str = "M",
    box_size: int = 10,
    border: int = 4,
) -> qrcode.QRCode:
    """Create a fitted QR symbol for ``data``.

    Raises:
        ValueError: If ``data`` is empty or the level is unknown.
        qrcode.exceptions.DataOverflowError: If ``data`` does not fit in a
            version 40 symbol at the requested level.
    """
    if not data:
        raise ValueError("QR data must not be empty")

    qr = qrcode.QRCode(
        version=None,  # Auto-determine version
        error_correction=error_correction_constant(error_correction),
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    try:
        qr.make(fit=True)
    except ValueError as e:
        # qrcode reports "Invalid version (was 41, ...)" once the data outgrows version 40.
        raise DataOverflowError(str(e)) from e
    return qr


def _render_png(qr: qrcode.QRCode) -> bytes:
    img = qr.make_image(image_factory=PilImage, fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def _render_svg(qr: qrcode.QRCode) -> bytes:
    img = qr.make_image(image_factory=qrcode.image.svg.SvgImage)
    buffer = io.BytesIO()
    img.save(buffer)
    return buffer.getvalue()


def render_qr(
    data: str,
    fmt: QRFormat = "png",
    error_correction: str = "M",
    box_size: int = 10,
    border: int = 4,
) -> bytes:
    """Render ``data`` as a QR image and return the encoded file bytes."""
    if fmt not in MIMETYPES:
        raise ValueError(f"Unsupported QR format: {fmt!r}")

    qr = build_qr(data, error_correction=error_correction, box_size=box_size, border=border)
    if fmt == "svg":
        return _render_svg(qr)
    return _render_png(qr)


def png_data_uri(data: str, **kwargs) -> str:
    png = render_qr(data, fmt="png", **kwargs)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
