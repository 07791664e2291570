from __future__ import annotations

import io
from pathlib import Path

from flask import Blueprint, abort, current_app, jsonify, render_template, request, send_file, send_from_directory
from qrcode.exceptions import DataOverflowError

from gs1_link_web import log_message
from gs1_link_web.link_builder.encoder import AI_BATCH_LOT, AI_EXPIRY, AI_GTIN, AI_SERIAL, encode
from gs1_link_web.link_builder.forms import InvalidPayload, error_message, request_from_form, request_from_json
from gs1_link_web.qr.renderer import ERROR_CORRECTION_LEVELS, MIMETYPES, error_correction_constant, png_data_uri, render_qr

# blueprint router configuration
link_builder = Blueprint("link_builder", __name__)

# Path to static files for manifest and service worker
_STATIC_DIR = Path(__file__).resolve().parents[1] / "static"

#  Global constants
_DOWNLOAD_STEM = "gs1-digital-link"
_STANDARD_AIS = [
    (AI_GTIN, "GTIN (required)"),
    (AI_SERIAL, "Serial number"),
    (AI_BATCH_LOT, "Batch / lot number"),
    (AI_EXPIRY, "Expiry date (YYMMDD)"),
]


def _default_domain() -> str:
    return current_app.config["GS1_LINK_DEFAULT_DOMAIN"]


def _qr_options() -> dict:
    return {
        "box_size": int(current_app.config["QR_BOX_SIZE"]),
        "border": int(current_app.config["QR_BORDER"]),
    }


def _qr_level(raw: str | None) -> str:
    """Requested error correction level, or the configured one when absent/unknown."""
    default_level = current_app.config["QR_ERROR_CORRECTION"]
    level = (raw or "").strip().upper()
    if level in ERROR_CORRECTION_LEVELS:
        return level
    return default_level


@link_builder.route("/", methods=["GET"])
def index():
    """Route to display the link generator form"""

    return render_template(
        "index.html",
        default_domain=_default_domain(),
        standard_ais=_STANDARD_AIS,
        qr_levels=list(ERROR_CORRECTION_LEVELS),
        qr_level=current_app.config["QR_ERROR_CORRECTION"],
    )


@link_builder.route("/generate", methods=["POST"])
def generate_link():
    link_request = request_from_form(request.form, _default_domain())
    result = encode(link_request)
    if not result.ok:
        current_app.logger.info(log_message(f"Link generation rejected: {result.error.value}"))
        # HTMX-friendly: return a small fragment.
        return (
            render_template(
                "result_fragment.html",
                ok=False,
                message=error_message(result.error),
                link=None,
                qr_src=None,
                qr_level=None,
            ),
            200,
        )

    link = result.value or ""
    qr_level = _qr_level(request.form.get("qr_level"))
    current_app.logger.info(log_message(f"Generated link: {link}"))

    message = "GS1 Digital Link generated."
    qr_src: str | None = None
    try:
        qr_src = png_data_uri(link, error_correction=qr_level, **_qr_options())
    except DataOverflowError:
        # The link is still usable; only the preview is dropped.
        current_app.logger.warning(log_message(f"Link too long for a QR code: {len(link)} chars"))
        message = "GS1 Digital Link generated, but it is too long for a QR code."

    return (
        render_template(
            "result_fragment.html",
            ok=True,
            message=message,
            link=link,
            qr_src=qr_src,
            qr_level=qr_level,
        ),
        200,
    )


@link_builder.route("/qr.<fmt>", methods=["GET"])
def qr_image(fmt: str):
    if fmt not in MIMETYPES:
        abort(404)

    data = request.args.get("data") or ""
    if not data:
        return jsonify({"error": "Missing 'data' parameter"}), 400

    level = request.args.get("ec") or current_app.config["QR_ERROR_CORRECTION"]
    try:
        error_correction_constant(level)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    try:
        image = render_qr(data, fmt=fmt, error_correction=level, **_qr_options())
    except DataOverflowError:
        current_app.logger.warning(log_message(f"QR data overflow for /qr.{fmt}: {len(data)} chars"))
        return jsonify({"error": "Data is too long for a QR code"}), 400

    as_attachment = request.args.get("download") == "1"
    if as_attachment:
        current_app.logger.info(log_message(f"QR {fmt} download for: {data}"))

    return send_file(
        io.BytesIO(image),
        mimetype=MIMETYPES[fmt],
        as_attachment=as_attachment,
        download_name=f"{_DOWNLOAD_STEM}.{fmt}",
    )


@link_builder.route("/api/digital-link", methods=["POST"])
def api_digital_link():
    payload = request.get_json(silent=True)
    try:
        link_request = request_from_json(payload, _default_domain())
    except InvalidPayload as e:
        current_app.logger.info(log_message(f"Rejected API payload: {e}"))
        return jsonify({"ok": False, "error": "BadRequest", "message": str(e)}), 400

    result = encode(link_request)
    if not result.ok:
        return (
            jsonify({"ok": False, "error": result.error.value, "message": error_message(result.error)}),
            422,
        )

    current_app.logger.info(log_message(f"API generated link: {result.value}"))
    return jsonify({"ok": True, "link": result.value}), 200


@link_builder.route("/manifest.webmanifest", methods=["GET"])
def manifest():
    return send_from_directory(_STATIC_DIR, "manifest.webmanifest", mimetype="application/manifest+json")


@link_builder.route("/service-worker.js", methods=["GET"])
def service_worker():
    # Must be served from the app root for scope '/'
    return send_from_directory(_STATIC_DIR, "service-worker.js", mimetype="text/javascript")
