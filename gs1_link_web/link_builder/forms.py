from __future__ import annotations

from itertools import zip_longest
from typing import Any, Mapping

from gs1_link_web.link_builder.encoder import AIValue, DigitalLinkRequest, LinkError


ERROR_MESSAGES = {
    LinkError.missing_gtin: "GTIN is required to generate a link.",
    LinkError.invalid_gtin_length: "GTIN must contain 8, 12, 13 or 14 digits.",
}


class InvalidPayload(ValueError):
    """Request body cannot be turned into a DigitalLinkRequest."""


def error_message(error: LinkError | None) -> str:
    if error is None:
        return ""
    return ERROR_MESSAGES.get(error, "Could not generate the link.")


def _text(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple)):
        raise InvalidPayload(f"'{field}' must be a string.")
    text = str(value)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPayload(f"'{field}' is not valid Unicode text.")
    return text


def request_from_form(form, default_domain: str) -> DigitalLinkRequest:
    """Build a request from submitted form fields.

    Custom AI rows arrive as repeated ``ai_code`` / ``ai_value`` fields; a
    short list is padded with empty strings so the encoder skips the row.
    """
    domain = form.get("domain")
    if domain is None:
        domain = default_domain

    rows = zip_longest(form.getlist("ai_code"), form.getlist("ai_value"), fillvalue="")
    return DigitalLinkRequest(
        domain=domain,
        gtin=form.get("gtin") or "",
        serial_number=form.get("serial_number") or "",
        batch_lot=form.get("batch_lot") or "",
        expiry_date=form.get("expiry_date") or "",
        custom_ais=tuple(AIValue(identifier=code, value=value) for code, value in rows),
    )


def request_from_json(payload: Any, default_domain: str) -> DigitalLinkRequest:
    if not isinstance(payload, Mapping):
        raise InvalidPayload("Request body must be a JSON object.")

    domain = payload.get("domain")
    if domain is None:
        domain = default_domain

    raw_ais = payload.get("customAIs")
    if raw_ais is None:
        raw_ais = []
    if not isinstance(raw_ais, list):
        raise InvalidPayload("'customAIs' must be a list.")

    custom_ais = []
    for entry in raw_ais:
        if not isinstance(entry, Mapping):
            raise InvalidPayload("Each entry of 'customAIs' must be an object.")
        custom_ais.append(
            AIValue(
                identifier=_text(entry.get("ai"), "ai"),
                value=_text(entry.get("value"), "value"),
            )
        )

    return DigitalLinkRequest(
        domain=_text(domain, "domain"),
        gtin=_text(payload.get("gtin"), "gtin"),
        serial_number=_text(payload.get("serialNumber"), "serialNumber"),
        batch_lot=_text(payload.get("batchLot"), "batchLot"),
        expiry_date=_text(payload.get("expiryDate"), "expiryDate"),
        custom_ais=tuple(custom_ais),
    )
