"""GS1 Digital Link URI encoder.

Builds ``<domain>/01/<gtin>[/21/..][/10/..][/17/..][/<ai>/..]*`` from a
structured request. Pure and stateless: validation failures come back as a
``DigitalLinkResult`` instead of being raised.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from urllib.parse import quote

AI_GTIN = "01"
AI_SERIAL = "21"
AI_BATCH_LOT = "10"
AI_EXPIRY = "17"

GTIN_LENGTHS = frozenset({8, 12, 13, 14})
EXPIRY_LENGTH = 6

_NON_DIGITS = re.compile(r"[^0-9]")


class LinkError(str, enum.Enum):
    missing_gtin = "MissingGTIN"
    invalid_gtin_length = "InvalidGTINLength"


@dataclass(frozen=True)
class AIValue:
    identifier: str
    value: str


@dataclass(frozen=True)
class DigitalLinkRequest:
    domain: str
    gtin: str
    serial_number: str = ""
    batch_lot: str = ""
    expiry_date: str = ""
    custom_ais: tuple[AIValue, ...] = ()


@dataclass(frozen=True)
class DigitalLinkResult:
    ok: bool
    value: str | None = None
    error: LinkError | None = None


def digits_only(raw: str | None) -> str:
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def encode_component(value: str) -> str:
    """Percent-encode everything outside ``A-Z a-z 0-9 - _ . ~``."""
    return quote(value, safe="")


def trim_domain(domain: str) -> str:
    # Only one trailing slash is removed.
    if domain.endswith("/"):
        return domain[:-1]
    return domain


def validate_gtin(raw: str | None) -> DigitalLinkResult:
    value = digits_only(raw)
    if not value:
        return DigitalLinkResult(ok=False, error=LinkError.missing_gtin)
    if len(value) not in GTIN_LENGTHS:
        return DigitalLinkResult(ok=False, error=LinkError.invalid_gtin_length)
    return DigitalLinkResult(ok=True, value=value)


def format_expiry(raw: str | None) -> str:
    """Return the 6-digit YYMMDD form, or "" when the segment must be omitted."""
    value = digits_only(raw)
    if len(value) == EXPIRY_LENGTH:
        return value
    return ""


def encode(request: DigitalLinkRequest) -> DigitalLinkResult:
    gtin = validate_gtin(request.gtin)
    if not gtin.ok:
        return gtin

    segments = [(AI_GTIN, gtin.value)]

    if request.serial_number:
        segments.append((AI_SERIAL, encode_component(request.serial_number)))

    if request.batch_lot:
        segments.append((AI_BATCH_LOT, encode_component(request.batch_lot)))

    if request.expiry_date:
        expiry = format_expiry(request.expiry_date)
        if expiry:
            segments.append((AI_EXPIRY, expiry))

    for entry in request.custom_ais:
        if not entry.identifier or not entry.value:
            continue
        segments.append((entry.identifier, encode_component(entry.value)))

    path = "".join(f"/{ai}/{value}" for ai, value in segments)
    return DigitalLinkResult(ok=True, value=trim_domain(request.domain) + path)
