"""SVG data URL decoding.

Turns `data:image/svg+xml,<percent-encoded markup>` into plain SVG markup. Decoding
follows URI-component rules: every `%` must start a two-digit hex escape, the
decoded octets must be valid UTF-8, and `+` stays a literal plus sign.

The decoded markup is returned verbatim. No XML or SVG validation happens here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Union
from urllib.parse import quote, unquote

SVG_DATA_URL_PREFIX: Final[str] = "data:image/svg+xml,"

# Characters `encodeURIComponent` leaves untouched besides ASCII alphanumerics.
_URI_COMPONENT_SAFE: Final[str] = "-_.!~*'()"

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ConversionError(ValueError):
    """Base class for data URL conversion failures."""


class FormatError(ConversionError):
    """Input does not start with the SVG data URL prefix."""


class DecodeError(ConversionError):
    """Percent-decoding hit a malformed escape or invalid UTF-8."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class InputTooLargeError(ConversionError):
    """Input exceeds the configured size limit and was not decoded."""


@dataclass(frozen=True)
class Success:
    markup: str


@dataclass(frozen=True)
class Failure:
    reason: str
    error_type: type[ConversionError]


ConversionResult = Union[Success, Failure]


def decode_uri_component(encoded: str) -> str:
    """Strict percent-decoding with `decodeURIComponent` semantics.

    Raises DecodeError for a `%` not followed by two hex digits, or for escapes
    that do not decode to valid UTF-8.
    """
    bad = _BAD_ESCAPE_RE.search(encoded)
    if bad is not None:
        pos = bad.start()
        snippet = encoded[pos : pos + 3]
        raise DecodeError(f"malformed percent-escape {snippet!r} at position {pos}", position=pos)
    try:
        return unquote(encoded, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(f"escaped bytes are not valid UTF-8 ({e.reason})") from e


def decode_data_url(text: str) -> str:
    """Return the SVG markup embedded in `text`.

    Raises:
    - FormatError if `text` lacks the `data:image/svg+xml,` prefix.
    - DecodeError if the payload is not valid percent-encoded UTF-8.
    """
    if not text.startswith(SVG_DATA_URL_PREFIX):
        raise FormatError("invalid SVG data URL format (expected 'data:image/svg+xml,' prefix)")
    return decode_uri_component(text[len(SVG_DATA_URL_PREFIX) :])


def decode(text: str, *, max_chars: int | None = None) -> ConversionResult:
    """Decode a data URL into a `Success` or `Failure` result. Never raises.

    `max_chars` (when set and positive) rejects longer input up front.
    """
    try:
        if max_chars and len(text) > max_chars:
            raise InputTooLargeError(f"input too large ({len(text)} chars, limit {max_chars})")
        markup = decode_data_url(text)
    except ConversionError as e:
        return Failure(reason=f"Conversion failed: {e}", error_type=type(e))
    return Success(markup=markup)


def encode_data_url(markup: str) -> str:
    """Inverse of `decode_data_url`, escaping like `encodeURIComponent`."""
    return SVG_DATA_URL_PREFIX + quote(markup, safe=_URI_COMPONENT_SAFE, encoding="utf-8")


EXAMPLE_MARKUP: Final[str] = (
    "<svg xmlns='http://www.w3.org/2000/svg' fill='#aaaab6' viewBox='0 0 384 512'>"
    "<path d='M215.7 499.2C267 435 384 279.4 384 192 384 86 298 0 192 0S0 86 0 192c0 "
    "87.4 117 243 168.3 307.2 12.3 15.3 35.1 15.3 47.4 0M192 128a64 64 0 1 1 0 128 "
    "64 64 0 1 1 0-128'/></svg>"
)

EXAMPLE_DATA_URL: Final[str] = encode_data_url(EXAMPLE_MARKUP)
