"""Decoding of uploaded content into a byte-preserving text view."""

import base64
import binascii
import logging

from sigsentry.errors import EmptyContentError
from sigsentry.scanner.results import DecodeOutcome

logger = logging.getLogger(__name__)

_WHITESPACE = str.maketrans("", "", " \t\r\n\f\v")


def strip_header(file_content: str) -> str:
    """Drop a data URI header (everything up to the first comma).

    The header is not validated. Content without a comma is returned as is.
    """
    _, sep, payload = file_content.partition(",")
    return payload if sep else file_content


def decode_content(file_content: str) -> DecodeOutcome:
    """Decode a data URI or bare base64 payload for scanning.

    Each decoded byte maps to exactly one latin-1 character, so binary
    content survives without reinterpretation. When decoding fails the raw
    payload text is returned instead so literal signatures that survive the
    encoding can still be found.

    Args:
        file_content: Upload content, ``[<header>,]<payload>``

    Returns:
        DecodeOutcome with the text to scan

    Raises:
        EmptyContentError: If nothing remains after the header is stripped
    """
    payload = strip_header(file_content)
    if not payload:
        logger.warning("Empty content after removing data URI prefix")
        raise EmptyContentError("File content appears to be empty after processing.")

    encoded = payload.translate(_WHITESPACE)
    # Missing trailing padding is accepted; other malformations still fail
    encoded += "=" * (-len(encoded) % 4)
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        reason = str(e) or type(e).__name__
        logger.warning("Base64 decoding failed: %s. Falling back to raw scan.", reason)
        return DecodeOutcome(text=payload, decoded_successfully=False, decode_error=reason)

    logger.debug("Base64 decoding successful (%d bytes)", len(data))
    return DecodeOutcome(text=data.decode("latin-1"), decoded_successfully=True)
