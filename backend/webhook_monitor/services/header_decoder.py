"""Normalize stored webhook header blobs into a plain header mapping.

Headers arrive in one of two shapes:

* a JSON object of header name -> value(s), or
* a wrapper object ``{"Bytes": "<base64>", "Status": <int>}`` whose ``Bytes``
  field holds the base64 encoding of the real JSON header object. Some binary
  JSON column drivers externalize raw values this way.

Both shapes decode to the same mapping, with the wrapper keys removed.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

WRAPPER_KEYS = ("Bytes", "Status")


class HeaderDecodeError(ValueError):
    """Raised when a header blob cannot be decoded into a mapping."""


def _load_object(raw: bytes | str, what: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to parse {what} as JSON: {e}")
        raise HeaderDecodeError(f"{what} is not valid JSON") from e

    if not isinstance(data, dict):
        logger.warning(f"{what} decoded to {type(data).__name__}, expected object")
        raise HeaderDecodeError(f"{what} must be a JSON object")
    return data


def extract_header_json_data(blob: bytes | str) -> dict[str, Any]:
    """Decode a header blob into a header name -> value mapping.

    Args:
        blob: Serialized headers, either a plain JSON object or a
            ``{"Bytes": ..., "Status": ...}`` wrapper around base64 JSON.

    Returns:
        The header mapping without the ``Bytes``/``Status`` wrapper keys.

    Raises:
        HeaderDecodeError: the blob, its base64 payload, or the nested JSON
            is malformed.
    """
    data = _load_object(blob, "header blob")

    encoded = data.get("Bytes")
    if isinstance(encoded, str):
        try:
            decoded = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Failed to base64-decode header bytes: {e}")
            raise HeaderDecodeError("header Bytes field is not valid base64") from e
        data = _load_object(decoded, "nested header JSON")

    for key in WRAPPER_KEYS:
        data.pop(key, None)

    return data


def decode_stored_headers(value: Any) -> dict[str, Any]:
    """Run the decoder over a headers value as stored on a request record."""
    if value is None:
        return {}
    if isinstance(value, (bytes, str)):
        return extract_header_json_data(value)
    return extract_header_json_data(json.dumps(value))
