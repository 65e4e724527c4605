"""
Editor-side document handling.

The transformation library only sees strings; this module plays the host:
decoding uploaded buffers, choosing the replacement range and applying the edit.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from charset_normalizer import from_bytes

from .errors import SelectionError
from .transform import TextTransformation, split_lines

logger = logging.getLogger(__name__)


def decode_document(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode an uploaded document to text.

    Rules:
    - Strict UTF-8 first; a UTF-8 BOM is dropped rather than surfacing as a leading character.
    - Otherwise detect encoding best-effort via charset-normalizer.
    - If decode fails, fall back to UTF-8 with replacement characters and report it.
    """
    detected = None
    decode_used = "utf-8-sig" if raw.startswith(b"\xef\xbb\xbf") else "utf-8"
    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
            decode_used = detected
        try:
            text = raw.decode(decode_used)
        except (UnicodeDecodeError, LookupError):
            # Last resort: decode with replacement so the edit can still proceed deterministically
            logger.warning("Could not decode document as %s, falling back to utf-8", decode_used)
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
            decode_fallback = True

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def count_newlines(text: str) -> Dict[str, int]:
    crlf = text.count("\r\n")
    return {"crlf": crlf, "lf": text.count("\n") - crlf}


def resolve_range(document: str, start: Optional[int] = None, end: Optional[int] = None) -> Tuple[int, int]:
    """
    Pick the replacement range: the selection when one is given, otherwise the whole document.

    Raises SelectionError for a selection that does not fit the document.
    """
    if start is None or end is None or start == end:
        return 0, len(document)
    if end < start:
        raise SelectionError(f"Selection end {end} is before start {start}")
    if end > len(document):
        raise SelectionError(f"Selection end {end} is beyond the document length {len(document)}")
    return start, end


def apply_transformation(
    document: str,
    transformation: TextTransformation,
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> Dict[str, Any]:
    """Transform the selection (or whole document) and splice the result back in."""
    start, end = resolve_range(document, start, end)
    selected = document[start:end]
    replacement = transformation.transform(selected)

    return {
        "text": document[:start] + replacement + document[end:],
        "replacement": replacement,
        "range": {"start": start, "end": end},
        "report": {
            "whole_document": (start, end) == (0, len(document)),
            "lines_in": len(split_lines(selected)),
            "lines_out": len(split_lines(replacement)),
            "newlines": count_newlines(selected),
        },
    }
