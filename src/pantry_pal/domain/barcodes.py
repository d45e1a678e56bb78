"""Barcode normalization."""

_EAN13_LENGTH = 13


def normalize_code(raw: str | None) -> str:
    """Return the canonical inventory key for a scanned UPC/EAN code.

    EAN-13 codes with a leading zero are the zero-padded form of a UPC-A
    code, so the zero is dropped. Anything else is only trimmed. No checksum
    validation is performed.
    """
    if not raw:
        return ""
    code = str(raw).strip()
    if len(code) == _EAN13_LENGTH and code.startswith("0"):
        return code[1:]
    return code
