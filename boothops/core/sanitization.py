"""Input sanitization utilities."""
import re
from typing import Optional


# Maximum length constraints
MAX_VOID_REASON_LENGTH = 200
MAX_SEARCH_LENGTH = 50
MAX_CSV_BYTES = 2 * 1024 * 1024


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize free text input.

    Strips HTML tags and normalizes whitespace. Does not escape entities:
    the booth UI escapes output when rendering.

    Raises:
        ValueError: If text exceeds max_length or contains HTML-like patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_void_reason(reason: Optional[str]) -> str:
    """Normalize the operator's void reason; None becomes an empty string."""
    if reason is None:
        return ""
    return sanitize_text(reason, max_length=MAX_VOID_REASON_LENGTH)


def sanitize_search(search: Optional[str]) -> str:
    """Trim a roster search term and cap its length."""
    if not search:
        return ""
    return search.strip()[:MAX_SEARCH_LENGTH]


def validate_csv_size(csv_text: str) -> str:
    """
    Reject roster uploads larger than MAX_CSV_BYTES.

    Raises:
        ValueError: If the encoded text is too large
    """
    if len(csv_text.encode("utf-8")) > MAX_CSV_BYTES:
        raise ValueError(f"CSV exceeds maximum size of {MAX_CSV_BYTES} bytes")
    return csv_text
