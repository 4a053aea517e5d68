from datetime import datetime, timezone

FILE_URI_PREFIX = "file://"
LIKE_ESCAPE_CHAR = "\\"


def get_time() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def sanitize_like_string(text: str | None) -> str:
    """
    Escape the characters that are special to SQL LIKE so the text matches literally.

    The result is meant to be used with ``ESCAPE '\\'``.

    Args:
        text (str | None): Raw search text.

    Returns:
        str: The escaped text ('' for None).

    Example:
        >>> sanitize_like_string("a%b_c")
        'a\\\\%b\\\\_c'
    """
    if not text:
        return ""
    return (
        text.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )


def uri_to_path(uri: str) -> str:
    """
    Strip a file:// scheme from a picked file URI.

    Example:
        >>> uri_to_path("file:///tmp/client.p12")
        '/tmp/client.p12'
    """
    return uri.replace(FILE_URI_PREFIX, "", 1)
