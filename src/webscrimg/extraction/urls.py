# ABOUTME: Resolve raw src-style attribute values into absolute http(s) URLs
# ABOUTME: Rejections are returned as None; normalization never raises

from urllib.parse import urljoin, urlsplit

ALLOWED_SCHEMES = ("http", "https")


def normalize_url(raw: str | None, base: str) -> str | None:
    """Resolve an attribute value against the page URL.

    Protocol-relative values get ``https:``, values starting with ``http`` are
    kept as-is, anything else is resolved relative to ``base``. Data URIs, empty values,
    malformed references and non-http schemes are rejected.

    Args:
        raw: Attribute value as found in the document
        base: URL of the page the value came from

    Returns:
        The absolute URL, or None when the value is not usable
    """
    if not raw:
        return None
    value = raw.strip()
    if not value or value.lower().startswith("data:image"):
        return None

    if value.startswith("//"):
        resolved = "https:" + value
    elif value.lower().startswith("http"):
        resolved = value
    else:
        try:
            resolved = urljoin(base, value)
        except ValueError:
            return None

    try:
        parts = urlsplit(resolved)
    except ValueError:
        return None
    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.netloc:
        return None
    return resolved
