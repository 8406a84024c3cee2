"""OpenID identifier normalization.

Users may type an OpenID as a bare host (``alice.example.org``) or a full
URL. Stored identifiers are normalized so that equivalent spellings
collide on the uniqueness check.
"""

from urllib.parse import urlsplit, urlunsplit

from agora.adapter.error import OpenIDNormalizationError

ALLOWED_SCHEMES = ("http", "https")


def normalize_openid_url(identifier: str) -> str:
    """Normalize an OpenID identifier to a canonical URL.

    - Adds ``http://`` when no scheme is given
    - Lowercases scheme and host
    - Uses ``/`` for an empty path
    - Drops the fragment

    Args:
        identifier: Identifier as entered by the user

    Returns:
        Normalized URL

    Raises:
        OpenIDNormalizationError: If the identifier is empty, has no host
            or uses a scheme other than http(s)

    Example:
        >>> normalize_openid_url("Alice.Example.org")
        'http://alice.example.org/'
    """
    identifier = (identifier or "").strip()
    if not identifier:
        raise OpenIDNormalizationError("OpenID identifier is empty")

    if "://" not in identifier:
        identifier = f"http://{identifier}"

    parts = urlsplit(identifier)
    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise OpenIDNormalizationError(f"Unsupported OpenID scheme: {parts.scheme}")

    host = (parts.hostname or "").lower()
    if not host:
        raise OpenIDNormalizationError(f"OpenID identifier has no host: {identifier}")

    try:
        port = parts.port
    except ValueError as e:
        raise OpenIDNormalizationError(f"Invalid OpenID port: {identifier}") from e

    netloc = f"{host}:{port}" if port else host
    if parts.username:
        credentials = parts.username
        if parts.password:
            credentials = f"{credentials}:{parts.password}"
        netloc = f"{credentials}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))
