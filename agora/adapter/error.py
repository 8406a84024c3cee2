"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class OpenIDNormalizationError(AdapterError, ValueError):
    """An OpenID identifier could not be turned into a usable URL."""

    pass
