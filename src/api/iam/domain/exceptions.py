"""Domain exceptions for IAM bounded context."""


class InvalidSlugError(ValueError):
    """Raised when a slug is not lowercase alphanumerics joined by hyphens."""

    pass
