# src/services/errors.py

"""Error taxonomy for the recommendation core."""


class AdvisorError(Exception):
    """Base class for every error raised by product_advisor."""


class InvalidQuery(AdvisorError):
    """The query was empty or whitespace-only; no ranking attempted."""


class CatalogError(AdvisorError):
    """The bundled catalog could not be read or decoded."""


class RemoteFailure(AdvisorError):
    """Any failure on the remote recommendation path."""


class RemoteUnavailable(RemoteFailure):
    """No API key or endpoint is configured."""


class RemoteError(RemoteFailure):
    """Transport failure, timeout or non-success HTTP status."""


class ParseError(RemoteFailure):
    """The remote payload held no recognisable JSON array."""
