class AppError(Exception):
    """Base application error for the IP intelligence service."""


class InvalidIpError(AppError):
    """Raised when the supplied IP address is syntactically invalid."""


class UpstreamServiceError(AppError):
    """Raised when the upstream IP provider fails (transport or HTTP status)."""


class ProviderLookupError(UpstreamServiceError):
    """Raised when the provider answers but reports the lookup as failed."""


class ReservedIpError(ProviderLookupError):
    """Raised when the provider refuses a private or reserved address (e.g. 127.0.0.1, 192.168.x.x)."""
