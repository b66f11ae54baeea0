class ListingParseError(Exception):
    """Raised when car listing parsing fails."""


class NoDataError(ListingParseError):
    """Raised when there is no input text to parse."""


class ProviderConfigurationError(ListingParseError):
    """Raised when the active provider is missing required configuration."""


class CredentialMissingError(ProviderConfigurationError):
    """Raised when the active provider has no API key."""


class ProviderRequestError(ListingParseError):
    """Raised when the AI provider rejects the request or the SDK call fails."""


class ProviderNetworkError(ProviderRequestError):
    """Raised when the AI provider cannot be reached."""


class EmptyResponseError(ListingParseError):
    """Raised when the AI provider returns no usable content."""


class ResponseFormatError(ListingParseError):
    """Raised when the AI output is not JSON or has an unrecognized shape."""


class NoValidListingsError(ListingParseError):
    """Raised when every candidate listing fails validation."""
