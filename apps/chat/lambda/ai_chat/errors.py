"""Domain-level exceptions for the AI chat backend."""


class BadRequestError(ValueError):
    """Raised for client-side invalid requests at the domain layer."""


class ChatError(Exception):
    """Base class for failures surfaced by providers, the registry and the cipher."""


class ConfigurationError(ChatError):
    """No provider can serve the request."""


class NoProvidersConfiguredError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("No AI providers are configured")


class ProviderNotFoundError(ConfigurationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"AI provider not found: {name}")
        self.name = name


class UnknownProviderError(ConfigurationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown AI provider type: {name}")
        self.name = name


class ProviderAPIError(ChatError):
    """Vendor answered with a structured error envelope."""

    def __init__(
        self,
        vendor: str,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
    ) -> None:
        super().__init__(f"{vendor} API error: {message}")
        self.vendor = vendor
        self.message = message
        self.status_code = status_code
        self.error_type = error_type


class ProviderHTTPError(ChatError):
    """Vendor answered non-2xx without a parseable error envelope."""

    def __init__(self, status_code: int, body_excerpt: str) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body_excerpt = body_excerpt


class ResponseDecodeError(ChatError):
    """A 2xx vendor body did not match the expected chat-completion shape."""


class TransportError(ChatError):
    """Network failure, timeout or cancellation during a vendor call."""


class CryptoError(ChatError):
    """Encryption or decryption of a stored credential failed."""


class InvalidCiphertext(CryptoError):
    """Ciphertext is not decodable or too short to hold a nonce."""


class AuthenticationFailure(CryptoError):
    """Authentication tag did not verify (tampered data or wrong key)."""
