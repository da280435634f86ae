"""Domain layer errors.

Login failures are classified where they happen (provider client,
correlation store, account storage) and carry an ``ErrorKind`` so callers
branch on the kind, never on message text.
"""

from enum import Enum


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateAccountError(DomainError):
    """Raised when an account for a (provider, subject) pair already exists."""

    def __init__(self, provider: str, subject: str):
        self.provider = provider
        self.subject = subject
        super().__init__(f"Account already linked to {provider}:{subject}")


class ErrorKind(str, Enum):
    """How a login failure should be surfaced and whether it may be retried."""

    CLIENT = "client"
    AUTHENTICATION = "authentication"
    INFRASTRUCTURE = "infrastructure"
    PROTOCOL = "protocol"


class LoginError(DomainError):
    """Base error of the sign-in flow.

    Attributes:
        kind: Error classification
        detail: Message that is safe to show to the client
    """

    kind: ErrorKind = ErrorKind.CLIENT
    default_detail: str = "Login failed"

    def __init__(self, message: str | None = None, *, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(message or self.detail)

    @property
    def retryable(self) -> bool:
        """Only infrastructure failures are safe for the caller to retry."""
        return self.kind == ErrorKind.INFRASTRUCTURE


class ClientError(LoginError):
    """Client-caused failure (4xx)."""

    kind = ErrorKind.CLIENT
    default_detail = "Bad request"


class InvalidStateError(ClientError):
    """Callback state is unknown, already used, or expired.

    The three cases produce the same message.
    """

    default_detail = "Invalid or expired request"


class ProviderRejectedError(ClientError):
    """The identity provider answered with an explicit error."""

    default_detail = "The identity provider rejected the request"

    def __init__(self, provider_message: str):
        self.provider_message = provider_message
        super().__init__(
            f"Provider rejected the request: {provider_message}",
            detail=provider_message,
        )


class UnsupportedTokenTypeError(ClientError):
    """The provider issued a token that is not a bearer token."""

    default_detail = "Unsupported token type"

    def __init__(self, token_type: str):
        self.token_type = token_type
        super().__init__(f"Unsupported token type: {token_type}")


class UnsupportedProviderError(ClientError):
    """No client is configured for the requested provider."""

    default_detail = "Unsupported provider"


class AuthenticationError(LoginError):
    """The provider denied the credential (401)."""

    kind = ErrorKind.AUTHENTICATION
    default_detail = "Authentication with the identity provider failed"


class InfrastructureError(LoginError):
    """Network or storage unavailable (5xx, retryable by the caller)."""

    kind = ErrorKind.INFRASTRUCTURE
    default_detail = "Service temporarily unavailable"


class ProtocolError(LoginError):
    """Malformed provider response (5xx, not retryable)."""

    kind = ErrorKind.PROTOCOL
    default_detail = "Unexpected response from the identity provider"
