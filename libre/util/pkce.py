"""PKCE (Proof Key for Code Exchange) and state helpers for OAuth security."""

import secrets
from base64 import urlsafe_b64encode
from hashlib import sha256


def generate_state() -> str:
    """Generate an unguessable, single-use CSRF state value."""
    return secrets.token_urlsafe(32)


def derive_challenge(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier.

    Args:
        verifier: PKCE code verifier

    Returns:
        base64url(SHA-256(verifier)) without padding
    """
    challenge_bytes = sha256(verifier.encode("ascii")).digest()
    return urlsafe_b64encode(challenge_bytes).rstrip(b"=").decode("ascii")


def generate_pkce_pair() -> tuple[str, str]:
    """Generate PKCE verifier and challenge for OAuth authorization.

    PKCE prevents authorization code interception attacks by requiring
    the client to prove possession of a secret (verifier) during token
    exchange. The challenge is sent during authorization, and the verifier
    is sent during token exchange.

    Returns:
        Tuple of (verifier, challenge), both base64url encoded strings
        - verifier: Random secret kept by client (32 bytes, 43 characters)
        - challenge: SHA-256 hash of verifier for authorization request
    """
    verifier_bytes = secrets.token_bytes(32)
    verifier = urlsafe_b64encode(verifier_bytes).rstrip(b"=").decode("ascii")

    return (verifier, derive_challenge(verifier))
