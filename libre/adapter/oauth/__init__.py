"""Shared OAuth 2.0 client implementation."""

from .client import BaseOAuth2Client, OAuthClientConfig, parse_scopes

__all__ = ["BaseOAuth2Client", "OAuthClientConfig", "parse_scopes"]
