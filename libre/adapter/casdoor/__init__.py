"""Casdoor OAuth adapter."""

from .client import (
    CasdoorOAuthClient,
    MockCasdoorOAuthClient,
    RealCasdoorOAuthClient,
)

__all__ = ["CasdoorOAuthClient", "RealCasdoorOAuthClient", "MockCasdoorOAuthClient"]
