"""Test configuration and fixtures."""

import os

import logfire

# Both providers enabled unless a test removes them
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-please-change")
os.environ.setdefault("AUTH__GITHUB__CLIENT_ID", "github-test-client")
os.environ.setdefault("AUTH__GITHUB__CLIENT_SECRET", "github-test-secret")
os.environ.setdefault("AUTH__CASDOOR__CLIENT_ID", "casdoor-test-client")
os.environ.setdefault("AUTH__CASDOOR__CLIENT_SECRET", "casdoor-test-secret")
os.environ.setdefault("AUTH__CASDOOR__ENDPOINT", "https://door.casdoor.com")

logfire.configure(send_to_logfire=False, console=False)
