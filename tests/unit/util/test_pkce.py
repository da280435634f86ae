"""Unit tests for PKCE and state helpers."""

import re
from base64 import urlsafe_b64decode, urlsafe_b64encode
from hashlib import sha256

from libre.util.pkce import derive_challenge, generate_pkce_pair, generate_state


class TestGeneratePkcePair:
    """Tests for generate_pkce_pair function."""

    def test_verifier_is_base64url_encoded(self):
        """Verifier should be unpadded base64url of 32 random bytes."""
        verifier, _ = generate_pkce_pair()

        assert re.match(r"^[A-Za-z0-9_-]+$", verifier)
        assert len(verifier) == 43
        assert len(urlsafe_b64decode(verifier + "=")) == 32

    def test_challenge_is_sha256_of_verifier(self):
        """Challenge should be SHA-256 hash of verifier."""
        verifier, challenge = generate_pkce_pair()

        expected_hash = sha256(verifier.encode("ascii")).digest()
        expected_challenge = (
            urlsafe_b64encode(expected_hash).rstrip(b"=").decode("ascii")
        )

        assert challenge == expected_challenge
        assert "=" not in challenge

    def test_generates_unique_pairs(self):
        """Each call should generate a different verifier."""
        verifiers = {generate_pkce_pair()[0] for _ in range(20)}

        assert len(verifiers) == 20


class TestDeriveChallenge:
    def test_rfc7636_appendix_b_vector(self):
        """Known verifier/challenge pair from RFC 7636."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert derive_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


class TestGenerateState:
    def test_state_is_url_safe_and_unique(self):
        states = {generate_state() for _ in range(20)}

        assert len(states) == 20
        for state in states:
            assert re.match(r"^[A-Za-z0-9_-]{43}$", state)
