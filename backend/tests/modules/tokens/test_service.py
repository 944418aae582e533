"""Tests for the access token issuer."""

from datetime import timedelta

import jwt
import pytest

from modules.tokens import InvalidToken, ITokenIssuer, TokenIssuer, ValidToken
from shared.config import Settings
from shared.exceptions import ConfigurationError

SECRET = "test-secret-key-for-testing-only-0123456789"


class TestIssue:
    def test_implements_interface(self, token_issuer):
        assert isinstance(token_issuer, ITokenIssuer)

    def test_claims(self, token_issuer, clock):
        """Issued tokens should carry identity, roles and expiry."""
        token = token_issuer.issue_access_token("acc-1", "a@x.com", ["User", "Admin", "User"])
        payload = jwt.decode(
            token,
            SECRET,
            algorithms=["HS256"],
            audience="gatehouse-clients",
            options={"verify_exp": False, "verify_iat": False},
        )

        assert payload["sub"] == "acc-1"
        assert payload["email"] == "a@x.com"
        assert payload["roles"] == ["Admin", "User"]
        assert payload["iss"] == "gatehouse"
        assert payload["aud"] == "gatehouse-clients"
        assert payload["iat"] == int(clock.now().timestamp())
        assert payload["exp"] == int((clock.now() + timedelta(minutes=15)).timestamp())
        assert payload["jti"]

    def test_token_ids_are_unique(self, token_issuer):
        first = jwt.decode(token_issuer.issue_access_token("a", "a@x.com", []), options={"verify_signature": False})
        second = jwt.decode(token_issuer.issue_access_token("a", "a@x.com", []), options={"verify_signature": False})
        assert first["jti"] != second["jti"]

    def test_expires_in(self, token_issuer):
        assert token_issuer.expires_in == 900

    def test_signed_with_hs256(self, token_issuer):
        token = token_issuer.issue_access_token("acc-1", "a@x.com", [])
        assert jwt.get_unverified_header(token)["alg"] == "HS256"


class TestValidate:
    def test_valid_token(self, token_issuer):
        token = token_issuer.issue_access_token("acc-1", "a@x.com", ["User"])
        result = token_issuer.validate(token)

        assert isinstance(result, ValidToken)
        assert result.valid
        assert result.account_id == "acc-1"
        assert result.claims.roles == ["User"]

    def test_expires_exactly_at_ttl(self, token_issuer, clock):
        """No clock skew: a token is invalid from its exp second on."""
        token = token_issuer.issue_access_token("acc-1", "a@x.com", [])

        clock.advance(minutes=15, seconds=-1)
        assert token_issuer.validate(token).valid

        clock.advance(seconds=1)
        result = token_issuer.validate(token)
        assert isinstance(result, InvalidToken)
        assert result.reason == "expired"

    def test_wrong_secret(self, token_issuer, clock):
        other = TokenIssuer("a-different-secret-of-sufficient-length", "gatehouse", "gatehouse-clients", clock=clock)
        result = token_issuer.validate(other.issue_access_token("acc-1", "a@x.com", []))
        assert not result.valid

    def test_wrong_audience(self, token_issuer, clock):
        other = TokenIssuer(SECRET, "gatehouse", "someone-else", clock=clock)
        assert not token_issuer.validate(other.issue_access_token("acc-1", "a@x.com", [])).valid

    def test_wrong_issuer(self, token_issuer, clock):
        other = TokenIssuer(SECRET, "impostor", "gatehouse-clients", clock=clock)
        assert not token_issuer.validate(other.issue_access_token("acc-1", "a@x.com", [])).valid

    def test_other_algorithm_rejected(self, token_issuer, clock):
        payload = {
            "sub": "acc-1",
            "email": "a@x.com",
            "jti": "j",
            "roles": [],
            "iss": "gatehouse",
            "aud": "gatehouse-clients",
            "iat": int(clock.now().timestamp()),
            "exp": int(clock.now().timestamp()) + 60,
        }
        token = jwt.encode(payload, SECRET, algorithm="HS512")
        assert not token_issuer.validate(token).valid

    def test_missing_claim_rejected(self, token_issuer, clock):
        payload = {
            "sub": "acc-1",
            "iss": "gatehouse",
            "aud": "gatehouse-clients",
            "iat": int(clock.now().timestamp()),
            "exp": int(clock.now().timestamp()) + 60,
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        assert not token_issuer.validate(token).valid

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed(self, token_issuer, token):
        result = token_issuer.validate(token)
        assert isinstance(result, InvalidToken)
        assert result.valid is False


class TestConfiguration:
    def test_missing_secret_is_fatal(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TokenIssuer("", "gatehouse", "gatehouse-clients")
        assert exc_info.value.code == "JWT_SECRET_MISSING"

    def test_from_settings(self, clock):
        settings = Settings(
            jwt_secret=SECRET,
            jwt_issuer="iss-x",
            jwt_audience="aud-x",
            access_token_ttl_minutes=5,
        )
        issuer = TokenIssuer.from_settings(settings, clock=clock)
        payload = jwt.decode(
            issuer.issue_access_token("acc-1", "a@x.com", []),
            SECRET,
            algorithms=["HS256"],
            audience="aud-x",
            options={"verify_exp": False, "verify_iat": False},
        )
        assert payload["iss"] == "iss-x"
        assert issuer.expires_in == 300
