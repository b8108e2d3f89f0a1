from datetime import timedelta

import pytest
from jose import jwt

from userbase.adapters.auth.crypto import PasslibPasswordHasher
from userbase.adapters.auth.tokens import JWTTokenAuthority
from userbase.components.auth import AuthzFailure
from userbase.domain.entities import User
from userbase.domain.errors import ConfigurationError
from userbase.rules.models import PasswordHashingRules, TokenRules

TEST_SECRET = "test-signing-secret"


def _user(email: str = "a@x.com") -> User:
    return User(name="A", email=email, password_hash="unused")


def _tamper(token: str) -> str:
    header, payload, signature = token.split(".")
    # Middle characters carry all six bits; the last one may only be padding
    i = len(signature) // 2
    swapped = "B" if signature[i] != "B" else "C"
    return ".".join([header, payload, signature[:i] + swapped + signature[i + 1 :]])


# --- Password hashing ---


def test_hash_verify_success(fast_hasher):
    hashed = fast_hasher.hash_password("my-secret-password")

    assert hashed != "my-secret-password"
    assert fast_hasher.verify_password("my-secret-password", hashed) is True


def test_verify_fail(fast_hasher):
    hashed = fast_hasher.hash_password("password")

    assert fast_hasher.verify_password("wrong", hashed) is False


def test_hashes_are_salted(fast_hasher):
    assert fast_hasher.hash_password("same") != fast_hasher.hash_password("same")


def test_default_bcrypt_cost_is_ten():
    hasher = PasslibPasswordHasher.from_rules(PasswordHashingRules())

    hashed = hasher.hash_password("secret123")

    assert hashed.startswith("$2b$10$")
    assert hasher.verify_password("secret123", hashed)


def test_argon2_scheme():
    hasher = PasslibPasswordHasher(scheme="argon2", rounds=2)

    hashed = hasher.hash_password("secret123")

    assert hashed.startswith("$argon2")
    assert hasher.verify_password("secret123", hashed)
    assert not hasher.verify_password("secret124", hashed)


def test_verify_against_non_hash_is_false(fast_hasher):
    assert fast_hasher.verify_password("plain", "plain") is False


def test_dummy_verify_runs(fast_hasher):
    assert fast_hasher.dummy_verify() is None


def test_hashers_with_same_settings_share_a_context():
    first = PasslibPasswordHasher(scheme="bcrypt", rounds=4)
    second = PasslibPasswordHasher.from_rules(PasswordHashingRules(scheme="bcrypt", rounds=4))

    assert first._context is second._context
    assert first._context is not PasslibPasswordHasher(scheme="bcrypt", rounds=5)._context


# --- Token authority ---


@pytest.fixture
def authority(clock) -> JWTTokenAuthority:
    return JWTTokenAuthority(secret=TEST_SECRET, clock=clock)


def test_empty_secret_is_configuration_error(clock):
    with pytest.raises(ConfigurationError) as exc_info:
        JWTTokenAuthority(secret="", clock=clock)

    assert exc_info.value.setting == "JWT_SECRET"


def test_issued_token_authorizes_immediately(authority):
    issued = authority.issue(_user())

    claim = authority.authorize(issued.token)

    assert claim.email == "a@x.com"


def test_token_expires_after_exactly_one_hour(authority, clock):
    issued = authority.issue(_user())

    assert issued.expires_at == clock.now_utc() + timedelta(hours=1)
    claim = authority.authorize(issued.token)
    assert claim.exp - claim.iat == 3600


def test_token_valid_until_expiry(authority, clock):
    issued = authority.issue(_user())
    clock.advance(timedelta(seconds=3599))

    assert authority.authorize(issued.token).email == "a@x.com"


def test_expired_token_is_invalid(authority, clock):
    issued = authority.issue(_user())
    clock.advance(timedelta(seconds=3600))

    with pytest.raises(AuthzFailure) as exc_info:
        authority.authorize(issued.token)

    assert exc_info.value.kind == "invalid_token"


def test_ttl_from_rules(clock):
    authority = JWTTokenAuthority.from_rules(TEST_SECRET, TokenRules(ttl_seconds=60), clock)
    issued = authority.issue(_user())
    clock.advance(timedelta(seconds=61))

    with pytest.raises(AuthzFailure):
        authority.authorize(issued.token)


def test_token_signed_with_other_secret_is_invalid(authority, clock):
    other = JWTTokenAuthority(secret="some-other-secret", clock=clock)
    token = other.issue(_user()).token

    with pytest.raises(AuthzFailure) as exc_info:
        authority.authorize(token)

    assert exc_info.value.kind == "invalid_token"


def test_tampered_token_is_invalid(authority):
    token = authority.issue(_user()).token

    with pytest.raises(AuthzFailure) as exc_info:
        authority.authorize(_tamper(token))

    assert exc_info.value.kind == "invalid_token"


@pytest.mark.parametrize("token", ["not-a-jwt", "a.b.c", "...", "Bearer x"])
def test_malformed_token_is_invalid(authority, token):
    with pytest.raises(AuthzFailure):
        authority.authorize(token)


def test_token_without_email_claim_is_invalid(authority, clock):
    now = int(clock.now_utc().timestamp())
    token = jwt.encode({"sub": "1", "iat": now, "exp": now + 60}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(AuthzFailure):
        authority.authorize(token)


def test_token_without_exp_is_invalid(authority):
    token = jwt.encode({"email": "a@x.com"}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(AuthzFailure):
        authority.authorize(token)


def test_token_with_other_algorithm_is_invalid(authority, clock):
    now = int(clock.now_utc().timestamp())
    claims = {"email": "a@x.com", "iat": now, "exp": now + 60}
    token = jwt.encode(claims, TEST_SECRET, algorithm="HS512")

    with pytest.raises(AuthzFailure):
        authority.authorize(token)


def test_rejection_reason_not_exposed(authority, clock):
    expired = authority.issue(_user())
    clock.advance(timedelta(hours=2))

    with pytest.raises(AuthzFailure) as expired_exc:
        authority.authorize(expired.token)
    with pytest.raises(AuthzFailure) as forged_exc:
        authority.authorize(_tamper(authority.issue(_user()).token))

    assert str(expired_exc.value) == str(forged_exc.value) == "Invalid token."

