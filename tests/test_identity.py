from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth as firebase_auth

from app.core.config import Settings
from app.core.errors import AuthError, ErrorCode
from app.services.auth.identity import (
    FirebaseIdentityVerifier, JwtIdentityVerifier, get_identity_verifier
)


@pytest.fixture
def jwt_verifier():
    return JwtIdentityVerifier(secret_key="unit-secret", audience="travel-companion", issuer="tests")


@pytest.fixture
def firebase_verifier():
    verifier = FirebaseIdentityVerifier(Settings(IDENTITY_PROVIDER="firebase", FIREBASE_PROJECT_ID="demo"))
    with patch.object(FirebaseIdentityVerifier, "_get_app", return_value=MagicMock()):
        yield verifier


@pytest.mark.asyncio
async def test_jwt_verifier_reads_identity_claims(jwt_verifier):
    token = jwt_verifier.issue_token("subject-1", "jane@example.com", "Jane Doe")

    identity = await jwt_verifier.verify(token)

    assert identity.subject_id == "subject-1"
    assert identity.email == "jane@example.com"
    assert identity.display_name == "Jane Doe"


@pytest.mark.asyncio
async def test_jwt_verifier_rejects_wrong_audience(jwt_verifier):
    other = JwtIdentityVerifier(secret_key="unit-secret", audience="someone-else", issuer="tests")
    token = other.issue_token("subject-1")

    with pytest.raises(AuthError) as exc_info:
        await jwt_verifier.verify(token)
    assert exc_info.value.code == ErrorCode.INVALID_TOKEN


@pytest.mark.asyncio
async def test_jwt_verifier_rejects_expired_token(jwt_verifier):
    token = jwt_verifier.issue_token("subject-1", expires_delta=timedelta(seconds=-30))

    with pytest.raises(AuthError):
        await jwt_verifier.verify(token)


@pytest.mark.asyncio
async def test_jwt_verifier_requires_subject():
    verifier = JwtIdentityVerifier(secret_key="unit-secret")
    token = verifier.issue_token("")

    with pytest.raises(AuthError, match="Invalid token"):
        await verifier.verify(token)


@pytest.mark.asyncio
async def test_firebase_verifier_maps_decoded_token(firebase_verifier):
    decoded = {"uid": "firebase-uid", "email": "fb@example.com", "name": "Fire Base"}
    with patch("app.services.auth.identity.firebase_auth.verify_id_token", return_value=decoded) as verify:
        identity = await firebase_verifier.verify("id-token")

    assert verify.call_args.args[0] == "id-token"
    assert identity.subject_id == "firebase-uid"
    assert identity.email == "fb@example.com"
    assert identity.display_name == "Fire Base"


@pytest.mark.asyncio
async def test_firebase_verifier_hides_provider_error(firebase_verifier):
    error = firebase_auth.InvalidIdTokenError("Firebase ID token has incorrect audience")
    with patch("app.services.auth.identity.firebase_auth.verify_id_token", side_effect=error):
        with pytest.raises(AuthError) as exc_info:
            await firebase_verifier.verify("id-token")

    assert exc_info.value.message == "Unauthorized: Invalid token"
    assert "audience" not in exc_info.value.message


@pytest.mark.asyncio
async def test_firebase_verifier_rejects_malformed_token(firebase_verifier):
    with patch("app.services.auth.identity.firebase_auth.verify_id_token", side_effect=ValueError("Illegal ID token")):
        with pytest.raises(AuthError):
            await firebase_verifier.verify("garbage")


@pytest.mark.asyncio
async def test_firebase_setup_error_is_not_reported_as_bad_token():
    verifier = FirebaseIdentityVerifier(Settings(IDENTITY_PROVIDER="firebase", FIREBASE_PROJECT_ID="demo"))
    broken = ValueError("Invalid service account certificate")
    with patch.object(FirebaseIdentityVerifier, "_get_app", side_effect=broken), \
            patch("app.services.auth.identity.firebase_auth.verify_id_token") as verify:
        with pytest.raises(ValueError, match="service account"):
            await verifier.verify("id-token")

    verify.assert_not_called()


def test_factory_picks_configured_provider():
    assert isinstance(get_identity_verifier(Settings(IDENTITY_PROVIDER="jwt", JWT_SECRET_KEY="s")), JwtIdentityVerifier)
    assert isinstance(get_identity_verifier(Settings(IDENTITY_PROVIDER="firebase")), FirebaseIdentityVerifier)


def test_factory_requires_jwt_secret():
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        get_identity_verifier(Settings(IDENTITY_PROVIDER="jwt", JWT_SECRET_KEY=None))
