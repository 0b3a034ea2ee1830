import pytest

from src.adapter.services.jwt_url_signer import JwtUrlSigner
from src.app.services.url_signer import LinkExpiredError, LinkInvalidError

KEY = "user-1/2025-03-10/seg 1.m4a"


@pytest.fixture
def signer():
    return JwtUrlSigner("unit-test-secret", "http://media.test/")


def test_sign_builds_quoted_media_url(signer):
    url = signer.sign(KEY, 60)

    assert url.startswith("http://media.test/media/user-1/2025-03-10/seg%201.m4a?token=")
    signer.verify(url.split("token=", 1)[1], KEY)


def test_token_for_another_key_is_invalid(signer):
    token = signer.generate_token(KEY, 60)

    with pytest.raises(LinkInvalidError):
        signer.verify(token, "user-2/2025-03-10/seg.m4a")


def test_token_signed_with_another_secret_is_invalid(signer):
    token = JwtUrlSigner("other-secret", "http://media.test").generate_token(KEY, 60)

    with pytest.raises(LinkInvalidError):
        signer.verify(token, KEY)


def test_malformed_token_is_invalid(signer):
    with pytest.raises(LinkInvalidError):
        signer.verify("not-a-token", KEY)


def test_expired_token(signer):
    token = signer.generate_token(KEY, -10)

    with pytest.raises(LinkExpiredError):
        signer.verify(token, KEY)
