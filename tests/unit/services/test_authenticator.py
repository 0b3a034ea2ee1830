from src.app.services.authenticator import (
    MutationPolicy,
    authenticate,
    mutation_policy,
    verify_password,
)
from src.domain.entities import AuthTag
from tests.fixtures.identities import DURESS_PASSWORD, NORMAL_PASSWORD


def test_normal_password_authenticates_as_normal(identity):
    assert authenticate(identity, NORMAL_PASSWORD) == AuthTag.normal


def test_coercion_password_authenticates_as_duress(identity):
    tag = authenticate(identity, DURESS_PASSWORD)

    assert tag == AuthTag.duress
    assert tag.value == "coacao"


def test_wrong_password_is_invalid(identity):
    assert authenticate(identity, "nope-nope") == AuthTag.invalid


def test_identity_without_coercion_hash(identity):
    identity.duress_password_hash = None

    assert authenticate(identity, NORMAL_PASSWORD) == AuthTag.normal
    assert authenticate(identity, DURESS_PASSWORD) == AuthTag.invalid


def test_unknown_identity_is_invalid(monkeypatch):
    monkeypatch.setattr("src.app.services.authenticator.ApplicationConfig.BCRYPT_ROUNDS", 4)

    assert authenticate(None, NORMAL_PASSWORD) == AuthTag.invalid


def test_malformed_hash_never_verifies():
    assert verify_password("anything", "not-a-bcrypt-hash") is False
    assert verify_password("anything", None) is False


def test_mutation_policy_table():
    assert mutation_policy(AuthTag.normal) == MutationPolicy.apply
    assert mutation_policy(AuthTag.duress) == MutationPolicy.simulate
    assert mutation_policy(AuthTag.invalid) == MutationPolicy.reject
