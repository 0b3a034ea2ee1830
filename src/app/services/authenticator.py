"""
Duress-aware authentication.

Every identity carries a normal and an optional coercion password hash.
The result tag decides, through MUTATION_POLICY, whether a sensitive write
really happens.
"""

from enum import Enum
from typing import Optional

import bcrypt

from config import ApplicationConfig
from src.domain.entities import AuthTag, Identity

MIN_PASSWORD_LENGTH = 6


class MutationPolicy(str, Enum):
    apply = "apply"
    simulate = "simulate"
    reject = "reject"


MUTATION_POLICY = {
    AuthTag.normal: MutationPolicy.apply,
    AuthTag.duress: MutationPolicy.simulate,
    AuthTag.invalid: MutationPolicy.reject,
}

_dummy_hash: Optional[bytes] = None


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    rounds = rounds or ApplicationConfig.BCRYPT_ROUNDS
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds)).decode()


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash never authenticates
        return False


def _burn_dummy_check(password: str) -> None:
    """Keep response time similar for unknown identities."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))
    bcrypt.checkpw(password.encode(), _dummy_hash)


def authenticate(identity: Optional[Identity], password: str) -> AuthTag:
    """
    Check both stored hashes.

    Both comparisons always run when a coercion hash exists, so the tag
    cannot be inferred from timing.
    """
    if identity is None:
        _burn_dummy_check(password)
        return AuthTag.invalid

    normal_match = verify_password(password, identity.password_hash)
    duress_match = False
    if identity.duress_password_hash:
        duress_match = verify_password(password, identity.duress_password_hash)

    if normal_match:
        return AuthTag.normal
    if duress_match:
        return AuthTag.duress
    return AuthTag.invalid


def mutation_policy(tag: AuthTag) -> MutationPolicy:
    return MUTATION_POLICY[tag]
