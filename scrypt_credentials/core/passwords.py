"""Password verification helpers built on the scrypt credential format."""
from __future__ import annotations

import asyncio
import hmac
from typing import Optional

from loguru import logger

from scrypt_credentials.core.config import KEY_LENGTH, ScryptPolicy, get_policy
from scrypt_credentials.core.credential_string import decode_credential
from scrypt_credentials.core.hashing import CostParameters, HashingError, hash_password
from scrypt_credentials.core.salt import generate_salt


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check ``password`` against a stored credential string.

    The stored parameters are used, never the current policy. A malformed
    credential, a wrong password and a derivation failure all return False.
    """
    if not isinstance(password, str):
        return False
    params = decode_credential(stored_hash)
    if params is None:
        logger.warning("Stored credential is not a valid scrypt string.")
        return False
    try:
        candidate = hash_password(password, params.salt_bytes, params)
    except (HashingError, ValueError):
        return False
    return hmac.compare_digest(
        candidate.encode("utf-8"),
        stored_hash.encode("utf-8", "surrogatepass"),
    )


def needs_rehash(stored_hash: str, policy: Optional[ScryptPolicy] = None) -> bool:
    """
    Return True when ``stored_hash`` should be replaced after a successful login.

    That is the case for anything that does not decode, for costs that
    differ from the policy and for derived keys of an unexpected length.
    """
    policy = policy if policy is not None else get_policy()
    params = decode_credential(stored_hash)
    if params is None:
        return True
    if (params.ln, params.r, params.p) != (policy.ln, policy.r, policy.p):
        logger.debug(
            f"Credential uses ln={params.ln}, r={params.r}, p={params.p}; "
            f"policy is ln={policy.ln}, r={policy.r}, p={policy.p}"
        )
        return True
    return len(params.hash_bytes) != KEY_LENGTH


def authenticate(
    stored_hash: Optional[str],
    password: str,
    *,
    policy: Optional[ScryptPolicy] = None,
) -> bool:
    """
    Verify a login attempt where the account lookup may have found nothing.

    Pass ``stored_hash=None`` for an unknown account: the password is still
    hashed with a throwaway salt so the response takes as long as a wrong
    password for an existing account.
    """
    if stored_hash is None:
        policy = policy if policy is not None else get_policy()
        try:
            hash_password(
                password if isinstance(password, str) else "",
                generate_salt(policy.salt_bytes),
                policy=policy,
            )
        except (HashingError, ValueError):
            logger.error("Throwaway hash for an unknown account failed.")
        return False
    verified = verify_password(password, stored_hash)
    return verified and bool(password)


async def hash_password_async(
    password: str,
    salt: Optional[bytes] = None,
    params: Optional[CostParameters] = None,
    *,
    policy: Optional[ScryptPolicy] = None,
) -> str:
    """Run ``hash_password`` in a worker thread."""
    return await asyncio.to_thread(hash_password, password, salt, params, policy=policy)


async def verify_password_async(password: str, stored_hash: str) -> bool:
    """
    Run ``verify_password`` in a worker thread.

    Cancelling the awaiting task does not stop the derivation already running.
    """
    return await asyncio.to_thread(verify_password, password, stored_hash)
