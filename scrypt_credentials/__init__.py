from scrypt_credentials.core.config import ScryptPolicy, get_policy
from scrypt_credentials.core.credential_string import (
    CredentialParameters,
    decode_credential,
    encode_credential,
)
from scrypt_credentials.core.hashing import HashingError, hash_password
from scrypt_credentials.core.passwords import (
    authenticate,
    hash_password_async,
    needs_rehash,
    verify_password,
    verify_password_async,
)
from scrypt_credentials.core.salt import generate_salt

__all__ = [
    "CredentialParameters",
    "HashingError",
    "ScryptPolicy",
    "authenticate",
    "decode_credential",
    "encode_credential",
    "generate_salt",
    "get_policy",
    "hash_password",
    "hash_password_async",
    "needs_rehash",
    "verify_password",
    "verify_password_async",
]
