"""Recommended scrypt cost parameters and environment overrides."""
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

RECOMMENDED_LN = 17
RECOMMENDED_R = 8
RECOMMENDED_P = 1
DEFAULT_SALT_BYTES = 16
KEY_LENGTH = 32

_ENV_PREFIX = "SCRYPT_CREDENTIALS_"


def compute_maxmem(n: int, r: int) -> int:
    """
    Memory ceiling handed to scrypt: 1.5x the 128 * N * r working set.
    """
    return 128 * n * r * 3 // 2


class ScryptPolicy(BaseModel):
    """Cost parameters embedded into every newly created credential string."""

    model_config = ConfigDict(frozen=True)

    ln: int = Field(RECOMMENDED_LN, ge=1, description="log2 of the scrypt cost factor N")
    r: int = Field(RECOMMENDED_R, ge=1, description="Block size")
    p: int = Field(RECOMMENDED_P, ge=1, description="Parallelization")
    salt_bytes: int = Field(DEFAULT_SALT_BYTES, ge=1, description="Random salt length for new hashes")

    @property
    def n(self) -> int:
        return 2 ** self.ln

    @property
    def maxmem(self) -> int:
        return compute_maxmem(self.n, self.r)

    @classmethod
    def from_env(cls) -> "ScryptPolicy":
        """
        Build a policy from ``SCRYPT_CREDENTIALS_*`` environment variables.

        Unset or blank variables fall back to the recommended values.
        """
        overrides: dict[str, str] = {}
        for name in ("ln", "r", "p", "salt_bytes"):
            raw = os.getenv(f"{_ENV_PREFIX}{name.upper()}", "").strip()
            if raw:
                overrides[name] = raw
        return cls(**overrides)


@lru_cache
def get_policy() -> ScryptPolicy:
    return ScryptPolicy.from_env()
