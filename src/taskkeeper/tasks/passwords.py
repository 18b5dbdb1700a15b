# src/taskkeeper/tasks/passwords.py

"""
Password hashing helpers (bcrypt).

New hashes are stored as "bcrypt-sha256$" + bcrypt(base64(sha256(password))):
the pre-hash keeps every byte of long passwords significant despite bcrypt's
72-byte input limit, and base64 keeps NUL bytes out of the bcrypt input.

Unprefixed hashes come from the earlier tool (plain bcrypt over the password
bytes). The prefix picks exactly one check, so a pre-hash typed as a password
never matches a new-style hash.

Passwords are encoded with surrogatepass: terminals in a C/POSIX locale can
hand us lone surrogates, and those must hash and verify like any other text.
"""

from __future__ import annotations

import base64
import hashlib
import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
MIN_ROUNDS = 4
MAX_ROUNDS = 31

SCHEME_PREFIX = "bcrypt-sha256$"

_BCRYPT_MAX_INPUT = 72


def clamp_rounds(rounds: int) -> int:
    return max(MIN_ROUNDS, min(MAX_ROUNDS, int(rounds)))


def _pw_bytes(password: str) -> bytes:
    return password.encode("utf-8", errors="surrogatepass")


def _pw_prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(_pw_bytes(password)).digest())


def hash_password(password: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=clamp_rounds(rounds))
    return SCHEME_PREFIX + bcrypt.hashpw(_pw_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Return True if password matches password_hash.

    Never raises: a malformed or non-bcrypt hash simply fails verification.
    """
    if not isinstance(password, str) or not isinstance(password_hash, str):
        return False

    if password_hash.startswith(SCHEME_PREFIX):
        stored = password_hash[len(SCHEME_PREFIX) :]
        candidate = _pw_prehash(password)
    else:
        # legacy: plain bcrypt over the (truncated) password bytes
        stored = password_hash
        candidate = _pw_bytes(password)[:_BCRYPT_MAX_INPUT]

    try:
        return bcrypt.checkpw(candidate, stored.encode("utf-8"))
    except (ValueError, TypeError, UnicodeEncodeError):
        logger.debug("bcrypt rejected stored hash", exc_info=True)
        return False
