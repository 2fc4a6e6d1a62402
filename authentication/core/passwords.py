"""
Salted PBKDF2 credential hashing.

Stored values have the shape ``base64(salt):base64(derived_key)``. The salt is
freshly generated for every call to :func:`hash_password`, so hashing the same
password twice never yields the same stored value.

:class:`SaltedPBKDF2PasswordHasher` plugs the routine into Django's auth
framework so ``set_password``/``check_password``/``authenticate`` use it.
"""
import base64
import binascii
import hashlib
import hmac
import logging
import secrets

from django.conf import settings
from django.contrib.auth.hashers import BasePasswordHasher, mask_hash
from django.utils.translation import gettext_noop as _

logger = logging.getLogger(__name__)

SALT_SIZE = 16
KEY_SIZE = 32
DEFAULT_ITERATIONS = 100_000
HASH_NAME = 'sha256'
SEPARATOR = ':'


def _iterations():
    return getattr(settings, 'PASSWORD_HASH_ITERATIONS', DEFAULT_ITERATIONS)


def _derive(password, salt, iterations=None):
    return hashlib.pbkdf2_hmac(
        HASH_NAME,
        password.encode('utf-8'),
        salt,
        iterations or _iterations(),
        dklen=KEY_SIZE,
    )


def _encode(salt, key):
    return f"{base64.b64encode(salt).decode('ascii')}{SEPARATOR}{base64.b64encode(key).decode('ascii')}"


def generate_salt():
    return secrets.token_bytes(SALT_SIZE)


def hash_password(password, salt=None):
    """Derive a key from ``password`` and return the encoded salt/key pair."""
    if salt is None:
        salt = generate_salt()
    return _encode(salt, _derive(password, salt))


def split_salted_hash(salted_hash):
    """
    Decode a stored value into ``(salt, key)``.

    Raises ValueError when the value is not a well-formed salt/key pair.
    """
    if not isinstance(salted_hash, str):
        raise ValueError("Stored hash must be a string")

    parts = salted_hash.split(SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError("Stored hash must contain exactly one salt and one key")

    try:
        salt = base64.b64decode(parts[0], validate=True)
        key = base64.b64decode(parts[1], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Stored hash is not valid base64: {exc}") from exc

    if not salt or not key:
        raise ValueError("Stored hash has an empty salt or key")
    return salt, key


def verify_password(password, salted_hash):
    """
    Check ``password`` against a stored salt/key pair in constant time.

    Malformed stored values verify as False.
    """
    if not isinstance(password, str):
        return False

    try:
        salt, expected = split_salted_hash(salted_hash)
    except ValueError as exc:
        logger.warning(f"Rejecting malformed password hash: {exc}")
        return False

    actual = _derive(password, salt)
    return hmac.compare_digest(expected, actual)


class SaltedPBKDF2PasswordHasher(BasePasswordHasher):
    """
    Django password hasher around :func:`hash_password`/:func:`verify_password`.

    Encoded form: ``salted_pbkdf2$<base64 salt>:<base64 key>``.
    """
    algorithm = 'salted_pbkdf2'

    def salt(self):
        return base64.b64encode(generate_salt()).decode('ascii')

    def encode(self, password, salt):
        if not salt:
            raise ValueError("A salt is required")
        raw_salt = base64.b64decode(salt)
        return f"{self.algorithm}${hash_password(password, salt=raw_salt)}"

    def decode(self, encoded):
        algorithm, _, salted_hash = encoded.partition('$')
        if algorithm != self.algorithm:
            raise ValueError(f"Unexpected hash algorithm {algorithm!r}")
        salt, key = split_salted_hash(salted_hash)
        return {
            'algorithm': algorithm,
            'hash': base64.b64encode(key).decode('ascii'),
            'iterations': _iterations(),
            'salt': base64.b64encode(salt).decode('ascii'),
        }

    def verify(self, password, encoded):
        algorithm, _, salted_hash = encoded.partition('$')
        if algorithm != self.algorithm:
            return False
        return verify_password(password, salted_hash)

    def safe_summary(self, encoded):
        decoded = self.decode(encoded)
        return {
            _('algorithm'): decoded['algorithm'],
            _('iterations'): decoded['iterations'],
            _('salt'): mask_hash(decoded['salt']),
            _('hash'): mask_hash(decoded['hash']),
        }

    def must_update(self, encoded):
        return False
