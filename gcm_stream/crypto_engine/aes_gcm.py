"""
AES-GCM Algorithm Selection

Chooses the AES-GCM variant from the key length and builds the
incremental encryptor/decryptor contexts used by the stream transforms.

Uses AES in Galois/Counter Mode (GCM) which provides:
- Confidentiality (encryption)
- Integrity (authentication tag)
- Authentication of associated data (AEAD)

Key sizes: 16, 24 or 32 bytes (AES-128/192/256).
Nonce:     conventionally 12 bytes; the length is checked by the primitive.
Tag:       16 bytes, appended to the end of the ciphertext stream.
"""

from enum import Enum
from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..exceptions import (
    InvalidIVError,
    MissingIVError,
    MissingKeyError,
    UnsupportedKeySizeError,
)
from ..models import CipherConfig


NONCE_SIZE = 12
TAG_SIZE = 16


class AesGcmAlgorithm(str, Enum):
    """Supported AES-GCM variants, keyed by key length."""
    AES_128_GCM = "aes-128-gcm"
    AES_192_GCM = "aes-192-gcm"
    AES_256_GCM = "aes-256-gcm"

    @property
    def key_size(self) -> int:
        return _KEY_SIZES[self]


_KEY_SIZES = {
    AesGcmAlgorithm.AES_128_GCM: 16,
    AesGcmAlgorithm.AES_192_GCM: 24,
    AesGcmAlgorithm.AES_256_GCM: 32,
}

KEY_SIZES = tuple(sorted(_KEY_SIZES.values()))


def select_algorithm(key: Optional[bytes], iv: Optional[bytes]) -> AesGcmAlgorithm:
    """
    Pick the AES-GCM variant for ``key``.

    Args:
        key: Raw AES key (16, 24 or 32 bytes)
        iv: Nonce; only its presence is checked here

    Returns:
        The matching AesGcmAlgorithm

    Raises:
        MissingKeyError: If no key is given
        MissingIVError: If no IV is given
        UnsupportedKeySizeError: If the key length is not supported
    """
    if key is None:
        raise MissingKeyError("key is required")

    if iv is None:
        raise MissingIVError("iv is required")

    for algorithm, size in _KEY_SIZES.items():
        if len(key) == size:
            return algorithm

    raise UnsupportedKeySizeError(
        f"Key must be one of {KEY_SIZES} bytes, got {len(key)}"
    )


def _build_cipher(config: CipherConfig) -> Cipher:
    try:
        mode = modes.GCM(config.iv)
    except (TypeError, ValueError) as e:
        raise InvalidIVError(str(e)) from e
    return Cipher(algorithms.AES(config.key), mode)


def create_encryptor(config: CipherConfig):
    """
    Build a GCM encryption context for ``config``.

    Returns:
        Tuple of (algorithm, encryptor) with AAD already applied
    """
    algorithm = select_algorithm(config.key, config.iv)
    encryptor = _build_cipher(config).encryptor()
    if config.aad:
        encryptor.authenticate_additional_data(config.aad)
    return algorithm, encryptor


def create_decryptor(config: CipherConfig):
    """
    Build a GCM decryption context for ``config``.

    The tag is not known yet; it is supplied later through
    ``finalize_with_tag``.

    Returns:
        Tuple of (algorithm, decryptor) with AAD already applied
    """
    algorithm = select_algorithm(config.key, config.iv)
    decryptor = _build_cipher(config).decryptor()
    if config.aad:
        decryptor.authenticate_additional_data(config.aad)
    return algorithm, decryptor
