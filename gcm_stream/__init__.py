"""
gcm-stream

Streaming AES-GCM authenticated encryption over chunked byte streams.
Output format: ciphertext || 16-byte tag.
"""

from .config import Settings, configure_logging, get_settings
from .crypto_engine import (
    TAG_SIZE,
    AesGcmAlgorithm,
    DecryptTransform,
    EncryptTransform,
    decrypt_stream,
    encrypt_stream,
)
from .exceptions import (
    AuthenticationFailureError,
    ConfigurationError,
    GcmStreamError,
    InvalidIVError,
    MissingIVError,
    MissingKeyError,
    StreamClosedError,
    StreamError,
    TruncatedCiphertextError,
    UnsupportedKeySizeError,
)
from .models import CipherConfig, TransformState
from .pipeline import decrypt, encrypt, run
from .streams import BufferSink, FileSink, aiter_chunks, iter_chunks, read_chunks

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "TAG_SIZE",
    "AesGcmAlgorithm",
    "DecryptTransform",
    "EncryptTransform",
    "decrypt_stream",
    "encrypt_stream",
    "AuthenticationFailureError",
    "ConfigurationError",
    "GcmStreamError",
    "InvalidIVError",
    "MissingIVError",
    "MissingKeyError",
    "StreamClosedError",
    "StreamError",
    "TruncatedCiphertextError",
    "UnsupportedKeySizeError",
    "CipherConfig",
    "TransformState",
    "decrypt",
    "encrypt",
    "run",
    "BufferSink",
    "FileSink",
    "aiter_chunks",
    "iter_chunks",
    "read_chunks",
]

__version__ = "1.0.0"
