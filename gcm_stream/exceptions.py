"""
gcm-stream Exceptions
"""


class GcmStreamError(Exception):
    """Base exception for streaming AES-GCM failures."""
    pass


class ConfigurationError(GcmStreamError):
    """Key, IV or AAD rejected when a transform is created."""
    pass


class MissingKeyError(ConfigurationError):
    """No key was supplied."""
    pass


class MissingIVError(ConfigurationError):
    """No IV was supplied."""
    pass


class UnsupportedKeySizeError(ConfigurationError):
    """Key length is not 16, 24 or 32 bytes."""
    pass


class InvalidIVError(ConfigurationError):
    """IV rejected by the underlying GCM primitive."""
    pass


class StreamError(GcmStreamError):
    """Failure while a stream is being processed."""
    pass


class TruncatedCiphertextError(StreamError):
    """Ciphertext stream ended before a full authentication tag was seen."""
    pass


class AuthenticationFailureError(StreamError):
    """Authentication tag did not verify. Plaintext already emitted is untrusted."""
    pass


class StreamClosedError(StreamError):
    """Transform used after it finished, failed or was aborted."""
    pass
