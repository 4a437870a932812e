"""
Streaming AES-GCM Transforms

Chunk-by-chunk encryption and decryption.

Wire format: ciphertext (same length as plaintext) || tag (16 bytes),
with no framing. Key, IV and AAD are agreed out of band.

Encryption emits ciphertext for every chunk as it arrives and appends the
tag when the stream is flushed.

Decryption cannot tell which bytes are the tag until the stream ends, so it
holds back the most recent chunk and only decrypts it once the next chunk
arrives. On flush the held chunk is split into the remaining ciphertext and
the tag. Plaintext emitted before a successful flush is unauthenticated.
"""

import logging
from abc import ABC, abstractmethod
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, Optional

from cryptography.exceptions import InvalidTag

from ..exceptions import (
    AuthenticationFailureError,
    StreamClosedError,
    TruncatedCiphertextError,
)
from ..models import CipherConfig, TransformState
from .aes_gcm import TAG_SIZE, create_decryptor, create_encryptor

logger = logging.getLogger(__name__)


class ChunkTransform(ABC):
    """
    Base class for one-shot chunk transforms.

    Subclasses implement ``_transform`` and ``_flush``. The public
    ``transform``/``flush`` pair enforces ordering and the lifecycle:
    once a transform is done, failed or aborted it rejects further use.
    """

    direction = "transform"

    def __init__(self, config: CipherConfig):
        self.config = config
        self.state = TransformState.AWAITING_FIRST_CHUNK
        self.bytes_in = 0
        self.bytes_out = 0

    def transform(self, chunk: bytes) -> bytes:
        """Process one input chunk and return the output ready so far."""
        self._check_open()
        chunk = bytes(chunk)
        try:
            output = self._transform(chunk)
        except Exception:
            self.state = TransformState.FAILED
            raise
        self.bytes_in += len(chunk)
        self.bytes_out += len(output)
        return output

    def flush(self) -> bytes:
        """Signal end of input and return the final output chunk."""
        self._check_open()
        self.state = TransformState.FINALIZING
        try:
            output = self._flush()
        except Exception:
            self.state = TransformState.FAILED
            raise
        self.bytes_out += len(output)
        self.state = TransformState.DONE
        logger.debug(
            "%s %s finished: %d bytes in, %d bytes out",
            self.algorithm.value,
            self.direction,
            self.bytes_in,
            self.bytes_out,
        )
        return output

    def abort(self) -> None:
        """Drop the stream before end of input. No further output is produced."""
        if not self.state.is_terminal:
            self.state = TransformState.ABORTED
            logger.debug("%s %s aborted", self.algorithm.value, self.direction)

    def process(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Run ``chunks`` through the transform, yielding non-empty output."""
        try:
            for chunk in chunks:
                output = self.transform(chunk)
                if output:
                    yield output
            tail = self.flush()
            if tail:
                yield tail
        except BaseException:
            self.abort()
            raise

    async def aprocess(self, chunks: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
        """Async counterpart of :meth:`process`."""
        try:
            async for chunk in chunks:
                output = self.transform(chunk)
                if output:
                    yield output
            tail = self.flush()
            if tail:
                yield tail
        except BaseException:
            self.abort()
            raise

    def _check_open(self) -> None:
        if self.state.is_terminal or self.state is TransformState.FINALIZING:
            raise StreamClosedError(f"{self.direction} stream is {self.state.value}")

    @abstractmethod
    def _transform(self, chunk: bytes) -> bytes:
        """Process one chunk; return the output it releases."""
        pass

    @abstractmethod
    def _flush(self) -> bytes:
        """Finish the stream; return the final output."""
        pass


class EncryptTransform(ChunkTransform):
    """Plaintext chunks in, ciphertext chunks out, tag last."""

    direction = "encrypt"

    def __init__(self, config: CipherConfig):
        super().__init__(config)
        self.algorithm, self._encryptor = create_encryptor(config)
        logger.debug("Created %s encrypt transform", self.algorithm.value)

    def _transform(self, chunk: bytes) -> bytes:
        self.state = TransformState.STREAMING
        return self._encryptor.update(chunk)

    def _flush(self) -> bytes:
        tail = self._encryptor.finalize()
        return tail + self._encryptor.tag


class DecryptTransform(ChunkTransform):
    """Ciphertext+tag chunks in, plaintext chunks out, verified on flush."""

    direction = "decrypt"

    def __init__(self, config: CipherConfig):
        super().__init__(config)
        self.algorithm, self._decryptor = create_decryptor(config)
        self.held_chunk: Optional[bytes] = None
        logger.debug("Created %s decrypt transform", self.algorithm.value)

    def _transform(self, chunk: bytes) -> bytes:
        held = self.held_chunk
        self.state = TransformState.STREAMING

        if held is None:
            self.held_chunk = chunk
            return b""

        if len(chunk) >= TAG_SIZE:
            # The tag lies entirely within the new chunk or later ones.
            self.held_chunk = chunk
            return self._decryptor.update(held)

        # A short chunk may leave part of the tag in the held one.
        combined = held + chunk
        cut = max(0, len(combined) - TAG_SIZE)
        self.held_chunk = combined[cut:]
        return self._decryptor.update(combined[:cut])

    def _flush(self) -> bytes:
        held = self.held_chunk
        self.held_chunk = None

        if held is None or len(held) < TAG_SIZE:
            received = 0 if held is None else len(held)
            logger.warning(
                "%s ciphertext truncated: %d bytes cannot hold a %d byte tag",
                self.algorithm.value,
                received,
                TAG_SIZE,
            )
            raise TruncatedCiphertextError(
                f"Ciphertext too short: expected at least {TAG_SIZE} bytes, got {received}"
            )

        remaining = held[:-TAG_SIZE]
        tag = held[-TAG_SIZE:]

        try:
            return self._decryptor.update(remaining) + self._decryptor.finalize_with_tag(tag)
        except InvalidTag as e:
            logger.warning("%s authentication failed", self.algorithm.value)
            raise AuthenticationFailureError(
                "Unsupported state or unable to authenticate data"
            ) from e


def encrypt_stream(key: Optional[bytes], iv: Optional[bytes], aad: Optional[bytes] = None) -> EncryptTransform:
    """Create an encrypting transform for one stream."""
    return EncryptTransform(CipherConfig(key=key, iv=iv, aad=aad))


def decrypt_stream(key: Optional[bytes], iv: Optional[bytes], aad: Optional[bytes] = None) -> DecryptTransform:
    """Create a decrypting transform for one stream."""
    return DecryptTransform(CipherConfig(key=key, iv=iv, aad=aad))
