"""
Stream Pipeline

Drives a chunk source through a transform into a sink and reports a
single outcome: the finished sink, or the first exception raised by the
source, the transform or the sink.
"""

import inspect
import logging
from contextlib import aclosing
from typing import Any, AsyncIterable, AsyncIterator, Iterable, Optional, Union

from .crypto_engine import ChunkTransform, decrypt_stream, encrypt_stream

logger = logging.getLogger(__name__)

ChunkSource = Union[Iterable[bytes], AsyncIterable[bytes]]


async def _iterate(source: ChunkSource) -> AsyncIterator[bytes]:
    if hasattr(source, "__aiter__"):
        chunks = source.__aiter__()
        try:
            async for chunk in chunks:
                yield chunk
        finally:
            if hasattr(chunks, "aclose"):
                await chunks.aclose()
    else:
        chunks = iter(source)
        try:
            for chunk in chunks:
                yield chunk
        finally:
            if hasattr(chunks, "close"):
                chunks.close()


async def _call(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def run(transform: ChunkTransform, source: ChunkSource, sink: Any) -> Any:
    """
    Pump ``source`` through ``transform`` into ``sink``.

    Args:
        transform: A freshly created encrypt or decrypt transform
        source: Iterable or async iterable of byte chunks
        sink: Object with ``write(chunk)`` and ``close()``, sync or async

    Returns:
        The sink, once ``sink.close()`` has completed

    Raises:
        Whatever the source, transform or sink raised first. The
        transform is aborted, the source is closed and the sink is
        left unclosed.
    """
    try:
        async with aclosing(_iterate(source)) as chunks:
            async for chunk in chunks:
                output = transform.transform(chunk)
                if output:
                    await _call(sink.write(output))

        tail = transform.flush()
        if tail:
            await _call(sink.write(tail))

        await _call(sink.close())
    except Exception as e:
        transform.abort()
        logger.error("%s pipeline failed: %s", transform.direction, type(e).__name__)
        raise
    except BaseException:
        transform.abort()
        raise

    return sink


async def encrypt(
    source: ChunkSource,
    sink: Any,
    key: Optional[bytes],
    iv: Optional[bytes],
    aad: Optional[bytes] = None,
) -> Any:
    """Encrypt ``source`` into ``sink`` as ciphertext || tag."""
    return await run(encrypt_stream(key, iv, aad), source, sink)


async def decrypt(
    source: ChunkSource,
    sink: Any,
    key: Optional[bytes],
    iv: Optional[bytes],
    aad: Optional[bytes] = None,
) -> Any:
    """
    Decrypt ciphertext || tag from ``source`` into ``sink``.

    On AuthenticationFailureError the sink may already hold plaintext
    from earlier chunks; that data must not be trusted.
    """
    return await run(decrypt_stream(key, iv, aad), source, sink)
