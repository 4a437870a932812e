"""
gcm-stream Data Models
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class CipherConfig:
    """Per-stream cipher inputs. The key and IV are kept out of repr."""
    key: Optional[bytes] = field(default=None, repr=False)
    iv: Optional[bytes] = field(default=None, repr=False)
    aad: Optional[bytes] = field(default=None, repr=False)


class TransformState(str, Enum):
    """Lifecycle of a chunk transform."""
    AWAITING_FIRST_CHUNK = "awaiting_first_chunk"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (TransformState.DONE, TransformState.FAILED, TransformState.ABORTED)
