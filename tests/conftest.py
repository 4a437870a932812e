import os

import pytest

from gcm_stream.config import get_settings
from gcm_stream.crypto_engine import NONCE_SIZE


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_plaintext():
    return b"Hello, this is a test message for streaming AES-GCM encryption!"


@pytest.fixture
def large_plaintext():
    return os.urandom(100_000)


@pytest.fixture(params=[16, 24, 32], ids=["aes-128", "aes-192", "aes-256"])
def aes_key(request):
    return os.urandom(request.param)


@pytest.fixture
def nonce():
    return os.urandom(NONCE_SIZE)


@pytest.fixture
def aad():
    return b"authenticated but not encrypted"
