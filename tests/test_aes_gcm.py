import os
from unittest.mock import patch

import pytest

from gcm_stream.crypto_engine.aes_gcm import (
    KEY_SIZES,
    NONCE_SIZE,
    TAG_SIZE,
    AesGcmAlgorithm,
    create_decryptor,
    create_encryptor,
    select_algorithm,
)
from gcm_stream.exceptions import (
    ConfigurationError,
    InvalidIVError,
    MissingIVError,
    MissingKeyError,
    UnsupportedKeySizeError,
)
from gcm_stream.models import CipherConfig


class TestAlgorithmSelection:

    @pytest.mark.parametrize(
        "size, expected",
        [
            (16, AesGcmAlgorithm.AES_128_GCM),
            (24, AesGcmAlgorithm.AES_192_GCM),
            (32, AesGcmAlgorithm.AES_256_GCM),
        ],
    )
    def test_key_length_selects_variant(self, size, expected):
        algorithm = select_algorithm(os.urandom(size), os.urandom(12))
        assert algorithm is expected
        assert algorithm.key_size == size

    def test_supported_key_sizes(self):
        assert KEY_SIZES == (16, 24, 32)
        assert TAG_SIZE == 16
        assert NONCE_SIZE == 12

    def test_missing_key_raises_error(self):
        with pytest.raises(MissingKeyError, match="key is required"):
            select_algorithm(None, os.urandom(12))

    def test_missing_iv_raises_error(self):
        with pytest.raises(MissingIVError, match="iv is required"):
            select_algorithm(os.urandom(16), None)

    def test_missing_key_checked_before_iv(self):
        with pytest.raises(MissingKeyError):
            select_algorithm(None, None)

    @pytest.mark.parametrize("size", [0, 1, 8, 15, 17, 20, 31, 33, 64])
    def test_unsupported_key_size(self, size):
        with pytest.raises(UnsupportedKeySizeError, match="Key must be"):
            select_algorithm(bytes(size), os.urandom(12))

    def test_configuration_errors_share_base(self):
        with pytest.raises(ConfigurationError):
            select_algorithm(bytes(5), os.urandom(12))


class TestCipherFactory:

    def test_bad_key_size_rejected_before_cipher_is_built(self):
        config = CipherConfig(key=bytes(10), iv=bytes(12))
        with patch("gcm_stream.crypto_engine.aes_gcm.Cipher") as mock_cipher:
            with pytest.raises(UnsupportedKeySizeError):
                create_encryptor(config)
            with pytest.raises(UnsupportedKeySizeError):
                create_decryptor(config)
        mock_cipher.assert_not_called()

    def test_empty_iv_is_invalid_not_missing(self):
        config = CipherConfig(key=bytes(16), iv=b"")
        with pytest.raises(InvalidIVError) as exc_info:
            create_encryptor(config)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_non_bytes_iv_is_invalid(self):
        with pytest.raises(InvalidIVError) as exc_info:
            create_encryptor(CipherConfig(key=bytes(16), iv="x" * 12))
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_invalid_iv_on_decrypt(self):
        with pytest.raises(InvalidIVError):
            create_decryptor(CipherConfig(key=bytes(16), iv=b"\x00" * 4))

    def test_empty_key_is_bad_size_not_missing(self):
        with pytest.raises(UnsupportedKeySizeError):
            create_encryptor(CipherConfig(key=b"", iv=bytes(12)))

    def test_encryptor_applies_aad(self):
        key, iv = bytes(16), bytes(12)
        _, plain = create_encryptor(CipherConfig(key=key, iv=iv))
        _, with_aad = create_encryptor(CipherConfig(key=key, iv=iv, aad=bytes(16)))
        plain.finalize()
        with_aad.finalize()
        assert plain.tag != with_aad.tag

    def test_returns_algorithm_with_context(self):
        algorithm, decryptor = create_decryptor(CipherConfig(key=bytes(32), iv=bytes(12)))
        assert algorithm is AesGcmAlgorithm.AES_256_GCM
        assert hasattr(decryptor, "finalize_with_tag")

    def test_config_repr_hides_key_material(self):
        config = CipherConfig(key=b"k" * 16, iv=b"i" * 12, aad=b"secret-aad")
        assert "kkkk" not in repr(config)
        assert "secret-aad" not in repr(config)
