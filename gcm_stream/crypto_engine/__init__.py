from .aes_gcm import (
    KEY_SIZES,
    NONCE_SIZE,
    TAG_SIZE,
    AesGcmAlgorithm,
    create_decryptor,
    create_encryptor,
    select_algorithm,
)
from .transforms import (
    ChunkTransform,
    DecryptTransform,
    EncryptTransform,
    decrypt_stream,
    encrypt_stream,
)

__all__ = [
    "KEY_SIZES",
    "NONCE_SIZE",
    "TAG_SIZE",
    "AesGcmAlgorithm",
    "create_decryptor",
    "create_encryptor",
    "select_algorithm",
    "ChunkTransform",
    "DecryptTransform",
    "EncryptTransform",
    "decrypt_stream",
    "encrypt_stream",
]
