"""Message signing for Loggregator envelopes"""

import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from loggregator_emitter.core.exceptions import (
    BadPaddingError,
    CryptoInitError,
    CryptoOperationError,
)

BLOCK_SIZE = 16  # AES block size and key length in bytes

PADDING_MARKER = 0x80


def _sha256(data: bytes) -> bytes:
    """Compute SHA-256 digest of data."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(data)
    return digest.finalize()


def derive_key(secret: str) -> bytes:
    """
    Derive the AES-128 signing key from a shared secret.

    The key is the first 16 bytes of the SHA-256 digest of the secret.

    Args:
        secret: Shared secret configured on the Loggregator server

    Returns:
        16-byte key

    Raises:
        CryptoInitError: If the digest or cipher primitive is unavailable
    """
    try:
        key = _sha256(secret.encode("utf-8"))[:BLOCK_SIZE]
        # Fail here rather than on the first sign() if AES is unusable
        algorithms.AES(key)
    except (UnsupportedAlgorithm, ValueError) as e:
        raise CryptoInitError(f"Unable to derive signing key: {e}") from e
    return key


def pad(data: bytes) -> bytes:
    """
    Pad data to a multiple of the block size.

    Appends a single 0x80 byte followed by zero bytes. At least one byte is
    always added, so block-aligned input gains a full extra block. The
    receiving side does not speak PKCS#7, so this exact layout is required.

    Args:
        data: Plain text to pad

    Returns:
        Padded plain text
    """
    zeros = BLOCK_SIZE - len(data) % BLOCK_SIZE - 1
    return data + bytes([PADDING_MARKER]) + bytes(zeros)


def unpad(data: bytes) -> bytes:
    """
    Remove padding added by pad().

    Args:
        data: Padded plain text

    Returns:
        Plain text without the padding

    Raises:
        BadPaddingError: If the last non-zero byte is not 0x80
    """
    end = len(data) - 1
    while end >= 0 and data[end] == 0:
        end -= 1
    if end < 0 or data[end] != PADDING_MARKER:
        raise BadPaddingError("Bad padding")
    return data[:end]


class MessageSigner:
    """
    Signs Loggregator message bodies.

    The signature is the AES-128-CBC encryption of the padded SHA-256 digest
    of the body under a fresh random IV, prefixed with that IV.

    Thread Safety:
        The key is read-only after construction and IVs come from
        os.urandom, so one signer may be shared between threads.
    """

    def __init__(self, secret: str):
        """
        Initialize signer.

        Args:
            secret: Shared secret used for authenticating logging events

        Raises:
            CryptoInitError: If the key cannot be derived
        """
        self._key = derive_key(secret)

    def _generate_iv(self) -> bytes:
        """Generate initialization vector."""
        return os.urandom(BLOCK_SIZE)

    def _encrypt(self, plaintext: bytes, iv: bytes) -> bytes:
        """Encrypt block-aligned plaintext using AES-CBC without padding."""
        cipher = Cipher(algorithms.AES(self._key), modes.CBC(iv))
        encryptor = cipher.encryptor()
        return encryptor.update(plaintext) + encryptor.finalize()

    def sign(self, body: bytes) -> bytes:
        """
        Sign a message body.

        Args:
            body: Message bytes to authenticate

        Returns:
            IV followed by ciphertext (16 + 48 bytes for a SHA-256 digest)

        Raises:
            CryptoOperationError: If the cipher fails
        """
        try:
            iv = self._generate_iv()
            ciphertext = self._encrypt(pad(_sha256(body)), iv)
        except (UnsupportedAlgorithm, ValueError, TypeError) as e:
            raise CryptoOperationError(f"Unable to sign message: {e}") from e
        return iv + ciphertext
