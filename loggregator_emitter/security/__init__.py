"""
Security module - Message signing for Loggregator envelopes

Provides:
- MessageSigner: Signs message bodies with a key derived from a shared secret
- derive_key: Shared secret to AES-128 key derivation
- pad / unpad: 0x80-marker block padding used by the signature scheme

Example:
    from loggregator_emitter.security import MessageSigner

    signer = MessageSigner("shared-secret")
    signature = signer.sign(b"hello world")  # 16-byte IV + 48-byte ciphertext
"""

from loggregator_emitter.security.message_signer import (
    BLOCK_SIZE,
    MessageSigner,
    derive_key,
    pad,
    unpad,
)

__all__ = [
    "BLOCK_SIZE",
    "MessageSigner",
    "derive_key",
    "pad",
    "unpad",
]
