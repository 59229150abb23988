"""
Direct message codec.
Compresses, encrypts and serializes message bodies for storage.

Wire format: <32 hex chars IV>:<hex ciphertext>
Cipher: AES-256-CBC with PKCS7 padding over gzip-compressed UTF-8 text.
There is no authentication tag, so some tampering decrypts to garbage
instead of failing.
"""
import gzip
import logging
import os
import re
import zlib
from typing import NamedTuple, Optional
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from apps.direct_messages.exceptions import (
    MessageCodecError,
    MessageDecryptionError,
    MessageEncryptionError,
    MessageFormatError,
)
from apps.direct_messages.services.keys import MessageKeyProvider, key_provider

logger = logging.getLogger(__name__)

IV_LENGTH = 16
SEPARATOR = ':'
IV_HEX_PATTERN = re.compile(r'[0-9a-fA-F]{%d}' % (IV_LENGTH * 2))
CIPHERTEXT_HEX_PATTERN = re.compile(r'(?:[0-9a-fA-F]{2})*')
DECRYPTION_FAILED_PLACEHOLDER = '[Encrypted message - decryption failed]'


class DecodeResult(NamedTuple):
    """Outcome of decoding one stored message body."""
    text: Optional[str]
    error: Optional[MessageCodecError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def text_or(self, placeholder: str = DECRYPTION_FAILED_PLACEHOLDER) -> str:
        return self.text if self.ok else placeholder


class MessageCodec:
    """
    Encode/decode pair for direct message bodies.
    Uses the key from the injected MessageKeyProvider.
    """

    def __init__(self, provider: MessageKeyProvider):
        self.key_provider = provider

    def encode(self, plaintext: str) -> str:
        """
        Compress and encrypt a message body.

        Args:
            plaintext: Message text

        Returns:
            Wire string "<hex iv>:<hex ciphertext>"

        Raises:
            KeyConfigurationError: configured key is invalid
            MessageEncryptionError: compression or encryption failed
        """
        key = self.key_provider.get_key()

        try:
            compressed = gzip.compress(plaintext.encode('utf-8'))
            iv = os.urandom(IV_LENGTH)

            padder = padding.PKCS7(algorithms.AES.block_size).padder()
            padded = padder.update(compressed) + padder.finalize()

            encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
            ciphertext = encryptor.update(padded) + encryptor.finalize()
        except Exception as e:
            logger.error(f"Message encryption failed: {e.__class__.__name__}")
            raise MessageEncryptionError("Failed to encrypt message") from e

        return iv.hex() + SEPARATOR + ciphertext.hex()

    def decode(self, wire: str) -> str:
        """
        Decrypt and decompress a stored message body.

        Raises:
            KeyConfigurationError: configured key is invalid
            MessageFormatError: body is not "<hex iv>:<hex ciphertext>"
            MessageDecryptionError: wrong key, truncated or tampered body
        """
        key = self.key_provider.get_key()
        iv, ciphertext = self._split(wire)

        try:
            decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()

            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            compressed = unpadder.update(padded) + unpadder.finalize()

            return gzip.decompress(compressed).decode('utf-8')
        except (ValueError, OSError, EOFError, zlib.error) as e:
            # UnicodeDecodeError is a ValueError, BadGzipFile an OSError
            raise MessageDecryptionError("Failed to decrypt message") from e

    def try_decode(self, wire: str) -> DecodeResult:
        """
        Decode without raising for bad bodies.
        Configuration errors still propagate.
        """
        try:
            return DecodeResult(text=self.decode(wire))
        except (MessageFormatError, MessageDecryptionError) as e:
            return DecodeResult(text=None, error=e)

    @staticmethod
    def _split(wire: str):
        parts = wire.split(SEPARATOR) if isinstance(wire, str) else []
        if len(parts) != 2:
            raise MessageFormatError("Invalid encrypted message format")

        iv_hex, ciphertext_hex = parts

        # bytes.fromhex skips whitespace, so the shape is checked first
        if not IV_HEX_PATTERN.fullmatch(iv_hex):
            raise MessageFormatError(f"IV must be {IV_LENGTH * 2} hex characters")
        if not CIPHERTEXT_HEX_PATTERN.fullmatch(ciphertext_hex):
            raise MessageFormatError("Encrypted message is not valid hex")

        return bytes.fromhex(iv_hex), bytes.fromhex(ciphertext_hex)


# Process-wide codec bound to the process-wide key provider
message_codec = MessageCodec(key_provider)
