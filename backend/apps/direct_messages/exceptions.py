"""
Direct message encryption errors.
"""
from django.core.exceptions import ImproperlyConfigured


class MessageCodecError(Exception):
    """Base class for direct message encryption errors."""


class KeyConfigurationError(MessageCodecError, ImproperlyConfigured):
    """MESSAGE_ENCRYPTION_KEY is set but is not a 32-byte hex key."""


class MessageEncryptionError(MessageCodecError):
    """Compressing or encrypting a message body failed."""


class MessageFormatError(MessageCodecError):
    """Stored body is not in the <hex iv>:<hex ciphertext> format."""


class MessageDecryptionError(MessageCodecError):
    """Body could not be decrypted or decompressed (wrong key, corruption, tampering)."""
