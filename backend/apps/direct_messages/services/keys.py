"""
Message encryption key provider.
Resolves the 32-byte AES key for direct messages once per process.
"""
import logging
from typing import Optional
from django.conf import settings
from apps.direct_messages.exceptions import KeyConfigurationError

logger = logging.getLogger(__name__)

KEY_LENGTH = 32

# Publicly known development key. Anything encrypted with it is readable by anyone.
DEFAULT_DEV_KEY_HEX = '0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef'


class MessageKeyProvider:
    """
    Lazily resolves and memoizes the message encryption key.

    If raw_key is None the value is read from settings.MESSAGE_ENCRYPTION_KEY
    on first use. An empty value selects the insecure development key and
    logs a single warning for the lifetime of the provider.
    """

    def __init__(self, raw_key: Optional[str] = None):
        self._raw_key = raw_key
        self._key: Optional[bytes] = None
        self._using_default = False

    @property
    def using_default_key(self) -> bool:
        self.get_key()
        return self._using_default

    def get_key(self) -> bytes:
        """
        Return the 32-byte key, resolving it on the first call.

        Raises:
            KeyConfigurationError: configured key is not valid hex or does
                not decode to exactly 32 bytes
        """
        if self._key is not None:
            return self._key

        raw_key = self._raw_key
        if raw_key is None:
            raw_key = getattr(settings, 'MESSAGE_ENCRYPTION_KEY', '') or ''
        raw_key = raw_key.strip()

        if raw_key:
            self._key = self._decode_configured_key(raw_key)
            logger.info("Direct message encryption key loaded from configuration")
        else:
            logger.warning(
                "MESSAGE_ENCRYPTION_KEY is not set; using the default development key. "
                "NOT SECURE FOR PRODUCTION."
            )
            self._using_default = True
            self._key = bytes.fromhex(DEFAULT_DEV_KEY_HEX)

        return self._key

    @staticmethod
    def _decode_configured_key(raw_key: str) -> bytes:
        try:
            key = bytes.fromhex(raw_key)
        except ValueError:
            logger.error("MESSAGE_ENCRYPTION_KEY is not a valid hex string")
            raise KeyConfigurationError(
                "MESSAGE_ENCRYPTION_KEY must be 64 hex characters (32 bytes). "
                "Generate one with: python manage.py message_key --generate"
            ) from None

        if len(key) != KEY_LENGTH:
            logger.error(
                f"MESSAGE_ENCRYPTION_KEY decodes to {len(key)} bytes, expected {KEY_LENGTH}"
            )
            raise KeyConfigurationError(
                f"MESSAGE_ENCRYPTION_KEY must be {KEY_LENGTH} bytes (64 hex characters), "
                f"got {len(key)} bytes. "
                "Generate one with: python manage.py message_key --generate"
            )

        return key


# Process-wide provider, resolved on first encrypt/decrypt
key_provider = MessageKeyProvider()
