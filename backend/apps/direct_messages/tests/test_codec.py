"""
Tests for the direct message codec.
Covers round trips, wire format, tampering and wrong keys.
"""
import re
from unittest.mock import patch
from django.test import SimpleTestCase
from apps.direct_messages.exceptions import (
    MessageDecryptionError,
    MessageEncryptionError,
    MessageFormatError,
)
from apps.direct_messages.services.codec import (
    DECRYPTION_FAILED_PLACEHOLDER,
    DecodeResult,
    MessageCodec,
)
from apps.direct_messages.services.keys import MessageKeyProvider

KEY_A = '11' * 32
KEY_B = '22' * 32


class MessageCodecTestCase(SimpleTestCase):
    """Test encode/decode of message bodies."""

    def setUp(self):
        self.codec = MessageCodec(MessageKeyProvider(KEY_A))

    def test_round_trip(self):
        samples = [
            'Hello team!',
            '',
            ' leading and trailing spaces ',
            'multi\nline\nmessage',
            'Unicode: héllo wörld — 你好 🚀',
            'colons: a:b:c',
            'x' * 10000,
        ]
        for plaintext in samples:
            with self.subTest(plaintext=plaintext[:20]):
                self.assertEqual(self.codec.decode(self.codec.encode(plaintext)), plaintext)

    def test_wire_format(self):
        wire = self.codec.encode('Status update')

        self.assertRegex(wire, r'^[0-9a-f]{32}:[0-9a-f]+$')
        iv_hex, ciphertext_hex = wire.split(':')
        # AES block aligned
        self.assertEqual(len(bytes.fromhex(ciphertext_hex)) % 16, 0)
        self.assertNotIn('Status update', wire)

    def test_fresh_iv_per_message(self):
        first = self.codec.encode('same text')
        second = self.codec.encode('same text')

        self.assertNotEqual(first.split(':')[0], second.split(':')[0])
        self.assertNotEqual(first, second)

    def test_compression_shrinks_repetitive_text(self):
        plaintext = 'the quick brown fox ' * 200
        ciphertext_hex = self.codec.encode(plaintext).split(':')[1]

        self.assertLess(len(ciphertext_hex) // 2, len(plaintext))

    def test_rejects_missing_separator(self):
        wire = self.codec.encode('hello').replace(':', '')

        with self.assertRaises(MessageFormatError):
            self.codec.decode(wire)

    def test_rejects_extra_separator(self):
        wire = self.codec.encode('hello')

        for bad in (wire + ':00', ':' + wire, 'aa:bb:cc'):
            with self.subTest(wire=bad[:12]):
                with self.assertRaises(MessageFormatError):
                    self.codec.decode(bad)

    def test_rejects_non_hex(self):
        with self.assertRaises(MessageFormatError):
            self.codec.decode('not-hex:also-not-hex')

    def test_rejects_whitespace_in_hex(self):
        iv_hex, ciphertext_hex = self.codec.encode('hello').split(':')
        spaced_iv = ' '.join(iv_hex[i:i + 2] for i in range(0, len(iv_hex), 2))

        for bad in (
            spaced_iv + ':' + ciphertext_hex,
            iv_hex + ':\n' + ciphertext_hex + ' ',
            iv_hex + ':' + ciphertext_hex[:8] + ' ' + ciphertext_hex[8:],
            ' ' + iv_hex + ':' + ciphertext_hex,
        ):
            with self.subTest(wire=bad[:12]):
                with self.assertRaises(MessageFormatError):
                    self.codec.decode(bad)

    def test_rejects_odd_length_ciphertext(self):
        iv_hex, ciphertext_hex = self.codec.encode('hello').split(':')

        with self.assertRaises(MessageFormatError):
            self.codec.decode(iv_hex + ':' + ciphertext_hex + 'a')

    def test_rejects_wrong_iv_length(self):
        ciphertext_hex = self.codec.encode('hello').split(':')[1]

        with self.assertRaises(MessageFormatError):
            self.codec.decode('00' * 8 + ':' + ciphertext_hex)

    def test_rejects_plaintext_body(self):
        with self.assertRaises(MessageFormatError):
            self.codec.decode('just a plain message')

    def test_truncated_ciphertext_fails(self):
        wire = self.codec.encode('hello there')

        with self.assertRaises(MessageDecryptionError):
            self.codec.decode(wire[:-2])

    def test_empty_ciphertext_fails(self):
        iv_hex = self.codec.encode('hello').split(':')[0]

        with self.assertRaises(MessageDecryptionError):
            self.codec.decode(iv_hex + ':')

    def test_wrong_key_fails(self):
        wire = self.codec.encode('for key A only')
        other = MessageCodec(MessageKeyProvider(KEY_B))

        result = other.try_decode(wire)

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, MessageDecryptionError)

    def test_tampered_ciphertext_never_returns_original(self):
        """
        CBC has no authentication tag: a flipped character may fail or may
        decrypt to different bytes, but never yields the original text.
        """
        plaintext = 'Meet at 10:00 in room B'
        wire = self.codec.encode(plaintext)
        iv_hex, ciphertext_hex = wire.split(':')

        for position, char in enumerate(ciphertext_hex):
            flipped = '0' if char != '0' else '1'
            tampered = iv_hex + ':' + ciphertext_hex[:position] + flipped + ciphertext_hex[position + 1:]
            with self.subTest(position=position):
                result = self.codec.try_decode(tampered)
                self.assertNotEqual(result.text, plaintext)

    def test_encode_failure_is_generic(self):
        with patch('apps.direct_messages.services.codec.gzip.compress', side_effect=MemoryError('boom')):
            with self.assertLogs('apps.direct_messages.services.codec', level='ERROR'):
                with self.assertRaises(MessageEncryptionError) as ctx:
                    self.codec.encode('hello')

        self.assertEqual(str(ctx.exception), 'Failed to encrypt message')

    def test_decode_errors_do_not_leak_key(self):
        with self.assertRaises(MessageDecryptionError) as ctx:
            self.codec.decode('00' * 16 + ':' + '00' * 16)

        self.assertNotIn(KEY_A, str(ctx.exception))
        self.assertFalse(re.search(r'[0-9a-f]{32}', str(ctx.exception)))


class DecodeResultTestCase(SimpleTestCase):
    """Test the per-message decode result."""

    def setUp(self):
        self.codec = MessageCodec(MessageKeyProvider(KEY_A))

    def test_success(self):
        result = self.codec.try_decode(self.codec.encode('ok'))

        self.assertTrue(result.ok)
        self.assertEqual(result.text_or(), 'ok')

    def test_failure_maps_to_placeholder(self):
        result = self.codec.try_decode('garbage')

        self.assertFalse(result.ok)
        self.assertIsNone(result.text)
        self.assertIsInstance(result.error, MessageFormatError)
        self.assertEqual(result.text_or(), DECRYPTION_FAILED_PLACEHOLDER)
        self.assertEqual(result.text_or('[gone]'), '[gone]')

    def test_result_is_tuple(self):
        text, error = DecodeResult(text='hi')

        self.assertEqual(text, 'hi')
        self.assertIsNone(error)
