"""
Tests for DirectMessageService and the API error envelope.
"""
from django.core.exceptions import ValidationError
from rest_framework import status
from common.exceptions import envelope_exception_handler
from apps.direct_messages.models import Message
from apps.direct_messages.services.codec import message_codec
from apps.direct_messages.services.message_service import DirectMessageService
from apps.direct_messages.tests.base import BaseDirectMessageTestCase


class DirectMessageServiceTestCase(BaseDirectMessageTestCase):

    def test_send_stores_ciphertext_and_marks_sender_read(self):
        message = DirectMessageService.send_message(self.alice, self.bob, '  hi bob  ')

        message.refresh_from_db()
        self.assertEqual(message_codec.decode(message.text), 'hi bob')
        self.assertEqual(list(message.read_by.all()), [self.alice])

    def test_send_blank_raises_validation_error(self):
        with self.assertRaises(ValidationError):
            DirectMessageService.send_message(self.alice, self.bob, '   ')

        self.assertFalse(Message.objects.exists())

    def test_delete_only_by_sender(self):
        message = self.create_message(self.alice, self.bob)

        self.assertIsNone(DirectMessageService.delete_message(self.bob, message.pk))
        self.assertIsNotNone(DirectMessageService.delete_message(self.alice, message.pk))
        self.assertFalse(Message.objects.filter(pk=message.pk).exists())

    def test_clear_counts_messages_not_read_receipts(self):
        self.create_message(self.alice, self.bob, read=True)
        self.create_message(self.bob, self.alice, read=True)

        self.assertEqual(DirectMessageService.clear_conversation(self.alice, self.bob.pk), 2)

    def test_thread_excludes_team_messages(self):
        self.create_message(self.alice, self.bob, 'direct', seconds=1)
        team = self.create_message(self.alice, self.bob, 'team', seconds=2)
        Message.objects.filter(pk=team.pk).update(message_type=Message.MessageType.TEAM)

        thread = list(DirectMessageService.get_thread(self.alice, self.bob))

        self.assertEqual(len(thread), 1)
        self.assertEqual(DirectMessageService.decrypt_text(thread[0]), 'direct')

    def test_list_peers_excludes_self(self):
        peers = list(DirectMessageService.list_peers(self.carol))

        self.assertEqual(peers, [self.alice, self.bob])


class EnvelopeExceptionHandlerTestCase(BaseDirectMessageTestCase):

    def test_django_validation_error_maps_to_400(self):
        response = envelope_exception_handler(ValidationError("Message text is required"), {})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'success': False, 'error': 'Message text is required'})

    def test_unknown_error_maps_to_generic_500(self):
        with self.assertLogs('common.exceptions', level='ERROR'):
            response = envelope_exception_handler(KeyError('internal'), {})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'success': False, 'error': 'Internal server error'})
