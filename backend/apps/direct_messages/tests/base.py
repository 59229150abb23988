"""
Base test classes and fixtures for direct message tests.
"""
from datetime import timedelta
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient, APITestCase
from apps.direct_messages.models import Message
from apps.direct_messages.services.codec import message_codec

User = get_user_model()


class BaseDirectMessageTestCase(APITestCase):
    """Base test case with three users and message helpers."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = APIClient()

        self.alice = User.objects.create_user(
            email='alice@example.com',
            name='Alice',
            password='TestPass123!'
        )
        self.bob = User.objects.create_user(
            email='bob@example.com',
            name='Bob',
            password='TestPass123!'
        )
        self.carol = User.objects.create_user(
            email='carol@example.com',
            name='Carol',
            password='TestPass123!'
        )
        self.base_time = timezone.now() - timedelta(hours=1)

    def authenticate(self, user=None):
        """Authenticate a user for API requests."""
        if user is None:
            user = self.alice
        self.client.force_authenticate(user=user)

    def create_message(self, sender, recipient, text='Hello', seconds=0, read=False):
        """
        Store an encrypted direct message at base_time + seconds.
        The sender is always in read_by; read=True adds the recipient too.
        """
        message = Message.objects.create(
            message_type=Message.MessageType.DIRECT,
            sender=sender,
            recipient=recipient,
            text=message_codec.encode(text),
            timestamp=self.base_time + timedelta(seconds=seconds),
        )
        message.read_by.add(sender)
        if read:
            message.read_by.add(recipient)
        return message
