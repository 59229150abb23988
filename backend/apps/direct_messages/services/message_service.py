"""
Direct message service - business logic for one-to-one messaging.
Handles encryption at rest, read tracking and deletion rules.
"""
import logging
from typing import List, Optional
from django.db import transaction
from django.db.models import Q
from django.core.exceptions import ValidationError
from apps.accounts.models import User
from apps.direct_messages.models import Message
from apps.direct_messages.services.codec import (
    DECRYPTION_FAILED_PLACEHOLDER,
    MessageCodec,
    message_codec,
)
from apps.direct_messages.services.conversations import (
    ConversationSummary,
    aggregate_conversations,
)

logger = logging.getLogger(__name__)


class DirectMessageService:
    """
    Service for direct messages between two users.
    Every query is scoped to message_type=DIRECT.
    """

    codec: MessageCodec = message_codec

    @staticmethod
    def _direct():
        return Message.objects.filter(message_type=Message.MessageType.DIRECT)

    @staticmethod
    def _between(user_a_id, user_b_id) -> Q:
        return (
            Q(sender_id=user_a_id, recipient_id=user_b_id) |
            Q(sender_id=user_b_id, recipient_id=user_a_id)
        )

    @staticmethod
    def list_peers(user: User):
        """All other users, sorted by name."""
        return User.objects.exclude(pk=user.pk).order_by('name')

    @classmethod
    def count_unread(cls, user: User, sender: User) -> int:
        """Messages from sender to user that user has not read yet."""
        return cls._direct().filter(
            sender=sender,
            recipient=user
        ).exclude(read_by=user).count()

    @classmethod
    def list_conversations(cls, user: User) -> List[ConversationSummary]:
        """
        Inbox view: last message and unread count per counterpart.

        Unread counts are one query per counterpart and are not read in the
        same transaction as the message scan, so they may briefly lag a
        concurrent send.
        """
        messages = cls._direct().filter(
            Q(sender=user) | Q(recipient=user)
        ).select_related('sender', 'recipient').order_by('-timestamp')

        return aggregate_conversations(
            user,
            messages.iterator(),
            count_unread=lambda counterpart: cls.count_unread(user, counterpart)
        )

    @classmethod
    def get_thread(cls, user: User, other_user: User):
        """Messages between two users, oldest first."""
        return cls._direct().filter(
            cls._between(user.pk, other_user.pk)
        ).select_related('sender').prefetch_related('read_by').order_by('timestamp')

    @classmethod
    def decrypt_text(cls, message: Message) -> str:
        """
        Plaintext of a stored message, or the placeholder when the body
        cannot be decoded. Never raises for a bad body.
        """
        result = cls.codec.try_decode(message.text)
        if not result.ok:
            logger.warning(
                f"Failed to decrypt direct message {message.id}: {result.error.__class__.__name__}"
            )
        return result.text_or(DECRYPTION_FAILED_PLACEHOLDER)

    @classmethod
    @transaction.atomic
    def send_message(cls, sender: User, recipient: User, text: str) -> Message:
        """
        Encrypt and store a message.

        Args:
            sender: User sending the message
            recipient: User receiving it
            text: Plain text message

        Returns:
            Created Message (text field holds the ciphertext)

        Raises:
            ValidationError: text is empty or whitespace only
        """
        text = (text or '').strip()
        if not text:
            raise ValidationError("Message text is required")

        message = Message.objects.create(
            message_type=Message.MessageType.DIRECT,
            sender=sender,
            recipient=recipient,
            text=cls.codec.encode(text),
        )
        # Sender has read it
        message.read_by.add(sender)

        logger.info(f"Direct message {message.id} sent from user {sender.pk} to user {recipient.pk}")
        return message

    @classmethod
    @transaction.atomic
    def mark_as_read(cls, user: User, other_user_id) -> int:
        """
        Mark every message from other_user to user as read by user.

        Returns:
            Number of messages newly marked
        """
        unread_ids = list(
            cls._direct().filter(
                sender_id=other_user_id,
                recipient=user
            ).exclude(read_by=user).values_list('id', flat=True)
        )

        ReadBy = Message.read_by.through
        ReadBy.objects.bulk_create(
            [ReadBy(message_id=message_id, user_id=user.pk) for message_id in unread_ids],
            ignore_conflicts=True
        )
        return len(unread_ids)

    @classmethod
    def delete_message(cls, user: User, message_id) -> Optional[Message]:
        """
        Delete a message the user sent.

        Returns:
            The deleted message, or None when it does not exist or was not
            sent by user (the two cases are not distinguished)
        """
        message = cls._direct().filter(id=message_id, sender=user).first()
        if message is None:
            return None

        message.delete()
        logger.info(f"Direct message {message_id} deleted by user {user.pk}")
        return message

    @classmethod
    @transaction.atomic
    def clear_conversation(cls, user: User, other_user_id) -> int:
        """
        Delete all messages between user and other_user, both directions.

        Returns:
            Number of messages deleted
        """
        _, deleted_per_model = cls._direct().filter(
            cls._between(user.pk, other_user_id)
        ).delete()

        deleted_count = deleted_per_model.get(Message._meta.label, 0)
        logger.info(
            f"User {user.pk} cleared {deleted_count} direct message(s) with user {other_user_id}"
        )
        return deleted_count
