"""
Direct message models.
Message bodies of direct messages are stored encrypted (iv:ciphertext hex).
"""
import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone


class Message(models.Model):
    """
    Chat message between users.
    Only DIRECT messages are served by this app; TEAM is reserved for
    team channels.
    """

    class MessageType(models.TextChoices):
        DIRECT = "direct", "Direct"
        TEAM = "team", "Team"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.DIRECT,
        db_index=True
    )

    # Nullable so deleting a user keeps the other side's history
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='sent_messages'
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='received_messages'
    )

    text = models.TextField(
        help_text="Encrypted body in the form <hex iv>:<hex ciphertext>"
    )
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, editable=False)

    read_by = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='read_messages'
    )

    edited = models.BooleanField(default=False)
    edited_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['timestamp']
        verbose_name = 'Message'
        verbose_name_plural = 'Messages'
        indexes = [
            models.Index(fields=['sender', 'recipient', 'timestamp'], name='dm_pair_timestamp_idx'),
            models.Index(fields=['recipient', 'timestamp'], name='dm_recipient_timestamp_idx'),
        ]

    def __str__(self):
        return f"{self.message_type} message from {self.sender} to {self.recipient} at {self.timestamp}"

    def is_sent_by(self, user) -> bool:
        return self.sender_id is not None and self.sender_id == user.pk
