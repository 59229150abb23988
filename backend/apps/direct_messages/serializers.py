"""
Direct message serializers.
Handles API input/output for direct messaging.
"""
from rest_framework import serializers
from apps.accounts.serializers import UserSummarySerializer
from apps.direct_messages.models import Message
from apps.direct_messages.services.message_service import DirectMessageService


class DirectMessageSerializer(serializers.ModelSerializer):
    """
    Serializer for a message in a thread.
    The body is decrypted per message; a body that cannot be decrypted is
    replaced with a placeholder. Pass context['plaintext'] to echo the
    sender's own text instead of decrypting.
    """
    sender = UserSummarySerializer(read_only=True)
    recipient_id = serializers.IntegerField(read_only=True)
    text = serializers.SerializerMethodField()
    read_by = serializers.PrimaryKeyRelatedField(many=True, read_only=True)
    is_from_current_user = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = [
            'id', 'text', 'sender', 'recipient_id', 'timestamp',
            'read_by', 'edited', 'edited_at', 'is_from_current_user'
        ]
        read_only_fields = fields

    def get_text(self, obj):
        if 'plaintext' in self.context:
            return self.context['plaintext']
        return DirectMessageService.decrypt_text(obj)

    def get_is_from_current_user(self, obj):
        request = self.context.get('request')
        return bool(request and obj.is_sent_by(request.user))


class LastMessageSerializer(serializers.Serializer):
    """Preview of the newest message; text stays encrypted."""
    text = serializers.CharField()
    encrypted = serializers.BooleanField()
    timestamp = serializers.DateTimeField()
    from_me = serializers.BooleanField()


class ConversationSummarySerializer(serializers.Serializer):
    """Serializer for one entry of the conversation list."""
    user = UserSummarySerializer()
    last_message = LastMessageSerializer()
    unread_count = serializers.IntegerField()


class SendDirectMessageSerializer(serializers.Serializer):
    """Serializer for sending messages."""
    text = serializers.CharField(
        max_length=5000,
        error_messages={
            'required': 'Message text is required',
            'blank': 'Message text is required',
            'null': 'Message text is required',
        }
    )

    def validate_text(self, value):
        """Validate message is not empty."""
        if not value or not value.strip():
            raise serializers.ValidationError("Message text is required")
        return value.strip()
