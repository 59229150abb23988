"""
Direct message views and API endpoints.
Bodies are encrypted at rest and decrypted per message on read.
"""
from rest_framework import status, permissions
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema
from apps.accounts.models import User
from apps.accounts.serializers import UserSummarySerializer
from apps.direct_messages.serializers import (
    ConversationSummarySerializer,
    DirectMessageSerializer,
    SendDirectMessageSerializer,
)
from apps.direct_messages.services.message_service import DirectMessageService
from common.responses import envelope
from common.throttling import MessageSendThrottle


class DirectMessageAPIView(APIView):
    """
    Base view for direct messages.
    failure_message is what the client sees when an unexpected error occurs.
    """
    permission_classes = [permissions.IsAuthenticated]
    failure_message = 'Request failed'


@extend_schema(tags=['Direct Messages'])
class UserListView(DirectMessageAPIView):
    """Everyone the current user can message."""
    failure_message = 'Failed to load users'

    def get(self, request):
        users = DirectMessageService.list_peers(request.user)
        return envelope(users=UserSummarySerializer(users, many=True).data)


@extend_schema(tags=['Direct Messages'])
class ConversationListView(DirectMessageAPIView):
    """
    Conversation list with last message preview and unread count,
    most recent first.
    """
    failure_message = 'Failed to load conversations'

    def get(self, request):
        conversations = DirectMessageService.list_conversations(request.user)
        return envelope(
            conversations=ConversationSummarySerializer(conversations, many=True).data
        )


@extend_schema(tags=['Direct Messages'])
class ThreadView(DirectMessageAPIView):
    """
    GET: messages with a user, oldest first.
    POST: send a message to a user.
    """

    def get_throttles(self):
        if self.request.method == 'POST':
            return [MessageSendThrottle()] + super().get_throttles()
        return super().get_throttles()

    def get_other_user(self, user_id, error):
        other_user = User.objects.filter(pk=user_id).first()
        if other_user is None:
            raise NotFound(error)
        return other_user

    def get(self, request, user_id):
        self.failure_message = 'Failed to load messages'
        other_user = self.get_other_user(user_id, 'User not found')

        messages = DirectMessageService.get_thread(request.user, other_user)
        serializer = DirectMessageSerializer(
            messages, many=True, context={'request': request}
        )
        return envelope(
            messages=serializer.data,
            other_user=UserSummarySerializer(other_user).data,
        )

    @extend_schema(request=SendDirectMessageSerializer)
    def post(self, request, user_id):
        self.failure_message = 'Failed to send message'

        serializer = SendDirectMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        recipient = self.get_other_user(user_id, 'Recipient not found')

        text = serializer.validated_data['text']
        message = DirectMessageService.send_message(
            sender=request.user,
            recipient=recipient,
            text=text,
        )

        # Echo the sender's own text; never re-decrypt
        response_serializer = DirectMessageSerializer(
            message, context={'request': request, 'plaintext': text}
        )
        return envelope(status_code=status.HTTP_201_CREATED, message=response_serializer.data)


@extend_schema(tags=['Direct Messages'])
class MarkReadView(DirectMessageAPIView):
    """Mark every message from a user as read by the current user."""
    failure_message = 'Failed to mark messages as read'

    def patch(self, request, user_id):
        marked_count = DirectMessageService.mark_as_read(request.user, user_id)
        return envelope(marked_count=marked_count)


@extend_schema(tags=['Direct Messages'])
class ClearConversationView(DirectMessageAPIView):
    """Delete all messages between the current user and a user."""
    failure_message = 'Failed to clear chat'

    def delete(self, request, user_id):
        deleted_count = DirectMessageService.clear_conversation(request.user, user_id)
        return envelope(
            deleted_count=deleted_count,
            message=f"Successfully cleared {deleted_count} message(s)",
        )


@extend_schema(tags=['Direct Messages'])
class MessageDeleteView(DirectMessageAPIView):
    """Delete one message. Only its sender may delete it."""
    failure_message = 'Failed to delete message'

    def delete(self, request, message_id):
        deleted = DirectMessageService.delete_message(request.user, message_id)
        if deleted is None:
            raise NotFound('Message not found or you are not authorized to delete it')
        return envelope(deleted_id=str(message_id))
