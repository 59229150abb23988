"""
Direct message admin configuration.
"""
from django.contrib import admin
from apps.direct_messages.models import Message
from apps.direct_messages.services.message_service import DirectMessageService


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['id', 'message_type', 'sender', 'recipient', 'timestamp', 'edited']
    list_filter = ['message_type', 'edited', 'timestamp']
    search_fields = ['sender__email', 'recipient__email']
    readonly_fields = [
        'id', 'message_type', 'sender', 'recipient', 'get_decrypted_text',
        'timestamp', 'read_by', 'edited', 'edited_at'
    ]
    fields = readonly_fields

    def get_decrypted_text(self, obj):
        """Display decrypted message in admin."""
        return DirectMessageService.decrypt_text(obj)
    get_decrypted_text.short_description = 'Message'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
