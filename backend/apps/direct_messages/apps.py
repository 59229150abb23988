"""
Direct messages app configuration.
Handles one-to-one messaging encrypted at rest.
"""
from django.apps import AppConfig


class DirectMessagesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.direct_messages'
    label = 'direct_messages'
    verbose_name = 'Direct Messages'
