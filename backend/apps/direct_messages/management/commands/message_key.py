"""
Management command for the direct message encryption key.

Usage:
    python manage.py message_key --generate  # Print a new key for MESSAGE_ENCRYPTION_KEY
    python manage.py message_key --check     # Validate the configured key
"""
import os
from django.core.management.base import BaseCommand, CommandError
from apps.direct_messages.exceptions import KeyConfigurationError
from apps.direct_messages.services.keys import KEY_LENGTH, MessageKeyProvider


class Command(BaseCommand):
    help = 'Generate or validate the direct message encryption key'

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument(
            '--generate',
            action='store_true',
            help='Print a new random 64 hex character key',
        )
        group.add_argument(
            '--check',
            action='store_true',
            help='Validate MESSAGE_ENCRYPTION_KEY from settings',
        )

    def handle(self, *args, **options):
        if options['generate']:
            self.stdout.write(os.urandom(KEY_LENGTH).hex())
            return

        provider = MessageKeyProvider()
        try:
            using_default = provider.using_default_key
        except KeyConfigurationError as e:
            raise CommandError(str(e))

        if using_default:
            self.stdout.write(
                self.style.WARNING(
                    'MESSAGE_ENCRYPTION_KEY is not set: the public development key is in use'
                )
            )
        else:
            self.stdout.write(self.style.SUCCESS('MESSAGE_ENCRYPTION_KEY is valid'))
