"""
Custom throttle classes for rate limiting.
SECURITY: Prevents brute force on authentication and message flooding.
"""
from rest_framework.throttling import UserRateThrottle, AnonRateThrottle


class AuthThrottle(AnonRateThrottle):
    """
    Throttle for authentication endpoints (login, register).
    Limits to 10 attempts per hour to prevent brute force attacks.
    """
    scope = 'auth'


class MessageSendThrottle(UserRateThrottle):
    """
    Throttle for sending direct messages.
    Limits each user to 60 messages per minute.
    """
    scope = 'message_send'
