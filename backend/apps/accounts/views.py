from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework import status
from drf_spectacular.utils import extend_schema

from .serializers import RegisterSerializer, UserSummarySerializer
from common.responses import envelope
from common.throttling import AuthThrottle

import logging

logger = logging.getLogger('security')


# ============================
# Register
# ============================

@extend_schema(tags=['Accounts'], request=RegisterSerializer, summary='Register a new account')
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([AuthThrottle])
def register_view(request):
    """
    Register a new user account.
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()

    logger.info(f"New user registered: {user.email}")
    return envelope(
        status_code=status.HTTP_201_CREATED,
        user=UserSummarySerializer(user).data,
    )


# ============================
# Current User
# ============================

@extend_schema(tags=['Accounts'], summary='Current user profile')
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me_view(request):
    """Return the authenticated user's profile."""
    return envelope(user=UserSummarySerializer(request.user).data)
