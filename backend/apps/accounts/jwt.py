from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.exceptions import TokenError, InvalidToken
from drf_spectacular.utils import extend_schema, OpenApiExample
from drf_spectacular.types import OpenApiTypes
from common.throttling import AuthThrottle
from common.responses import envelope
from common.utils import get_client_ip
from .serializers import UserSummarySerializer
import logging

logger = logging.getLogger('security')


class LoginSerializer(TokenObtainPairSerializer):
    """
    JWT serializer with logging.
    Validates that user is active before issuing tokens.
    """

    def validate(self, attrs):
        email = attrs.get('email', '')

        try:
            data = super().validate(attrs)
        except AuthenticationFailed:
            request = self.context.get('request')
            ip_address = get_client_ip(request) if request else None
            logger.warning(f"Failed login for {email} from {ip_address}")
            raise

        if not self.user.is_active:
            logger.warning(f"Inactive user attempted login: {self.user.email}")
            raise AuthenticationFailed(
                "Your account is inactive. Please contact your manager."
            )

        logger.info(f"Successful login: {self.user.email}")
        return data


@extend_schema(
    tags=['Authentication'],
    summary='Login with email and password',
    description='Authenticate user and obtain JWT access and refresh tokens.',
    request=LoginSerializer,
    responses={
        200: OpenApiTypes.OBJECT,
        401: OpenApiTypes.OBJECT,
    },
    examples=[
        OpenApiExample(
            'Login Request',
            value={
                'email': 'user@example.com',
                'password': 'SecurePass123!'
            },
            request_only=True,
        ),
        OpenApiExample(
            'Invalid Credentials',
            value={
                'success': False,
                'error': 'No active account found with the given credentials'
            },
            response_only=True,
            status_codes=['401'],
        ),
    ],
)
class LoginView(TokenObtainPairView):
    """
    JWT login view.
    Returns the token pair and the user summary inside the API envelope.
    """
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    throttle_classes = [AuthThrottle]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])

        return envelope(
            access=serializer.validated_data['access'],
            refresh=serializer.validated_data['refresh'],
            user=UserSummarySerializer(serializer.user).data,
        )
