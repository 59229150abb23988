"""
Custom middleware for security logging.
"""
import logging
from django.utils.deprecation import MiddlewareMixin
from common.utils import get_client_ip

logger = logging.getLogger('security')


class SecurityLoggingMiddleware(MiddlewareMixin):
    """
    Middleware to log security-relevant events.
    """

    LOGIN_PATH = '/api/auth/login/'
    REGISTER_PATH = '/api/accounts/register/'
    CLEAR_CHAT_PATH = '/api/direct-messages/clear/'

    # Paths that should be logged
    MONITORED_PATHS = [LOGIN_PATH, REGISTER_PATH, CLEAR_CHAT_PATH]

    def process_response(self, request, response):
        # Only log monitored paths
        if not any(request.path.startswith(path) for path in self.MONITORED_PATHS):
            return response

        ip_address = get_client_ip(request)

        # Failed authentication attempts
        if request.path.startswith(self.LOGIN_PATH) and response.status_code == 401:
            logger.warning(f"Failed login attempt from IP {ip_address}")

        # Successful registrations
        elif request.path.startswith(self.REGISTER_PATH) and response.status_code == 201:
            logger.info(f"New user registration from IP {ip_address}")

        # Bulk deletion of a conversation
        elif (
            request.path.startswith(self.CLEAR_CHAT_PATH)
            and request.method == 'DELETE'
            and response.status_code == 200
        ):
            logger.warning(f"Direct message history cleared via {request.path} from IP {ip_address}")

        return response
