import logging
from urllib.parse import parse_qs

from asgiref.sync import sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


def token_from_scope(scope):
    """Bearer token from ``?token=`` or the Authorization header."""
    query_string = scope.get('query_string', b'').decode()
    if query_string:
        tokens = parse_qs(query_string).get('token')
        if tokens:
            return tokens[0]

    for header_name, header_val in scope.get('headers', []):
        if header_name == b'authorization':
            val = header_val.decode()
            if val.lower().startswith('bearer '):
                return val.split(' ', 1)[1].strip()
            break
    return None


class JWTAuthMiddleware(BaseMiddleware):
    async def __call__(self, scope, receive, send):
        scope['user'] = scope.get('user') or AnonymousUser()

        token = token_from_scope(scope)
        if token:
            auth = JWTAuthentication()
            try:
                validated = await sync_to_async(auth.get_validated_token)(token)
                scope['user'] = await sync_to_async(auth.get_user)(validated)
            except (InvalidToken, AuthenticationFailed) as e:
                logger.info(f"Rejected websocket token: {e}")

        return await super().__call__(scope, receive, send)


def JWTAuthMiddlewareStack(inner):
    return JWTAuthMiddleware(inner)
