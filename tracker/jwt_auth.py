"""
Bearer JWT authentication for the API.

Tokens are read from the ``Authorization: Bearer <token>`` header only. Every
token failure (malformed, bad signature, expired, unknown or inactive user)
is reported with the same message so clients get one uniform 401.
"""

from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from rest_framework_simplejwt.tokens import AccessToken
from django.http import HttpRequest
from typing import Tuple, Optional
import logging

logger = logging.getLogger(__name__)

TOKEN_FAILED_MESSAGE = 'Not authorized to access this route'


def issue_token(user) -> str:
    """Sign a fresh access token carrying the user's id."""
    return str(AccessToken.for_user(user))


class BearerJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that collapses simplejwt's detailed token errors into a
    single 401 message. Requests without an Authorization header fall through
    as anonymous so permission classes decide.
    """

    def authenticate(self, request: HttpRequest) -> Optional[Tuple]:
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed) as exc:
            logger.info(f"Rejected bearer token for {request.path}: {exc}")
            raise exceptions.AuthenticationFailed(TOKEN_FAILED_MESSAGE, code='token_not_valid')

    def authenticate_header(self, request: HttpRequest) -> str:
        """
        Return a string to be used as the value of the `WWW-Authenticate` header
        in a `401 Unauthenticated` response.
        """
        return 'Bearer'
