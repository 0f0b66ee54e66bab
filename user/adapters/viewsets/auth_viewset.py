import logging

from django.db import IntegrityError, transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated

from tracker.exceptions import Conflict, InvalidCredentials
from tracker.jwt_auth import BearerJWTAuthentication, issue_token
from utils.envelope import success_response
from ..serializers.user_serializers import (
    LOGIN_FIELDS_REQUIRED,
    LoginSerializer,
    MeSerializer,
    PasswordUpdateSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)
from ...models import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'


def auth_payload(user):
    return {
        'user': UserSerializer(user).data,
        'token': issue_token(user),
    }


class AuthViewSet(viewsets.ViewSet):
    """Public endpoints: registration and login."""
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = LoginSerializer

    @extend_schema(request=RegisterSerializer, responses={201: UserSerializer})
    def register(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                user = serializer.save()
        except IntegrityError:
            # lost a race against a concurrent registration with the same email
            raise Conflict('User already exists with this email')

        logger.info(f"Registered user id={user.id}")
        return success_response(auth_payload(user), status=status.HTTP_201_CREATED)

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer})
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationError(LOGIN_FIELDS_REQUIRED)

        email = serializer.validated_data['email']
        password = serializer.validated_data['password']

        # same answer for unknown email and wrong password
        user = User.objects.filter(email=email).first()
        if user is None or not user.is_active or not user.check_password(password):
            raise InvalidCredentials(INVALID_CREDENTIALS)

        return success_response(auth_payload(user))


class AccountViewSet(viewsets.ViewSet):
    """Endpoints acting on the authenticated caller's own account."""
    permission_classes = [IsAuthenticated]
    authentication_classes = [BearerJWTAuthentication]

    @extend_schema(responses={200: MeSerializer})
    def me(self, request):
        user = User.objects.prefetch_related('teams').get(pk=request.user.pk)
        return success_response(MeSerializer(user).data)

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def update_profile(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                user = serializer.save()
        except IntegrityError:
            raise Conflict('User already exists with this email')
        return success_response(UserSerializer(user).data)

    @extend_schema(request=PasswordUpdateSerializer)
    def update_password(self, request):
        serializer = PasswordUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        if not user.check_password(serializer.validated_data['current_password']):
            raise InvalidCredentials('Current password is incorrect')

        user.set_password(serializer.validated_data['new_password'])
        user.save(update_fields=['password'])

        # earlier tokens stay valid until they expire
        return success_response({'token': issue_token(user)})

    def logout(self, request):
        """
        Tokens are stateless, so logging out is the client discarding its
        token; the server only records the event.
        """
        logger.info(f"User id={request.user.id} logged out")
        return success_response(message='Logged out successfully')
