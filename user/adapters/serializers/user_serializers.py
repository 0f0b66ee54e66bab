from rest_framework import serializers

from tracker.exceptions import Conflict
from user.models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Identity fields embedded in other resources."""

    class Meta:
        model = User
        fields = ('id', 'name', 'email')


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'role')


class UserTeamSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True, allow_null=True)


class MeSerializer(serializers.ModelSerializer):
    teams = UserTeamSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'role', 'teams', 'created_at')


def _ensure_email_available(email, exclude_pk=None):
    email = User.objects.normalize_email_address(email)
    taken = User.objects.filter(email=email)
    if exclude_pk is not None:
        taken = taken.exclude(pk=exclude_pk)
    if taken.exists():
        raise Conflict('User already exists with this email')
    return email


class RegisterSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=100, error_messages={
        'required': 'Name is required',
        'blank': 'Name is required',
    })
    email = serializers.EmailField(error_messages={
        'required': 'Email is required',
        'invalid': 'Please provide a valid email',
    })
    password = serializers.CharField(write_only=True, min_length=6, error_messages={
        'required': 'Password is required',
        'min_length': 'Password must be at least 6 characters',
    })

    class Meta:
        model = User
        fields = ('name', 'email', 'password')

    def validate_email(self, value):
        return _ensure_email_available(value)

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


LOGIN_FIELDS_REQUIRED = 'Please provide email and password'

_login_errors = {key: LOGIN_FIELDS_REQUIRED for key in ('required', 'blank', 'null', 'invalid')}


class LoginSerializer(serializers.Serializer):
    # any missing or non-string field gets the same single message
    email = serializers.CharField(error_messages=_login_errors)
    password = serializers.CharField(trim_whitespace=False, error_messages=_login_errors)

    def validate_email(self, value):
        return User.objects.normalize_email_address(value)


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Only name and email can change here; role and password are ignored."""
    email = serializers.EmailField(required=False)
    name = serializers.CharField(max_length=100, required=False)

    class Meta:
        model = User
        fields = ('name', 'email')

    def validate_email(self, value):
        return _ensure_email_available(value, exclude_pk=self.instance.pk if self.instance else None)


class PasswordUpdateSerializer(serializers.Serializer):
    current_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(trim_whitespace=False, min_length=6, error_messages={
        'min_length': 'Password must be at least 6 characters',
    })
