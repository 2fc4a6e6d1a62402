from rest_framework import serializers
from .models import CustomUser


# ------------------------------------------------------
# BASE USER SERIALIZER
# ------------------------------------------------------
class UserBaseSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            'uuid',
            'email',
            'first_name',
            'last_name',
            'full_name',
            'role',
            'is_admin',
            'created_at',
        ]
        read_only_fields = ['uuid', 'email', 'role', 'created_at']


# ------------------------------------------------------
# TOKEN SERIALIZERS
# ------------------------------------------------------
class TokenSerializer(serializers.Serializer):
    access_token = serializers.CharField(help_text="JWT access token for API requests")
    refresh_token = serializers.CharField(help_text="JWT refresh token for obtaining new access tokens")
    refresh_expires_in = serializers.FloatField(help_text="Refresh token expiration time in seconds")


class AuthDataSerializer(serializers.Serializer):
    user = UserBaseSerializer(help_text="User profile information")
    tokens = TokenSerializer(help_text="JWT tokens for authentication")
    is_new_user = serializers.BooleanField(required=False, help_text="Indicates if this is a newly created account")


# ------------------------------------------------------
# AUTH SERIALIZERS
# ------------------------------------------------------
class UserRegistrationSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100, help_text="First name")
    last_name = serializers.CharField(max_length=100, help_text="Last name")
    email = serializers.EmailField(help_text="User email address")
    password = serializers.CharField(write_only=True, min_length=8, help_text="User password (minimum 8 characters)")
    confirm_password = serializers.CharField(write_only=True, help_text="Repeat the password")

    def validate_email(self, value):
        return value.strip().lower()

    def validate(self, data):
        if data['password'] != data['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        return data


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField(help_text="User email address")
    password = serializers.CharField(write_only=True, help_text="User password")

    def validate_email(self, value):
        return value.strip().lower()


class TokenRefreshSerializer(serializers.Serializer):
    refresh_token = serializers.CharField(required=False, help_text="JWT refresh token")


class AuthResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(help_text="Whether the operation was successful")
    message = serializers.CharField(required=False, help_text="Human-readable message")
    data = AuthDataSerializer(required=False, help_text="Response data containing user and tokens")
    error = serializers.CharField(required=False, help_text="Error message if operation failed")
