from rest_framework import serializers
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User


class ProfileSerializer(serializers.ModelSerializer):
    """Public projection of an account: id, email and full name."""

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name']
        read_only_fields = fields


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()

    def validate_refresh(self, value):
        try:
            self.token = RefreshToken(value)
        except TokenError:
            raise serializers.ValidationError("Token is invalid or expired.")
        return value

    def save(self):
        self.token.blacklist()
