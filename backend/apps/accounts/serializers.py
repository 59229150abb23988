from rest_framework import serializers
from .models import User
from django.contrib.auth.password_validation import validate_password
import logging

logger = logging.getLogger('accounts')


# ============================
# User Summary Serializer
# ============================

class UserSummarySerializer(serializers.ModelSerializer):
    """Public fields other team members may see."""

    class Meta:
        model = User
        fields = ("id", "name", "email", "role")
        read_only_fields = fields


# ============================
# Register Serializer
# ============================

class RegisterSerializer(serializers.ModelSerializer):
    """
    Serializer for user registration.
    Includes password confirmation.
    """

    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ("email", "name", "password", "password_confirm")

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name is required")
        return value.strip()

    def validate(self, attrs):
        """Validate that passwords match."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                "password_confirm": "Passwords do not match"
            })
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')

        user = User.objects.create_user(
            email=validated_data["email"],
            name=validated_data["name"],
            password=validated_data["password"],
        )
        logger.info(f"Created account for {user.email}")
        return user
