# accounts/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    """Public view of a user. The password hash is never part of it."""
    class Meta:
        model = User
        fields = ['name', 'email']
        read_only_fields = fields
