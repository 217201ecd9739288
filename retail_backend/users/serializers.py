# users/serializers.py

from rest_framework import serializers

from users.models import User


class MeSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name", "role", "is_staff"]
        read_only_fields = fields
