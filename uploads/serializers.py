from rest_framework import serializers
from .models import StoredFile


class StoredFileSerializer(serializers.ModelSerializer):
    class Meta:
        model = StoredFile
        fields = ['id', 'storage_key', 'original_name', 'mimetype', 'size_bytes', 'uploaded_at']
        read_only_fields = fields
