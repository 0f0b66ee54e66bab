from rest_framework import serializers

from attachment.models import Attachment
from user.adapters.serializers.user_serializers import UserSummarySerializer


class AttachmentSerializer(serializers.ModelSerializer):
    uploaded_by = UserSummarySerializer(read_only=True)
    task = serializers.PrimaryKeyRelatedField(read_only=True)
    path = serializers.CharField(source='file.name', read_only=True)

    class Meta:
        model = Attachment
        fields = (
            'id',
            'filename',
            'original_name',
            'mimetype',
            'size',
            'path',
            'task',
            'uploaded_by',
            'created_at',
        )
