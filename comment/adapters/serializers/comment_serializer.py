from rest_framework import serializers

from comment.models import Comment
from user.adapters.serializers.user_serializers import UserSummarySerializer


class CommentSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)
    task = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Comment
        fields = ('id', 'content', 'task', 'author', 'created_at', 'updated_at')


class CommentWriteSerializer(serializers.ModelSerializer):
    # CharField trims, so whitespace-only content is rejected as blank
    content = serializers.CharField(error_messages={
        'required': 'Comment content is required',
        'blank': 'Comment content is required',
    })

    class Meta:
        model = Comment
        fields = ('content',)
