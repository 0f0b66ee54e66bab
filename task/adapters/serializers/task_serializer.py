from django.core.exceptions import ObjectDoesNotExist
from rest_framework import serializers
from rest_framework.exceptions import NotFound

from attachment.adapters.serializers.attachment_serializer import AttachmentSerializer
from comment.adapters.serializers.comment_serializer import CommentSerializer
from task.models import Task
from team.adapters.serializers.team_serializer import TeamSummarySerializer
from team.models import Team
from user.adapters.serializers.user_serializers import UserSummarySerializer
from user.models import User

# Never writable through the API, whatever the payload says.
PROTECTED_FIELDS = ('id', 'created_by', 'created_at', 'updated_at', 'completed_at')


class ExistingRelatedField(serializers.PrimaryKeyRelatedField):
    """
    Primary-key reference whose target must exist. A dangling reference is a
    404 rather than a validation error.
    """

    def __init__(self, not_found_message, **kwargs):
        self.not_found_message = not_found_message
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('incorrect_type', data_type=type(data).__name__)
        try:
            return self.get_queryset().get(pk=data)
        except ObjectDoesNotExist:
            raise NotFound(self.not_found_message)
        except (TypeError, ValueError):
            self.fail('incorrect_type', data_type=type(data).__name__)


class TaskSerializer(serializers.ModelSerializer):
    created_by = UserSummarySerializer(read_only=True)
    assigned_to = UserSummarySerializer(read_only=True)
    team = TeamSummarySerializer(read_only=True)

    class Meta:
        model = Task
        fields = (
            'id',
            'title',
            'description',
            'status',
            'priority',
            'due_date',
            'created_by',
            'assigned_to',
            'team',
            'tags',
            'created_at',
            'updated_at',
            'completed_at',
        )


class TaskDetailSerializer(TaskSerializer):
    comments = CommentSerializer(many=True, read_only=True)
    attachments = AttachmentSerializer(many=True, read_only=True)

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ('comments', 'attachments')


class TaskWriteSerializer(serializers.ModelSerializer):
    title = serializers.CharField(max_length=255, error_messages={
        'required': 'Task title is required',
        'blank': 'Task title is required',
    })
    description = serializers.CharField(required=False, allow_blank=True)
    assigned_to = ExistingRelatedField(
        'Assigned user not found',
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
    )
    team = ExistingRelatedField(
        'Team not found',
        queryset=Team.objects.all(),
        required=False,
        allow_null=True,
    )
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        allow_empty=True,
    )

    class Meta:
        model = Task
        fields = (
            'title',
            'description',
            'status',
            'priority',
            'due_date',
            'assigned_to',
            'team',
            'tags',
        )

    def validate_tags(self, value):
        # a set of tags; keep first occurrence order
        return list(dict.fromkeys(value))

    def validate(self, attrs):
        offending = sorted(set(self.initial_data) & set(PROTECTED_FIELDS))
        if offending:
            raise serializers.ValidationError(
                f"Field(s) cannot be modified: {', '.join(offending)}"
            )
        return attrs

    def create(self, validated_data):
        # new tasks always start open
        validated_data.pop('status', None)
        validated_data['created_by'] = self.context['request'].user
        return super().create(validated_data)
