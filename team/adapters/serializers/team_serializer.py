from django.db import transaction
from rest_framework import serializers

from team.models import MemberRole, Team, TeamMembership
from user.adapters.serializers.user_serializers import UserSummarySerializer


class TeamMemberSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = TeamMembership
        fields = ('user', 'role', 'joined_at')


class TeamSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    members = TeamMemberSerializer(source='memberships', many=True, read_only=True)

    class Meta:
        model = Team
        fields = ('id', 'name', 'description', 'owner', 'members', 'created_at')


class TeamSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Team
        fields = ('id', 'name')


class TeamWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255, error_messages={
        'required': 'Team name is required',
        'blank': 'Team name is required',
    })
    description = serializers.CharField(required=False, allow_blank=True)

    class Meta:
        model = Team
        fields = ('name', 'description')

    def create(self, validated_data):
        """The creator becomes owner and is enrolled with the owner role."""
        owner = self.context['request'].user
        with transaction.atomic():
            team = Team.objects.create(owner=owner, **validated_data)
            TeamMembership.objects.create(team=team, user=owner, role=MemberRole.OWNER)
        return team


class AddMemberSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(error_messages={
        'required': 'User ID is required',
        'invalid': 'User ID must be an integer',
    })
    # the owner role belongs to the team owner only
    role = serializers.ChoiceField(
        choices=[MemberRole.ADMIN, MemberRole.MEMBER],
        default=MemberRole.MEMBER,
    )
