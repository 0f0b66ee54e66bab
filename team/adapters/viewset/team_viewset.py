import logging

from django.http import Http404
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated

from team.models import Team, TeamMembership
from team.permission import TeamAccessPermission
from tracker.exceptions import Conflict, InvalidOperation
from tracker.jwt_auth import BearerJWTAuthentication
from user.models import User
from utils.access_policy import is_allowed
from utils.envelope import success_response
from utils.viewset_mixins import NotFoundMessageMixin
from ..serializers.team_serializer import AddMemberSerializer, TeamSerializer, TeamWriteSerializer

logger = logging.getLogger(__name__)


class TeamViewSet(NotFoundMessageMixin, viewsets.ModelViewSet):
    """
    Teams API:
    - list only returns teams the caller belongs to
    - detail routes resolve any team so non-members get 403 rather than 404
    - membership changes go through the add_member / remove_member actions
    """
    serializer_class = TeamSerializer
    pagination_class = None
    permission_classes = [IsAuthenticated, TeamAccessPermission]
    authentication_classes = [BearerJWTAuthentication]
    not_found_message = 'Team not found'

    def get_queryset(self):
        qs = Team.objects.select_related('owner').prefetch_related('memberships__user')

        if self.action == 'list':
            qs = qs.filter(memberships__user=self.request.user).distinct()

        return qs.order_by('-created_at', '-id')

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return TeamWriteSerializer
        return TeamSerializer

    def _reload(self, team):
        return self.get_queryset().get(pk=team.pk)

    def list(self, request, *args, **kwargs):
        teams = self.get_queryset()
        data = TeamSerializer(teams, many=True).data
        return success_response(data, count=len(data))

    @extend_schema(request=TeamWriteSerializer, responses={201: TeamSerializer})
    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        team = write_serializer.save()
        logger.info(f"Team {team.id} created by user {request.user.id}")

        return success_response(TeamSerializer(self._reload(team)).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        return success_response(TeamSerializer(self.get_object()).data)

    @extend_schema(request=TeamWriteSerializer, responses={200: TeamSerializer})
    def update(self, request, *args, **kwargs):
        instance = self.get_object()

        # name and description are the only writable fields
        write_serializer = self.get_serializer(instance, data=request.data, partial=True)
        write_serializer.is_valid(raise_exception=True)
        team = write_serializer.save()

        return success_response(TeamSerializer(self._reload(team)).data)

    def destroy(self, request, *args, **kwargs):
        team = self.get_object()
        team_id = team.id
        # memberships cascade, which drops the team from every member's list
        team.delete()
        logger.info(f"Team {team_id} deleted by user {request.user.id}")

        return success_response(message='Team deleted successfully')

    @extend_schema(request=AddMemberSerializer, responses={200: TeamSerializer})
    @action(detail=True, methods=['post'], url_path='members')
    def add_member(self, request, pk=None):
        team = self.get_object()

        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = serializer.validated_data['user_id']
        role = serializer.validated_data['role']

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise NotFound('User not found')

        _, created = TeamMembership.objects.get_or_create(team=team, user=user, defaults={'role': role})
        if not created:
            raise Conflict('User is already a member of this team')

        logger.info(f"User {user.id} added to team {team.id} as {role}")
        return success_response(TeamSerializer(self._reload(team)).data)

    @action(detail=True, methods=['delete'], url_path=r'members/(?P<user_id>[^/.]+)')
    def remove_member(self, request, pk=None, user_id=None):
        try:
            team = get_object_or_404(self.get_queryset(), pk=pk)
        except Http404:
            raise NotFound(self.not_found_message)

        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise NotFound('User not found')

        # outsiders learn nothing about the team, not even who owns it
        if not is_allowed('team', 'view', request.user, team):
            raise PermissionDenied('Not authorized to access this team')

        # no caller may remove the owner this way
        if team.owner_id == user_id:
            raise InvalidOperation('Cannot remove team owner')

        self.check_object_permissions(request, team)

        removed, _ = TeamMembership.objects.filter(team=team, user_id=user_id).delete()
        if removed:
            logger.info(f"User {user_id} removed from team {team.id}")

        return success_response(TeamSerializer(self._reload(team)).data)
