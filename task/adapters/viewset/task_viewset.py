import logging

from django.db.models import F, Value
from django.db.models.functions import Coalesce
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from task.filters import TaskFilter, TaskSearchFilter, TaskSortFilter
from task.models import Status, Task
from task.permission import TaskAccessPermission
from tracker.jwt_auth import BearerJWTAuthentication
from utils.custom_paginator import CustomPaginator
from utils.envelope import success_response
from utils.viewset_mixins import NotFoundMessageMixin
from ..serializers.task_serializer import TaskDetailSerializer, TaskSerializer, TaskWriteSerializer

logger = logging.getLogger(__name__)


class TaskViewset(NotFoundMessageMixin, viewsets.ModelViewSet):
    """
    Tasks API with:
    - bearer JWT auth
    - exact filters, whole-word search over title/description, sort_by/order
    - page/limit pagination
    - object-level write permissions via TaskAccessPermission
    - read/write serializer switching
    """
    queryset = Task.objects.all()
    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated, TaskAccessPermission]
    authentication_classes = [BearerJWTAuthentication]
    pagination_class = CustomPaginator
    not_found_message = 'Task not found'

    filter_backends = [DjangoFilterBackend, TaskSearchFilter, TaskSortFilter]
    filterset_class = TaskFilter

    def get_queryset(self):
        qs = Task.objects.select_related('created_by', 'assigned_to', 'team')

        if self.action == 'retrieve':
            qs = qs.prefetch_related('comments__author', 'attachments__uploaded_by')

        return qs

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return TaskWriteSerializer
        if self.action == 'retrieve':
            return TaskDetailSerializer
        return TaskSerializer

    def _reload(self, task):
        return self.get_queryset().get(pk=task.pk)

    def _paginated(self, queryset):
        page = self.paginate_queryset(queryset)
        serializer = TaskSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def list(self, request, *args, **kwargs):
        return self._paginated(self.filter_queryset(self.get_queryset()))

    @action(detail=False, methods=['get'], url_path='my-tasks')
    def my_tasks(self, request):
        """Tasks assigned to the caller, with the same filters, sorting and paging."""
        queryset = self.filter_queryset(self.get_queryset().filter(assigned_to=request.user))
        return self._paginated(queryset)

    @extend_schema(request=TaskWriteSerializer, responses={201: TaskSerializer})
    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        task = write_serializer.save()
        logger.info(f"Task {task.id} created by user {request.user.id}")

        return success_response(TaskSerializer(self._reload(task)).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        return success_response(TaskDetailSerializer(self.get_object()).data)

    @extend_schema(request=TaskWriteSerializer, responses={200: TaskSerializer})
    def update(self, request, *args, **kwargs):
        instance = self.get_object()

        # PUT and PATCH both merge the given fields
        write_serializer = self.get_serializer(instance, data=request.data, partial=True)
        write_serializer.is_valid(raise_exception=True)
        task = write_serializer.save()

        return success_response(TaskSerializer(self._reload(task)).data)

    @extend_schema(request=None, responses={200: TaskSerializer})
    @action(detail=True, methods=['put'])
    def complete(self, request, pk=None):
        task = self.get_object()

        if task.status != Status.COMPLETED:
            now = timezone.now()
            # one conditional UPDATE; an earlier completed_at always wins
            Task.objects.filter(pk=task.pk).update(
                status=Status.COMPLETED,
                completed_at=Coalesce(F('completed_at'), Value(now)),
                updated_at=now,
            )
            logger.info(f"Task {task.id} completed by user {request.user.id}")

        return success_response(TaskSerializer(self._reload(task)).data)

    def destroy(self, request, *args, **kwargs):
        task = self.get_object()
        task_id = task.id
        # comments and attachments are not cascaded
        task.delete()
        logger.info(f"Task {task_id} deleted by user {request.user.id}")

        return success_response(message='Task deleted successfully')
