import logging

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated

from comment.models import Comment
from comment.permission import CommentAccessPermission
from task.models import Task
from tracker.jwt_auth import BearerJWTAuthentication
from utils.envelope import success_response
from utils.viewset_mixins import NotFoundMessageMixin
from ..serializers.comment_serializer import CommentSerializer, CommentWriteSerializer

logger = logging.getLogger(__name__)


def get_task_or_404(task_id):
    task = Task.objects.filter(pk=task_id).first()
    if task is None:
        raise NotFound('Task not found')
    return task


class CommentViewSet(NotFoundMessageMixin,
                     mixins.UpdateModelMixin,
                     mixins.DestroyModelMixin,
                     viewsets.GenericViewSet):
    """
    Comments are listed and created under ``tasks/<task_id>/comments/`` and
    edited or deleted through ``comments/<pk>/``.
    """
    serializer_class = CommentSerializer
    permission_classes = [IsAuthenticated, CommentAccessPermission]
    authentication_classes = [BearerJWTAuthentication]
    pagination_class = None
    not_found_message = 'Comment not found'

    def get_queryset(self):
        return Comment.objects.select_related('author').order_by('-created_at', '-id')

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return CommentWriteSerializer
        return CommentSerializer

    def list(self, request, task_id=None):
        task = get_task_or_404(task_id)
        comments = self.get_queryset().filter(task=task)
        data = CommentSerializer(comments, many=True).data
        return success_response(data, count=len(data))

    @extend_schema(request=CommentWriteSerializer, responses={201: CommentSerializer})
    def create(self, request, task_id=None):
        task = get_task_or_404(task_id)

        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        comment = write_serializer.save(task=task, author=request.user)
        logger.info(f"Comment {comment.id} added to task {task.id} by user {request.user.id}")

        return success_response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CommentWriteSerializer, responses={200: CommentSerializer})
    def update(self, request, *args, **kwargs):
        instance = self.get_object()

        write_serializer = self.get_serializer(instance, data=request.data)
        write_serializer.is_valid(raise_exception=True)
        comment = write_serializer.save()

        return success_response(CommentSerializer(comment).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        comment = self.get_object()
        comment_id = comment.id
        # the task's comment list is derived, so removing the row detaches it
        comment.delete()
        logger.info(f"Comment {comment_id} deleted by user {request.user.id}")

        return success_response(message='Comment deleted successfully')
