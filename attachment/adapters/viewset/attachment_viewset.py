import logging
import os

from django.http import FileResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from attachment.models import Attachment
from attachment.permission import AttachmentAccessPermission
from attachment.validators import validate_upload
from task.models import Task
from tracker.jwt_auth import BearerJWTAuthentication
from utils.envelope import success_response
from utils.viewset_mixins import NotFoundMessageMixin
from ..serializers.attachment_serializer import AttachmentSerializer

logger = logging.getLogger(__name__)


class AttachmentViewSet(NotFoundMessageMixin,
                        mixins.DestroyModelMixin,
                        viewsets.GenericViewSet):
    """
    Attachments are listed and uploaded under ``tasks/<task_id>/attachments/``
    (multipart field ``file``), downloaded through
    ``attachments/<pk>/download/`` and deleted through ``attachments/<pk>/``.
    """
    serializer_class = AttachmentSerializer
    permission_classes = [IsAuthenticated, AttachmentAccessPermission]
    authentication_classes = [BearerJWTAuthentication]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    pagination_class = None
    not_found_message = 'Attachment not found'

    def get_queryset(self):
        return Attachment.objects.select_related('uploaded_by').order_by('-created_at', '-id')

    def _get_task(self, task_id):
        task = Task.objects.filter(pk=task_id).first()
        if task is None:
            raise NotFound('Task not found')
        return task

    def list(self, request, task_id=None):
        task = self._get_task(task_id)
        attachments = self.get_queryset().filter(task=task)
        data = AttachmentSerializer(attachments, many=True).data
        return success_response(data, count=len(data))

    @extend_schema(
        request={'multipart/form-data': {'type': 'object', 'properties': {'file': {'type': 'string', 'format': 'binary'}}}},
        responses={201: AttachmentSerializer},
    )
    def create(self, request, task_id=None):
        task = self._get_task(task_id)
        uploaded = validate_upload(request.FILES.get('file'))

        attachment = Attachment(
            original_name=os.path.basename(uploaded.name),
            mimetype=uploaded.content_type,
            size=uploaded.size,
            task=task,
            uploaded_by=request.user,
        )
        # FileField.save writes the blob and the row
        attachment.file.save(uploaded.name, uploaded, save=False)
        attachment.filename = os.path.basename(attachment.file.name)
        attachment.save()
        logger.info(f"Attachment {attachment.id} uploaded to task {task.id} by user {request.user.id}")

        return success_response(AttachmentSerializer(attachment).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={(200, 'application/octet-stream'): OpenApiTypes.BINARY})
    @action(detail=True, methods=['get'])
    def download(self, request, pk=None):
        attachment = self.get_object()

        storage = attachment.file.storage
        if not attachment.file.name or not storage.exists(attachment.file.name):
            raise NotFound('File not found on server')

        return FileResponse(
            attachment.file.open('rb'),
            as_attachment=True,
            filename=attachment.original_name,
            content_type=attachment.mimetype,
        )

    def destroy(self, request, *args, **kwargs):
        attachment = self.get_object()
        attachment_id = attachment.id

        # blob removal is best-effort; the row goes regardless
        try:
            attachment.file.delete(save=False)
        except OSError as e:
            logger.error(f"Error deleting file for attachment {attachment_id}: {str(e)}")

        attachment.delete()
        logger.info(f"Attachment {attachment_id} deleted by user {request.user.id}")

        return success_response(message='Attachment deleted successfully')
