import os
import uuid

from django.conf import settings
from django.db import models


def attachment_upload_to(instance, filename):
    """Store blobs under a random name, keeping only the extension."""
    ext = os.path.splitext(filename)[1].lower()
    return f"attachments/{uuid.uuid4().hex}{ext}"


class Attachment(models.Model):
    filename = models.CharField(max_length=255)
    original_name = models.CharField(max_length=255)
    mimetype = models.CharField(max_length=100)
    size = models.PositiveBigIntegerField()
    file = models.FileField(upload_to=attachment_upload_to, max_length=500)
    # no cascade: deleting a task leaves its attachments in place
    task = models.ForeignKey(
        'task.Task',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='attachments',
    )
    uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='attachments')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.original_name

    class Meta:
        ordering = ['-created_at']

    @property
    def path(self):
        return self.file.name
