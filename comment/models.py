from django.conf import settings
from django.db import models


class Comment(models.Model):
    content = models.TextField()
    # no cascade: deleting a task leaves its comments in place
    task = models.ForeignKey(
        'task.Task',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='comments',
    )
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='comments')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Comment by {self.author} on task {self.task_id}"

    class Meta:
        ordering = ['-created_at']
