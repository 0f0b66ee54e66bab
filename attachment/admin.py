from django.contrib import admin

from .models import Attachment


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    list_display = ('original_name', 'mimetype', 'size', 'task_id', 'uploaded_by', 'created_at')
    search_fields = ('original_name', 'filename', 'uploaded_by__email')
    list_filter = ('mimetype',)
    readonly_fields = ('filename', 'size', 'mimetype', 'created_at')
