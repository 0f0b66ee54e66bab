from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from .models import Task


@admin.register(Task)
class TaskAdmin(SummernoteModelAdmin):
    list_display = ('title', 'status', 'priority', 'due_date', 'created_by', 'assigned_to', 'team')
    list_filter = ('status', 'priority', 'team')
    search_fields = ('title', 'description')
    readonly_fields = ('created_at', 'updated_at', 'completed_at')
    summernote_fields = ('description',)
