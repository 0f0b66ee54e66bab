from django.contrib import admin

from .models import Comment


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ('task_id', 'author', 'created_at', 'updated_at')
    search_fields = ('content', 'author__email')
    list_filter = ('created_at',)
