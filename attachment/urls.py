from django.urls import path
from attachment.adapters.viewset.attachment_viewset import AttachmentViewSet

urlpatterns = [
    path(
        'tasks/<int:task_id>/attachments/',
        AttachmentViewSet.as_view({'get': 'list', 'post': 'create'}),
        name='task-attachments',
    ),
    path(
        'attachments/<int:pk>/',
        AttachmentViewSet.as_view({'delete': 'destroy'}),
        name='attachment-detail',
    ),
    path(
        'attachments/<int:pk>/download/',
        AttachmentViewSet.as_view({'get': 'download'}),
        name='attachment-download',
    ),
]
