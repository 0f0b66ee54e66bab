from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


def health(request):
    return JsonResponse({
        'success': True,
        'message': 'Task Tracker API is running',
        'version': '1.0.0',
    })


urlpatterns = [
    path('', health, name='health'),
    path('admin/', admin.site.urls),
    path('summernote/', include('django_summernote.urls')),

    path('api/auth/', include('user.urls')),
    path('api/', include('comment.urls')),
    path('api/', include('attachment.urls')),
    path('api/', include('task.urls')),
    path('api/', include('team.urls')),

    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
