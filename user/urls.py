from django.urls import path
from .adapters.viewsets import auth_viewset

urlpatterns = [
    # public
    path('register/', auth_viewset.AuthViewSet.as_view({'post': 'register'}), name='register'),
    path('login/', auth_viewset.AuthViewSet.as_view({'post': 'login'}), name='login'),

    # caller's own account
    path('me/', auth_viewset.AccountViewSet.as_view({'get': 'me'}), name='me'),
    path('profile/', auth_viewset.AccountViewSet.as_view({'put': 'update_profile', 'patch': 'update_profile'}), name='update_profile'),
    path('password/', auth_viewset.AccountViewSet.as_view({'put': 'update_password'}), name='update_password'),
    path('logout/', auth_viewset.AccountViewSet.as_view({'post': 'logout'}), name='logout'),
]
