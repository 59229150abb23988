"""
Root URL configuration.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView
from apps.accounts.jwt import LoginView

urlpatterns = [
    path('admin/', admin.site.urls),

    # Authentication
    path('api/auth/login/', LoginView.as_view(), name='jwt_login'),
    path('api/auth/refresh/', TokenRefreshView.as_view(), name='jwt_refresh'),

    # Apps
    path('api/accounts/', include('apps.accounts.urls')),
    path('api/direct-messages/', include('apps.direct_messages.urls')),

    # API documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
