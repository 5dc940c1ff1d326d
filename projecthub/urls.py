from django.contrib import admin
from django.urls import path, include
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="ProjectHub API",
        default_version='v1',
        description="Projects, hackathons, their teams and per-user reports.",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
    path('api/v1/accounts/', include('accounts.urls')),
    path('api/v1/reports/', include('reports.urls')),
    path('api/v1/', include('project.urls')),
    path('api/v1/', include('hackathon.urls')),
]
