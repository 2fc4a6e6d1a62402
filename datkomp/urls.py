from django.contrib import admin
from django.urls import path, re_path, include
from django.conf import settings
from django.conf.urls.static import static

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="DatKomp Store API",
        default_version='v1',
        description="API documentation for the DatKomp computer hardware store and admin panel",
        contact=openapi.Contact(email="support@datkomp.lv"),
        license=openapi.License(name="BSD License"),
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)


admin_panel_patterns = [
    path('', include('authentication.urls_admin')),
    path('', include('store.urls_admin')),
    path('', include('transactions.urls_admin')),
    path('', include('contact.urls_admin')),
]

urlpatterns = [
    # Django admin site
    path('django-admin/', admin.site.urls),

    # App URLs
    path('api/auth/', include('authentication.urls')),
    path('api/store/', include('store.urls')),
    path('api/transactions/', include('transactions.urls')),
    path('api/contact/', include('contact.urls')),

    # Back-office panel
    path('api/admin/', include((admin_panel_patterns, 'dashboard'))),

    # Swagger
    re_path(r'^swagger(?P<format>\.json|\.yaml)$', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
] + static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
