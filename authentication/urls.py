from django.urls import path
from authentication.auth.views import (
    UserRegistrationView,
    UserLoginView,
    TokenRefreshView,
    LogoutView,
    MeView,
)

urlpatterns = [
    path('register/', UserRegistrationView.as_view(), name='register'),
    path('login/', UserLoginView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('me/', MeView.as_view(), name='me'),
]
