from django.urls import path
from .api_views import UserRegistrationView, LoginView

urlpatterns = [
    path('signin', UserRegistrationView.as_view(), name='user-signin'),
    path('signup', UserRegistrationView.as_view(), name='user-signup'),
    path('login', LoginView.as_view(), name='user-login'),
]
