from django.urls import path, include

urlpatterns = [
    path('api/', include([
        path('', include('accounts.api_urls')),
        path('', include('uploads.api_urls')),
    ])),
]
