from django.urls import path
from .views import (
    FileUploadAPIView,
    FileListAPIView,
    FileDetailAPIView,
    FileServeAPIView,
    FileDownloadAPIView,
)

urlpatterns = [
    path('upload', FileUploadAPIView.as_view(), name='file-upload'),
    path('files', FileListAPIView.as_view(), name='file-list'),
    path('files/<str:file_id>', FileDetailAPIView.as_view(), name='file-detail'),
    path('uploads/<str:storage_key>', FileServeAPIView.as_view(), name='file-serve'),
    path('download/<str:storage_key>', FileDownloadAPIView.as_view(), name='file-download'),
]
