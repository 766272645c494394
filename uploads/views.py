# uploads/views.py

import logging

from django.http import FileResponse
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response

from filehub.errors import ServiceError, ValidationError
from filehub.exception_handler import error_response
from .blobstore import get_blob_store
from .serializers import StoredFileSerializer
from .services import ATTACHMENT, INLINE, FileService

logger = logging.getLogger(__name__)


class FileServiceMixin:
    """Builds the FileService with the configured blob store for each request."""

    def get_service(self) -> FileService:
        return FileService(blob_store=get_blob_store())


class FileUploadAPIView(FileServiceMixin, APIView):
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        file_obj = request.FILES.get('file')
        try:
            if file_obj is None:
                raise ValidationError("No file uploaded")
            logger.info(f"File received: {file_obj.name} ({file_obj.content_type}, {file_obj.size} bytes)")
            new_file = self.get_service().ingest(
                stream=file_obj,
                original_name=file_obj.name,
                content_type=file_obj.content_type,
                size=file_obj.size,
            )
        except ServiceError as e:
            logger.info(f"Upload rejected ({e.code}): {e}")
            return error_response(e)

        return Response(
            {"message": "File uploaded successfully", "file": StoredFileSerializer(new_file).data},
            status=status.HTTP_201_CREATED,
        )


class FileListAPIView(FileServiceMixin, APIView):
    def get(self, request):
        files = self.get_service().list_files()
        return Response(StoredFileSerializer(files, many=True).data)


class FileDetailAPIView(FileServiceMixin, APIView):
    def get(self, request, file_id):
        try:
            instance = self.get_service().get_file(file_id)
        except ServiceError as e:
            return error_response(e)
        return Response(StoredFileSerializer(instance).data)

    def delete(self, request, file_id):
        try:
            self.get_service().delete(file_id)
        except ServiceError as e:
            return error_response(e)
        return Response({"message": "File deleted successfully."}, status=status.HTTP_200_OK)


class FileServeAPIView(FileServiceMixin, APIView):
    """Streams the stored bytes. `disposition` decides inline display vs. download."""
    disposition = INLINE

    def get(self, request, storage_key):
        try:
            resolved = self.get_service().resolve(storage_key, disposition=self.disposition)
        except ServiceError as e:
            return error_response(e)

        response = FileResponse(resolved.stream, content_type=resolved.content_type)
        response['Content-Disposition'] = resolved.content_disposition
        return response


class FileDownloadAPIView(FileServeAPIView):
    disposition = ATTACHMENT
