# filehub/errors.py

from django.core.exceptions import ImproperlyConfigured


class ServiceError(Exception):
    """
    Base class for every error the pipelines raise on purpose.

    `code` is the discriminant clients and views branch on; `status_code` is
    the HTTP status the request boundary answers with.
    """
    code = "service_error"
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"message": self.message, "error": self.code}


class ValidationError(ServiceError):
    code = "validation_error"
    status_code = 400
    default_message = "Invalid input."


class ConflictError(ServiceError):
    code = "conflict"
    status_code = 400
    default_message = "Resource already exists."


class NotFoundError(ServiceError):
    code = "not_found"
    status_code = 404
    default_message = "Not found."

    def __init__(self, message=None, consistency_fault=False):
        super().__init__(message)
        # True when the catalog has a record but the blob store has no bytes.
        self.consistency_fault = consistency_fault


class AuthenticationError(ServiceError):
    code = "authentication_failed"
    status_code = 400
    default_message = "Invalid credentials."


class StorageFault(ServiceError):
    code = "storage_fault"
    status_code = 500
    default_message = "Storage backend unavailable."


class PartialDeleteError(ServiceError):
    code = "partial_delete"
    status_code = 500
    default_message = "File was only partially deleted."

    def __init__(self, message=None, *, file_id=None, storage_key=None):
        super().__init__(message)
        self.file_id = file_id
        self.storage_key = storage_key

    def to_dict(self):
        body = super().to_dict()
        body.update({
            "reconcile": True,
            "file_id": str(self.file_id) if self.file_id else None,
            "storage_key": self.storage_key,
        })
        return body


class StartupFault(ImproperlyConfigured):
    """Required configuration is missing; raised before the server accepts connections."""
