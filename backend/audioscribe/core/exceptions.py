from typing import Any, Optional

from fastapi import HTTPException, status


class BaseAPIException(HTTPException):
    """Base API exception with status code, client-facing error and optional details"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str = "error",
        details: Optional[Any] = None,
        headers: dict = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.details = details

    def to_content(self) -> dict:
        content = {"error": self.detail}
        if self.details is not None:
            content["details"] = self.details
        return content


class ValidationError(BaseAPIException):
    """Exception for missing or malformed request input"""

    def __init__(self, detail: str = "Validation error", details: Optional[Any] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code="validation_error",
            details=details,
        )


class FileUploadError(ValidationError):
    """Exception for a missing or unacceptable uploaded file"""

    def __init__(self, detail: str = "No file uploaded"):
        super().__init__(detail=detail)
        self.code = "file_upload_error"


class AuthError(BaseAPIException):
    """Exception for invalid credentials

    The message is the same whether the email is unknown or the password
    is wrong.
    """

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email or password",
            code="invalid_credentials",
        )


class ConflictError(BaseAPIException):
    """Exception for a resource that already exists"""

    def __init__(self, detail: str = "User already exists"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code="conflict",
        )


class InternalError(BaseAPIException):
    """Exception for downstream failures, passing the provider message through"""

    def __init__(self, detail: str, details: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code="internal_error",
            details=details,
        )


class ExternalServiceError(Exception):
    """Error communicating with a hosted provider"""

    service = "external"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(ExternalServiceError):
    """Error reading or writing the credential/transcription store"""

    service = "store"


class StorageError(ExternalServiceError):
    """Error writing to blob storage"""

    service = "storage"


class TranscriptionError(ExternalServiceError):
    """Error transcribing audio"""

    service = "transcription"
