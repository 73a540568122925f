"""Validators for credentials and uploads."""

from .credentials import (
    PasswordValidationResult,
    validate_email,
    validate_password,
    validate_username,
)
from .uploads import UploadValidationError, validate_upload, validate_upload_batch

__all__ = [
    "PasswordValidationResult",
    "validate_email",
    "validate_password",
    "validate_username",
    "UploadValidationError",
    "validate_upload",
    "validate_upload_batch",
]
