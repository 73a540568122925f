"""Upload validation rules."""

DOCUMENT_TYPES = {
    "application/pdf": ".pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "application/msword": ".doc",
}

IMAGE_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/webp": ".webp",
}

ALLOWED_FILE_TYPES = {**DOCUMENT_TYPES, **IMAGE_TYPES}


class UploadValidationError(ValueError):
    """Raised when an upload violates size, type or count limits."""

    pass


def is_document(content_type: str | None) -> bool:
    return content_type in DOCUMENT_TYPES


def is_image(content_type: str | None) -> bool:
    return content_type in IMAGE_TYPES


def validate_upload(content_type: str | None, size: int, max_size_mb: int) -> None:
    """
    Validate a single uploaded file.

    Raises UploadValidationError if invalid.
    """
    if size > max_size_mb * 1024 * 1024:
        raise UploadValidationError(f"File size exceeds maximum of {max_size_mb}MB")

    if content_type not in ALLOWED_FILE_TYPES:
        raise UploadValidationError(
            f"File type {content_type} is not allowed. Allowed types: PDF, DOCX, PNG, JPG, WEBP"
        )


def validate_upload_batch(content_types: list[str | None], max_images: int) -> None:
    """
    Validate the mix of files in one upload request.

    Raises UploadValidationError if invalid.
    """
    if not content_types:
        raise UploadValidationError("No files provided")

    if sum(1 for ct in content_types if is_document(ct)) > 1:
        raise UploadValidationError("Only one document file (PDF/Word) is allowed at a time")

    if sum(1 for ct in content_types if is_image(ct)) > max_images:
        raise UploadValidationError(f"Maximum {max_images} images allowed")
