"""Resume upload endpoints."""

import asyncio
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..config import settings
from ..core import TextExtractionError, extract_text
from ..middleware import get_current_user_id
from ..models import ResumeInfo, ResumeListResponse, UploadedFileInfo, UploadResponse
from ..storage import Database, get_db
from ..storage.files import save_upload
from ..validators import UploadValidationError, validate_upload, validate_upload_batch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post(
    "",
    response_model=UploadResponse,
    summary="Upload a resume",
    description="""
Upload one resume document (PDF/DOCX/DOC) and/or a few images.

Text is extracted from documents where possible. Files whose text cannot be
extracted are still stored; analyze them by sending `resume_text` instead.
""",
)
async def upload_files(
    files: list[UploadFile] = File(...),
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> UploadResponse:
    """Store uploaded resume files."""
    try:
        validate_upload_batch([f.content_type for f in files], settings.max_images)

        contents = []
        for file in files:
            content = await file.read()
            validate_upload(file.content_type, len(content), settings.max_file_size_mb)
            contents.append(content)
    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        uploaded = []
        extracted_parts = []

        for file, content in zip(files, contents):
            file_path, stored_name = await save_upload(
                settings.upload_dir, user_id, file.filename or "upload", content
            )

            extracted = ""
            try:
                extracted = await asyncio.to_thread(extract_text, content, file.content_type)
            except TextExtractionError as e:
                logger.warning(f"Text extraction failed for {stored_name}: {e}")
            if extracted:
                extracted_parts.append(extracted)

            resume = await db.create_resume(
                user_id=user_id,
                file_name=stored_name,
                file_type=file.content_type or "",
                file_path=file_path,
                file_size=len(content),
                extracted_text=extracted or None,
            )
            uploaded.append(
                UploadedFileInfo(
                    id=resume["resume_id"],
                    file_name=resume["file_name"],
                    file_type=resume["file_type"],
                    file_size=resume["file_size"],
                    has_extracted_text=bool(extracted),
                )
            )

        logger.info(f"User {user_id} uploaded {len(uploaded)} file(s)")
        return UploadResponse(
            message="Files uploaded successfully",
            files=uploaded,
            extracted_text="\n\n".join(extracted_parts) or None,
        )

    except Exception as e:
        logger.error(f"Upload error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=ResumeListResponse)
async def list_resumes(
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> ResumeListResponse:
    """List the caller's uploaded resumes, newest first."""
    try:
        rows = await db.list_resumes(user_id)
        return ResumeListResponse(
            resumes=[
                ResumeInfo(
                    id=row["resume_id"],
                    file_name=row["file_name"],
                    file_type=row["file_type"],
                    file_size=row["file_size"],
                    created_at=row["created_at"],
                )
                for row in rows
            ]
        )
    except Exception as e:
        logger.error(f"Get resumes error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
