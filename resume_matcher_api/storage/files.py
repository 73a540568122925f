"""On-disk storage of uploaded files."""

import asyncio
import logging
import re
import time
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_file_name(file_name: str) -> str:
    """Replace anything outside [a-zA-Z0-9.-] with underscores."""
    return _UNSAFE_CHARS.sub("_", file_name)


async def save_upload(upload_dir: Path, user_id: str, file_name: str, content: bytes) -> tuple[str, str]:
    """Write an upload under upload_dir/<user_id>/ as <ms>-<random>-<sanitized name>.

    Returns:
        Tuple of (file_path, stored_file_name)
    """
    user_dir = upload_dir / user_id
    user_dir.mkdir(parents=True, exist_ok=True)

    # Unique even for same-named files written in the same millisecond
    stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitize_file_name(file_name)}"
    file_path = user_dir / stored_name
    await asyncio.to_thread(file_path.write_bytes, content)

    logger.debug(f"Saved upload {stored_name} for user {user_id}")
    return str(file_path), stored_name
