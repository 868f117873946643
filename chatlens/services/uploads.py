from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from chatlens.core.config import get_settings

CHUNK_SIZE = 1024 * 1024


def validate_extension(filename: str | None) -> str:
    settings = get_settings()
    ext = Path(filename or "").suffix.lower()
    if ext not in settings.allowed_extensions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload a .txt file exported from your chat app.",
        )
    return ext


async def read_upload_text(file: UploadFile) -> str:
    """Read an uploaded export into memory and decode it; nothing touches disk."""
    settings = get_settings()
    validate_extension(file.filename)

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    chunks: list[bytes] = []
    total = 0
    try:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            if total > max_bytes:
                raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File exceeds max size")
            chunks.append(chunk)
    finally:
        await file.close()

    if total == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The file appears to be empty.")
    return b"".join(chunks).decode("utf-8-sig", errors="replace")
