"""
Client-side form validation.

Every check raises a ``ValidationError`` subclass whose message is the exact
banner text shown above the form. Only basic checks live here (required
fields, link format, file type and size); the backend remains authoritative.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any
from urllib.parse import urlparse

from foundation_console.config import get_settings
from foundation_console.exceptions import (
    InvalidFileError,
    InvalidURLError,
    MissingRequiredFieldError,
    ValidationError,
)

YOUTUBE_URL_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+")

YOUTUBE_URL_MESSAGE = (
    "Please provide a valid YouTube URL "
    "(e.g., https://www.youtube.com/watch?v=VIDEO_ID or https://youtu.be/VIDEO_ID)"
)

_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data: Mapping[str, Any], fields: Iterable[str], message: str) -> None:
    """
    Raises:
        MissingRequiredFieldError: listing every blank field, with ``message``.
    """
    missing = [name for name in fields if is_blank(data.get(name))]
    if missing:
        raise MissingRequiredFieldError(missing, message)


def is_valid_url(url: Any) -> bool:
    """True for absolute http(s) URLs with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_url(url: str, message: str, *, field: str | None = None) -> str:
    if not is_valid_url(url):
        raise InvalidURLError(url, message, field=field)
    return url.strip()


def validate_youtube_url(url: str, *, field: str = "youtubeUrl") -> str:
    candidate = (url or "").strip()
    if not YOUTUBE_URL_PATTERN.match(candidate):
        raise InvalidURLError(candidate, YOUTUBE_URL_MESSAGE, field=field)
    return candidate


# =============================================================================
# Uploaded files
# =============================================================================


def _file_name(uploaded: Any) -> str:
    return str(getattr(uploaded, "name", "") or "")


def is_image_file(uploaded: Any) -> bool:
    content_type = getattr(uploaded, "type", None) or ""
    if content_type:
        return content_type.startswith("image/")
    return _file_name(uploaded).lower().endswith(_IMAGE_EXTENSIONS)


def is_pdf_file(uploaded: Any) -> bool:
    content_type = getattr(uploaded, "type", None) or ""
    if content_type:
        return content_type == "application/pdf"
    return _file_name(uploaded).lower().endswith(".pdf")


def file_size(uploaded: Any) -> int:
    size = getattr(uploaded, "size", None)
    if size is not None:
        return int(size)
    return len(uploaded.getvalue())


def validate_image_file(uploaded: Any, message: str = "Please select an image file") -> Any:
    if uploaded is None or not is_image_file(uploaded):
        raise InvalidFileError(message, filename=_file_name(uploaded) or None)
    return uploaded


def validate_pdf_file(uploaded: Any, message: str = "Please upload a PDF file") -> Any:
    if uploaded is None or not is_pdf_file(uploaded):
        raise InvalidFileError(message, filename=_file_name(uploaded) or None)
    return uploaded


def validate_file_size(uploaded: Any, max_bytes: int, message: str) -> Any:
    if file_size(uploaded) > max_bytes:
        raise InvalidFileError(message, filename=_file_name(uploaded))
    return uploaded


def validate_image_batch(
    existing_count: int,
    new_files: Sequence[Any],
    max_count: int | None = None,
) -> list[Any]:
    """
    Check a batch of images being added to a scholarship.

    Non-image files reject the whole batch. The total after adding must stay
    within ``max_count`` (the configured scholarship image limit by default).
    """
    limit = get_settings().max_scholarship_images if max_count is None else max_count
    if any(not is_image_file(item) for item in new_files):
        raise InvalidFileError("Error: Only image files are supported.")
    total = existing_count + len(new_files)
    if total > limit:
        raise InvalidFileError(f"Maximum {limit} images allowed. You tried to add {total}.")
    return list(new_files)


def sanitize_year(value: Any) -> str:
    """Keep at most four digits, dropping anything else typed into a year box."""
    return re.sub(r"\D", "", str(value or ""))[:4]


# =============================================================================
# Passwords
# =============================================================================


def validate_new_password(
    current_password: str,
    new_password: str,
    confirm_password: str,
    min_length: int | None = None,
) -> None:
    minimum = get_settings().min_password_length if min_length is None else min_length
    if not current_password or not new_password or not confirm_password:
        raise MissingRequiredFieldError(
            [
                name
                for name, value in (
                    ("currentPassword", current_password),
                    ("newPassword", new_password),
                    ("confirmPassword", confirm_password),
                )
                if not value
            ],
            "Please fill in all fields",
        )
    if len(new_password) < minimum:
        raise ValidationError(f"New password must be at least {minimum} characters", field="newPassword")
    if new_password != confirm_password:
        raise ValidationError("New passwords do not match", field="confirmPassword")
    if current_password == new_password:
        raise ValidationError("New password must be different from current password", field="newPassword")


def validate_registration(password: str, confirm_password: str, min_length: int | None = None) -> None:
    minimum = get_settings().min_password_length if min_length is None else min_length
    if password != confirm_password:
        raise ValidationError("Passwords do not match", field="confirmPassword")
    if len(password or "") < minimum:
        raise ValidationError(f"Password must be at least {minimum} characters", field="password")
