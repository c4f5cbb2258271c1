"""
Pydantic models for every admin and account form.

Each model normalises raw widget values, enforces the form's rules in an
``after`` model validator and builds the request body with ``to_payload()``.
Rule failures are raised as ``PydanticCustomError("form_error", ...)`` so the
first error message is exactly the banner text; ``parse_form`` converts a
pydantic failure into the console's own ``ValidationError``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from foundation_console.config import get_settings
from foundation_console.exceptions import ValidationError
from foundation_console.validation import (
    is_blank,
    is_image_file,
    is_pdf_file,
    file_size,
    sanitize_year,
    validate_image_batch,
    validate_new_password,
    validate_registration,
    validate_url,
    validate_youtube_url,
)

FormT = TypeVar("FormT", bound="BaseForm")


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("form_error", message)


@contextmanager
def _form_rules() -> Iterator[None]:
    """Re-raise console validation errors in a form pydantic reports."""
    try:
        yield
    except ValidationError as exc:
        raise _fail(exc.message) from exc


def _check_datetime(value: str, message: str) -> None:
    """Blank is allowed; anything else must be an ISO date or datetime."""
    if not value:
        return
    try:
        datetime.fromisoformat(value)
    except ValueError:
        raise _fail(message) from None


def _optional(payload: dict[str, Any], key: str, value: Any) -> None:
    if not is_blank(value):
        payload[key] = value


class BaseForm(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_unset(cls, data: Any) -> Any:
        # Empty widgets report None; fall back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def _require(self, *fields: str, message: str) -> None:
        if any(is_blank(getattr(self, name)) for name in fields):
            raise _fail(message)


def parse_form(model: type[FormT], data: Mapping[str, Any]) -> FormT:
    """
    Validate ``data`` against ``model``.

    Raises:
        ValidationError: carrying the first rule message.
    """
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else None
        raise ValidationError(first["msg"], field=field) from exc


# =============================================================================
# Academic structure
# =============================================================================


class SchoolForm(BaseForm):
    name: str = ""
    description: str = ""
    location: str = ""

    @model_validator(mode="after")
    def _check(self) -> SchoolForm:
        self._require("name", message="School name is required")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "location": self.location}


class DepartmentForm(BaseForm):
    name: str = ""
    description: str = ""
    school: str = ""

    @model_validator(mode="after")
    def _check(self) -> DepartmentForm:
        self._require("name", "school", message="Department name and school are required")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "school": self.school}


class CourseForm(BaseForm):
    title: str = ""
    code: str = ""
    description: str = ""
    level: str = ""
    department: str = ""
    instructor: str = ""
    thumbnail: Any = None

    @model_validator(mode="after")
    def _check(self) -> CourseForm:
        self._require("title", "department", message="Course title and department are required")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "code": self.code,
            "description": self.description,
            "level": self.level,
            "department": self.department,
            "instructor": self.instructor,
        }


class ChapterForm(BaseForm):
    """Course or skill chapter; ``owner_field`` names the parent reference."""

    owner_field: Literal["course", "skill"] = "course"
    owner_id: str
    title: str = ""
    description: str = ""
    order: int = 0
    youtube_url: str = ""
    parent_chapter: str | None = None

    @field_validator("order", mode="before")
    @classmethod
    def _coerce_order(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @model_validator(mode="after")
    def _check(self) -> ChapterForm:
        self._require("title", message="Chapter title is required")
        if self.youtube_url:
            with _form_rules():
                validate_youtube_url(self.youtube_url)
        return self

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            self.owner_field: self.owner_id,
            "title": self.title,
            "description": self.description,
            "order": self.order,
            "youtubeUrl": self.youtube_url or None,
        }
        if self.parent_chapter:
            payload["parentChapter"] = self.parent_chapter
        return payload


class SkillForm(BaseForm):
    name: str = ""
    category: str = ""
    description: str = ""
    thumbnail: Any = None

    @model_validator(mode="after")
    def _check(self) -> SkillForm:
        self._require("name", message="Skill name is required")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "category": self.category, "description": self.description}


# =============================================================================
# Documents
# =============================================================================


class ConcoursForm(BaseForm):
    title: str = ""
    year: str = ""
    department: str = ""
    description: str = ""
    pdf: Any = None
    is_edit: bool = False

    @field_validator("year", mode="before")
    @classmethod
    def _clean_year(cls, value: Any) -> str:
        return sanitize_year(value)

    @model_validator(mode="after")
    def _check(self) -> ConcoursForm:
        self._require("title", "year", "department", message="Please fill in all required fields.")
        if not self.is_edit and self.pdf is None:
            raise _fail("Please upload a PDF file for the concours.")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "year": self.year,
            "department": self.department,
            "description": self.description,
        }


class LibraryBookForm(BaseForm):
    title: str = ""
    author: str = ""
    category: str = ""
    description: str = ""
    published_date: str = ""
    pdf: Any = None
    is_edit: bool = False

    @field_validator("published_date", mode="before")
    @classmethod
    def _date_to_str(cls, value: Any) -> str:
        if isinstance(value, date):
            return value.isoformat()
        return value or ""

    @model_validator(mode="after")
    def _check(self) -> LibraryBookForm:
        self._require("title", message="Title is required.")
        if not self.is_edit and self.pdf is None:
            raise _fail("Please upload a PDF file for the book.")
        return self

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title}
        _optional(payload, "author", self.author)
        _optional(payload, "category", self.category)
        _optional(payload, "description", self.description)
        _optional(payload, "publishedDate", self.published_date)
        return payload


class QuestionForm(BaseForm):
    school: str = ""
    department: str = ""
    level: str = ""
    subject: str = ""
    year: str = ""
    pdf: Any = None

    @field_validator("year", mode="before")
    @classmethod
    def _clean_year(cls, value: Any) -> str:
        return sanitize_year(value)

    @model_validator(mode="after")
    def _check(self) -> QuestionForm:
        self._require("school", "department", "level", "subject", "year", message="Please fill in all fields")
        if self.pdf is None or not is_pdf_file(self.pdf):
            raise _fail("Please select a PDF file")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {
            "school": self.school,
            "department": self.department,
            "level": self.level,
            "subject": self.subject,
            "year": self.year,
        }


class SolutionForm(BaseForm):
    question_id: str = ""
    youtube_url: str = ""
    pdf: Any = None

    @model_validator(mode="after")
    def _check(self) -> SolutionForm:
        self._require("question_id", message="Please select a question")
        if not self.youtube_url and self.pdf is None:
            raise _fail("Please provide either a YouTube URL or a PDF file (or both)")
        if self.pdf is not None and not is_pdf_file(self.pdf):
            raise _fail("Please select a PDF file")
        return self

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"questionId": self.question_id}
        _optional(payload, "youtubeUrl", self.youtube_url)
        return payload


# =============================================================================
# Live sessions, contests, notifications
# =============================================================================


def local_to_iso(value: str | datetime) -> str:
    """
    Convert a local ``YYYY-MM-DDTHH:MM`` value to an ISO-8601 UTC timestamp.

    Naive values are interpreted in the machine's local time zone.
    """
    moment = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class LiveSessionForm(BaseForm):
    department: str = ""
    course_title: str = ""
    course_code: str = ""
    description: str = ""
    lecturer: str = ""
    youtube_url: str = ""
    scheduled_at: str = ""

    @field_validator("scheduled_at", mode="before")
    @classmethod
    def _datetime_to_str(cls, value: Any) -> str:
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%dT%H:%M")
        return value or ""

    @model_validator(mode="after")
    def _check(self) -> LiveSessionForm:
        _check_datetime(self.scheduled_at, "Please provide a valid schedule date and time")
        return self

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "department": self.department,
            "courseTitle": self.course_title,
            "courseCode": self.course_code,
            "description": self.description,
            "lecturer": self.lecturer,
            "youtubeUrl": self.youtube_url,
        }
        if self.scheduled_at:
            payload["scheduledAt"] = local_to_iso(self.scheduled_at)
        return payload


class ContestForm(BaseForm):
    name: str = ""
    description: str = ""
    start_at: str = ""
    end_at: str = ""
    is_active: bool = True
    voting_restriction: Literal["all", "school", "department"] = "all"
    restricted_school: str = ""
    restricted_department: str = ""

    @model_validator(mode="after")
    def _check(self) -> ContestForm:
        self._require("name", message="Contest name is required")
        _check_datetime(self.start_at, "Please provide a valid start date and time (YYYY-MM-DDTHH:MM)")
        _check_datetime(self.end_at, "Please provide a valid end date and time (YYYY-MM-DDTHH:MM)")
        return self

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "startAt": self.start_at or None,
            "endAt": self.end_at or None,
            "isActive": self.is_active,
            "votingRestriction": self.voting_restriction,
        }
        if self.voting_restriction == "school" and self.restricted_school:
            payload["restrictedSchool"] = self.restricted_school
        if self.voting_restriction == "department" and self.restricted_department:
            payload["restrictedDepartment"] = self.restricted_department
        return payload


class ContestantForm(BaseForm):
    name: str = ""
    bio: str = ""
    image: Any = None

    @model_validator(mode="after")
    def _check(self) -> ContestantForm:
        self._require("name", message="Contestant name is required")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "bio": self.bio}


class NotificationForm(BaseForm):
    title: str = ""
    description: str = ""
    media_type: Literal["thumbnail", "video"] = "thumbnail"
    media: Any = None
    is_edit: bool = False

    @model_validator(mode="after")
    def _check(self) -> NotificationForm:
        self._require("title", "description", message="Please fill in all required fields")
        if not self.is_edit and self.media is None:
            raise _fail("Please select a thumbnail image or video")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "mediaType": self.media_type}


# =============================================================================
# Opportunities
# =============================================================================


class ScholarshipForm(BaseForm):
    organization_name: str = ""
    description: str = ""
    location: str = ""
    website_link: str = ""
    deadline: str = ""
    images: list[Any] = Field(default_factory=list)
    existing_image_count: int = 0

    @field_validator("deadline", mode="before")
    @classmethod
    def _deadline_to_str(cls, value: Any) -> str:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        return value or ""

    @model_validator(mode="after")
    def _check(self) -> ScholarshipForm:
        self._require(
            "organization_name",
            "description",
            "location",
            "website_link",
            "deadline",
            message="Please fill in all required fields, including the deadline.",
        )
        if self.existing_image_count + len(self.images) == 0:
            raise _fail("Please select at least one image.")
        with _form_rules():
            validate_url(
                self.website_link,
                "Please provide a valid website URL (must include http:// or https://).",
                field="website_link",
            )
            if self.images:
                validate_image_batch(self.existing_image_count, self.images)
        return self

    def to_payload(self) -> dict[str, Any]:
        return {
            "organizationName": self.organization_name,
            "description": self.description,
            "location": self.location,
            "websiteLink": self.website_link,
            "deadline": self.deadline,
        }


class InternshipForm(BaseForm):
    title: str = ""
    company: str = ""
    location: str = ""
    duration: str = ""
    description: str = ""
    application_link: str = ""
    image: Any = None

    @model_validator(mode="after")
    def _check(self) -> InternshipForm:
        self._require(
            "title",
            "company",
            "location",
            "duration",
            "description",
            "application_link",
            message="Please fill in all fields",
        )
        with _form_rules():
            validate_url(
                self.application_link,
                "Please provide a valid application URL (starting with http:// or https://)",
                field="application_link",
            )
        if self.image is not None and not is_image_file(self.image):
            raise _fail("Please select an image file")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "duration": self.duration,
            "description": self.description,
            "applicationLink": self.application_link,
        }


# =============================================================================
# Account
# =============================================================================


class ProfileForm(BaseForm):
    name: str = ""
    school: str = ""
    department: str = ""
    level: str = ""
    image: Any = None

    @model_validator(mode="after")
    def _check(self) -> ProfileForm:
        self._require("name", message="Name is required")
        if self.image is not None:
            if not is_image_file(self.image):
                raise _fail("Please select an image file")
            if file_size(self.image) > get_settings().max_profile_image_bytes:
                raise _fail("Image size must be less than 5MB")
        return self

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "school": self.school,
            "department": self.department,
            "level": self.level,
        }


class PasswordChangeForm(BaseForm):
    # Passwords are compared verbatim
    model_config = ConfigDict(str_strip_whitespace=False, extra="ignore")

    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""

    @model_validator(mode="after")
    def _check(self) -> PasswordChangeForm:
        with _form_rules():
            validate_new_password(self.current_password, self.new_password, self.confirm_password)
        return self


class RegistrationForm(BaseForm):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    @model_validator(mode="after")
    def _check(self) -> RegistrationForm:
        self._require("name", "email", "password", message="Please fill in all fields")
        with _form_rules():
            validate_registration(self.password, self.confirm_password)
        return self

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "password": self.password}


class LoginForm(BaseForm):
    email: str = ""
    password: str = ""

    @model_validator(mode="after")
    def _check(self) -> LoginForm:
        self._require("email", "password", message="Please enter your email and password")
        return self
