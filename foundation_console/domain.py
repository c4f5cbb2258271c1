from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import quote

from foundation_console.assets import resolve_asset_url

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def ref_id(value: Any) -> Any:
    """Return the id of a reference that may or may not be populated.

    The backend returns either ``"abc123"`` or ``{"_id": "abc123", ...}`` for
    the same field depending on the endpoint.
    """
    if isinstance(value, Mapping):
        return value.get("_id")
    return value


def ref_name(value: Any, default: str = "") -> str:
    if isinstance(value, Mapping):
        return str(value.get("name") or default)
    return default


def avatar_url(user: Mapping[str, Any] | None) -> str:
    """Profile picture URL, or a generated initials avatar in the primary colour."""
    user = user or {}
    picture = resolve_asset_url(user.get("profilePicture"))
    if picture:
        return picture
    name = quote(str(user.get("name") or "User"))
    return f"https://ui-avatars.com/api/?name={name}&background=1a237e&color=fff&size=200"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a backend timestamp into an aware datetime.

    Date-only strings are taken as UTC midnight; naive date-times as local
    time. Returns ``None`` for blanks and anything unparseable.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.astimezone()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if len(text) == 10:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed if parsed.tzinfo else parsed.astimezone()


# =============================================================================
# Scholarships
# =============================================================================


def is_deadline_passed(deadline: Any, now: datetime | None = None) -> bool:
    moment = parse_timestamp(deadline)
    if moment is None:
        return False
    return moment < (now or datetime.now(timezone.utc))


def sort_scholarships(scholarships: Iterable[Mapping[str, Any]], now: datetime | None = None) -> list:
    """Open listings first, then earliest deadline first.

    Listings without a deadline never close and sort after dated ones.
    """
    current = now or datetime.now(timezone.utc)

    def key(item: Mapping[str, Any]) -> tuple[bool, datetime]:
        deadline = parse_timestamp(item.get("deadline"))
        return is_deadline_passed(item.get("deadline"), current), deadline or _FAR_FUTURE

    return sorted(scholarships, key=key)


def filter_scholarships(scholarships: Iterable[Mapping[str, Any]], term: str) -> list:
    query = (term or "").strip().lower()
    items = list(scholarships)
    if not query:
        return items
    return [
        item
        for item in items
        if any(query in str(item.get(field) or "").lower() for field in ("organizationName", "location", "description"))
    ]


def format_deadline(deadline: Any) -> str:
    """Format a deadline as e.g. ``Jan 15, 2025``; ``No Deadline`` when unset."""
    moment = parse_timestamp(deadline)
    if moment is None:
        return "No Deadline"
    return f"{moment:%b} {moment.day}, {moment.year}"


def scholarship_images(scholarship: Mapping[str, Any]) -> list[str]:
    """Resolved URLs for every stored image of a listing."""
    urls = (resolve_asset_url(image) for image in scholarship.get("images") or [])
    return [url for url in urls if url]


# =============================================================================
# Library
# =============================================================================


def book_category(book: Mapping[str, Any]) -> str:
    return book.get("category") or "General"


def library_categories(books: Iterable[Mapping[str, Any]]) -> list[str]:
    seen = dict.fromkeys(book_category(book) for book in books)
    return ["All", *seen]


def filter_books(books: Iterable[Mapping[str, Any]], category: str = "All", search: str = "") -> list:
    query = (search or "").strip().lower()
    result = []
    for book in books:
        if category != "All" and book_category(book) != category:
            continue
        if query and not any(
            query in str(book.get(field) or "").lower() for field in ("title", "author", "description")
        ):
            continue
        result.append(book)
    return result


# =============================================================================
# Academic structure
# =============================================================================


def departments_for_school(departments: Iterable[Mapping[str, Any]], school_id: str | None) -> list:
    """Departments belonging to ``school_id``; none until a school is chosen."""
    if not school_id:
        return []
    return [dept for dept in departments if str(ref_id(dept.get("school"))) == str(school_id)]


def build_chapter_tree(chapters: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Nest sub-chapters under their parent, both levels ordered by ``order``.

    Chapters the backend already returned with ``subChapters`` keep them;
    flat lists are grouped by ``parentChapter``. Orphans whose parent is not
    in the list are shown at the top level.
    """
    items = [dict(chapter) for chapter in chapters]
    ids = {chapter.get("_id") for chapter in items}
    children: dict[Any, list[dict[str, Any]]] = {}
    roots: list[dict[str, Any]] = []

    for chapter in items:
        parent = ref_id(chapter.get("parentChapter"))
        if parent and parent in ids:
            children.setdefault(parent, []).append(chapter)
        else:
            roots.append(chapter)

    def by_order(chapter: Mapping[str, Any]) -> int:
        return int(chapter.get("order") or 0)

    for chapter in roots:
        nested = chapter.get("subChapters") or children.get(chapter.get("_id"), [])
        chapter["subChapters"] = sorted(nested, key=by_order)
    return sorted(roots, key=by_order)


# =============================================================================
# Dates for editors
# =============================================================================


def format_datetime_local(value: Any) -> str:
    """Render a timestamp for a local ``YYYY-MM-DDTHH:MM`` input."""
    moment = parse_timestamp(value)
    if moment is None:
        return ""
    return moment.astimezone().strftime("%Y-%m-%dT%H:%M")


def format_readable_date(value: Any) -> str:
    moment = parse_timestamp(value)
    if moment is None:
        return "Not scheduled"
    return moment.astimezone().strftime("%b %d, %Y %H:%M")


def to_datetime_local(value: Any) -> str:
    """UTC ``YYYY-MM-DDTHH:MM`` for the contest editor (blank when unset)."""
    moment = parse_timestamp(value)
    if moment is None:
        return ""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M")


def live_session_actions(status: str | None) -> dict[str, bool]:
    """Which of start/end are enabled for a live session in ``status``."""
    return {"start": status != "live", "end": status != "ended"}


# =============================================================================
# Notifications
# =============================================================================


def notification_media(notification: Mapping[str, Any]) -> tuple[str | None, str | None]:
    """Return ``(kind, url)`` preferring the thumbnail over the video."""
    for kind in ("thumbnail", "video"):
        media = notification.get(kind)
        if isinstance(media, Mapping) and media.get("url"):
            return kind, resolve_asset_url(media["url"])
    return None, None
