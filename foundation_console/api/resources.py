"""
Endpoint groups for the foundation backend.

Each group mirrors one backend router and returns the decoded JSON envelope
(``{"success": ..., "data": ..., "message": ...}``) untouched; pages decide
what to do with it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from foundation_console.api.client import ApiClient, multipart_parts, upload_file
from foundation_console.config import get_settings
from foundation_console.exceptions import APIError, DuplicateVoteError


class _Endpoint:
    def __init__(self, client: ApiClient) -> None:
        self._client = client


class AuthAPI(_Endpoint):
    def register(self, user_data: Mapping[str, Any]) -> dict[str, Any]:
        body = {**user_data, "source": get_settings().registration_source}
        return self._client.post("/auth/register", json=body)

    def login(self, email: str, password: str) -> dict[str, Any]:
        body = {"email": email, "password": password, "source": get_settings().registration_source}
        return self._client.post("/auth/login", json=body)

    def get_me(self) -> dict[str, Any]:
        return self._client.get("/auth/me")

    def get_profile(self) -> dict[str, Any]:
        return self._client.get("/auth/profile")

    def update_profile(self, fields: Mapping[str, Any], image: Any = None) -> dict[str, Any]:
        files = [upload_file("image", image)] if image is not None else []
        return self._client.put("/auth/profile", files=multipart_parts(fields, files))

    def update_password(self, current_password: str, new_password: str) -> dict[str, Any]:
        return self._client.put(
            "/auth/profile/password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    def get_profile_stats(self) -> dict[str, Any]:
        return self._client.get("/auth/profile/stats")


class QuestionsAPI(_Endpoint):
    def get_all(
        self,
        department: str | None = None,
        level: str | None = None,
        subject: str | None = None,
        year: str | None = None,
    ) -> dict[str, Any]:
        params = {"department": department, "level": level, "subject": subject, "year": year}
        return self._client.get("/questions", params=params)

    def get_by_id(self, question_id: str) -> dict[str, Any]:
        return self._client.get(f"/questions/{question_id}")

    def upload(self, fields: Mapping[str, Any], pdf: Any) -> dict[str, Any]:
        return self._client.post("/questions", files=multipart_parts(fields, [upload_file("pdf", pdf)]))

    def delete(self, question_id: str) -> dict[str, Any]:
        return self._client.delete(f"/questions/{question_id}")


class SolutionsAPI(_Endpoint):
    def get_all(self, question_id: str | None = None) -> dict[str, Any]:
        return self._client.get("/solutions", params={"questionId": question_id})

    def get_by_id(self, solution_id: str) -> dict[str, Any]:
        return self._client.get(f"/solutions/{solution_id}")

    def upload(self, fields: Mapping[str, Any], pdf: Any = None) -> dict[str, Any]:
        files = [upload_file("pdf", pdf)] if pdf is not None else []
        return self._client.post("/solutions", files=multipart_parts(fields, files))

    def delete(self, solution_id: str) -> dict[str, Any]:
        return self._client.delete(f"/solutions/{solution_id}")


class ScholarshipsAPI(_Endpoint):
    def get_all(self) -> dict[str, Any]:
        return self._client.get("/scholarships")

    def get_by_id(self, scholarship_id: str) -> dict[str, Any]:
        return self._client.get(f"/scholarships/{scholarship_id}")

    def upload(self, fields: Mapping[str, Any], images: Sequence[Any]) -> dict[str, Any]:
        files = [upload_file("images", image) for image in images]
        return self._client.post("/scholarships", files=multipart_parts(fields, files))

    def update(self, scholarship_id: str, fields: Mapping[str, Any], images: Sequence[Any] = ()) -> dict[str, Any]:
        files = [upload_file("images", image) for image in images]
        return self._client.put(f"/scholarships/{scholarship_id}", files=multipart_parts(fields, files))

    def delete(self, scholarship_id: str) -> dict[str, Any]:
        return self._client.delete(f"/scholarships/{scholarship_id}")

    def delete_image(self, scholarship_id: str, image: Any) -> dict[str, Any]:
        """Remove one image; ``image`` is a stored-file object or a bare URL."""
        if isinstance(image, Mapping):
            payload = {"imagePublicId": image.get("publicId"), "imageUrl": image.get("url")}
        else:
            payload = {"imageUrl": image}
        return self._client.delete(f"/scholarships/{scholarship_id}/image", json=payload)


class InternshipsAPI(_Endpoint):
    def get_all(self) -> dict[str, Any]:
        return self._client.get("/internships")

    def get_by_id(self, internship_id: str) -> dict[str, Any]:
        return self._client.get(f"/internships/{internship_id}")

    def upload(self, fields: Mapping[str, Any], image: Any = None) -> dict[str, Any]:
        files = [upload_file("image", image)] if image is not None else []
        return self._client.post("/internships", files=multipart_parts(fields, files))

    def update(self, internship_id: str, fields: Mapping[str, Any], image: Any = None) -> dict[str, Any]:
        files = [upload_file("image", image)] if image is not None else []
        return self._client.put(f"/internships/{internship_id}", files=multipart_parts(fields, files))

    def delete(self, internship_id: str) -> dict[str, Any]:
        return self._client.delete(f"/internships/{internship_id}")


class ContestsAPI(_Endpoint):
    def get_all(self) -> dict[str, Any]:
        return self._client.get("/contests")

    def get_contestants(self, contest_id: str) -> dict[str, Any]:
        return self._client.get(f"/contests/{contest_id}/contestants")

    def get_stats(self, contest_id: str) -> dict[str, Any]:
        return self._client.get(f"/contests/{contest_id}/stats")

    def create(self, contest: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.post("/contests", json=dict(contest))

    def update(self, contest_id: str, contest: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/contests/{contest_id}", json=dict(contest))

    def delete(self, contest_id: str) -> dict[str, Any]:
        return self._client.delete(f"/contests/{contest_id}")

    def add_contestant(self, contest_id: str, fields: Mapping[str, Any], image: Any = None) -> dict[str, Any]:
        files = [upload_file("image", image)] if image is not None else []
        return self._client.post(f"/contests/{contest_id}/contestants", files=multipart_parts(fields, files))

    def delete_contestant(self, contestant_id: str) -> dict[str, Any]:
        return self._client.delete(f"/contests/contestants/{contestant_id}")


class VotesAPI(_Endpoint):
    def cast_vote(self, contest_id: str, contestant_id: str) -> dict[str, Any]:
        """
        Raises:
            DuplicateVoteError: the backend already holds a vote from this
                user for the contest (HTTP 409).
        """
        try:
            return self._client.post("/votes", json={"contestId": contest_id, "contestantId": contestant_id})
        except APIError as exc:
            if exc.status_code == 409:
                raise DuplicateVoteError(
                    server_message=exc.server_message, method=exc.method, path=exc.path
                ) from exc
            raise

    def get_my_votes(self) -> dict[str, Any]:
        return self._client.get("/votes/my-votes")


class SchoolsAPI(_Endpoint):
    def get_all(self) -> dict[str, Any]:
        return self._client.get("/schools")

    def get_by_id(self, school_id: str) -> dict[str, Any]:
        return self._client.get(f"/schools/{school_id}")

    def create(self, school: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.post("/schools", json=dict(school))

    def update(self, school_id: str, school: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/schools/{school_id}", json=dict(school))

    def delete(self, school_id: str) -> dict[str, Any]:
        return self._client.delete(f"/schools/{school_id}")


class DepartmentsAPI(_Endpoint):
    def get_all(self, school_id: str | None = None) -> dict[str, Any]:
        return self._client.get("/departments", params={"school": school_id})

    def get_by_id(self, department_id: str) -> dict[str, Any]:
        return self._client.get(f"/departments/{department_id}")

    def create(self, department: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.post("/departments", json=dict(department))

    def update(self, department_id: str, department: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/departments/{department_id}", json=dict(department))

    def delete(self, department_id: str) -> dict[str, Any]:
        return self._client.delete(f"/departments/{department_id}")


class CoursesAPI(_Endpoint):
    def get_all(self, department_id: str | None = None, level: str | None = None) -> dict[str, Any]:
        return self._client.get("/courses", params={"department": department_id, "level": level})

    def get_by_id(self, course_id: str) -> dict[str, Any]:
        return self._client.get(f"/courses/{course_id}")

    def create(self, fields: Mapping[str, Any], thumbnail: Any = None) -> dict[str, Any]:
        files = [upload_file("thumbnail", thumbnail)] if thumbnail is not None else []
        return self._client.post("/courses", files=multipart_parts(fields, files))

    def update(self, course_id: str, fields: Mapping[str, Any], thumbnail: Any = None) -> dict[str, Any]:
        files = [upload_file("thumbnail", thumbnail)] if thumbnail is not None else []
        return self._client.put(f"/courses/{course_id}", files=multipart_parts(fields, files))

    def delete(self, course_id: str) -> dict[str, Any]:
        return self._client.delete(f"/courses/{course_id}")


class CourseChaptersAPI(_Endpoint):
    def get_by_course(self, course_id: str) -> dict[str, Any]:
        return self._client.get(f"/course-chapters/course/{course_id}")

    def get_by_id(self, chapter_id: str) -> dict[str, Any]:
        return self._client.get(f"/course-chapters/{chapter_id}")

    def create(self, chapter: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.post("/course-chapters", json=dict(chapter))

    def update(self, chapter_id: str, chapter: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/course-chapters/{chapter_id}", json=dict(chapter))

    def delete(self, chapter_id: str) -> dict[str, Any]:
        return self._client.delete(f"/course-chapters/{chapter_id}")


class ConcoursAPI(_Endpoint):
    def get_all(self, department_id: str | None = None, year: str | None = None) -> dict[str, Any]:
        return self._client.get("/concours", params={"department": department_id, "year": year})

    def get_by_id(self, concours_id: str) -> dict[str, Any]:
        return self._client.get(f"/concours/{concours_id}")

    def upload(self, fields: Mapping[str, Any], pdf: Any) -> dict[str, Any]:
        return self._client.post("/concours", files=multipart_parts(fields, [upload_file("pdf", pdf)]))

    def update(self, concours_id: str, fields: Mapping[str, Any], pdf: Any = None) -> dict[str, Any]:
        files = [upload_file("pdf", pdf)] if pdf is not None else []
        return self._client.put(f"/concours/{concours_id}", files=multipart_parts(fields, files))

    def delete(self, concours_id: str) -> dict[str, Any]:
        return self._client.delete(f"/concours/{concours_id}")


class SkillsAPI(_Endpoint):
    def get_all(self, category: str | None = None) -> dict[str, Any]:
        return self._client.get("/skills", params={"category": category})

    def get_by_id(self, skill_id: str) -> dict[str, Any]:
        return self._client.get(f"/skills/{skill_id}")

    def create(self, fields: Mapping[str, Any], thumbnail: Any = None) -> dict[str, Any]:
        files = [upload_file("thumbnail", thumbnail)] if thumbnail is not None else []
        return self._client.post("/skills", files=multipart_parts(fields, files))

    def update(self, skill_id: str, fields: Mapping[str, Any], thumbnail: Any = None) -> dict[str, Any]:
        files = [upload_file("thumbnail", thumbnail)] if thumbnail is not None else []
        return self._client.put(f"/skills/{skill_id}", files=multipart_parts(fields, files))

    def delete(self, skill_id: str) -> dict[str, Any]:
        return self._client.delete(f"/skills/{skill_id}")


class SkillChaptersAPI(_Endpoint):
    def get_by_skill(self, skill_id: str) -> dict[str, Any]:
        return self._client.get(f"/skill-chapters/skill/{skill_id}")

    def get_by_id(self, chapter_id: str) -> dict[str, Any]:
        return self._client.get(f"/skill-chapters/{chapter_id}")

    def create(self, chapter: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.post("/skill-chapters", json=dict(chapter))

    def update(self, chapter_id: str, chapter: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/skill-chapters/{chapter_id}", json=dict(chapter))

    def delete(self, chapter_id: str) -> dict[str, Any]:
        return self._client.delete(f"/skill-chapters/{chapter_id}")


class LiveSessionsAPI(_Endpoint):
    def get_all(self, **params: Any) -> dict[str, Any]:
        return self._client.get("/live-sessions", params=params)

    def get_by_id(self, session_id: str) -> dict[str, Any]:
        return self._client.get(f"/live-sessions/{session_id}")

    def create(self, live_session: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.post("/live-sessions", json=dict(live_session))

    def update(self, session_id: str, live_session: Mapping[str, Any]) -> dict[str, Any]:
        return self._client.put(f"/live-sessions/{session_id}", json=dict(live_session))

    def start(self, session_id: str) -> dict[str, Any]:
        return self._client.patch(f"/live-sessions/{session_id}/start")

    def end(self, session_id: str) -> dict[str, Any]:
        return self._client.patch(f"/live-sessions/{session_id}/end")

    def delete(self, session_id: str) -> dict[str, Any]:
        return self._client.delete(f"/live-sessions/{session_id}")


class LibraryAPI(_Endpoint):
    def get_all(
        self,
        category: str | None = None,
        author: str | None = None,
        query: str | None = None,
    ) -> dict[str, Any]:
        return self._client.get("/library", params={"category": category, "author": author, "query": query})

    def get_by_id(self, book_id: str) -> dict[str, Any]:
        return self._client.get(f"/library/{book_id}")

    def create(self, fields: Mapping[str, Any], pdf: Any) -> dict[str, Any]:
        return self._client.post("/library", files=multipart_parts(fields, [upload_file("pdf", pdf)]))

    def update(self, book_id: str, fields: Mapping[str, Any], pdf: Any = None) -> dict[str, Any]:
        files = [upload_file("pdf", pdf)] if pdf is not None else []
        return self._client.put(f"/library/{book_id}", files=multipart_parts(fields, files))

    def delete(self, book_id: str) -> dict[str, Any]:
        return self._client.delete(f"/library/{book_id}")


class NotificationsAPI(_Endpoint):
    def get_all(self, limit: int | None = None) -> dict[str, Any]:
        return self._client.get("/notifications", params={"limit": limit})

    def get_by_id(self, notification_id: str) -> dict[str, Any]:
        return self._client.get(f"/notifications/{notification_id}")

    def create(self, fields: Mapping[str, Any], media: Any) -> dict[str, Any]:
        return self._client.post("/notifications", files=multipart_parts(fields, [upload_file("media", media)]))

    def update(self, notification_id: str, fields: Mapping[str, Any], media: Any = None) -> dict[str, Any]:
        files = [upload_file("media", media)] if media is not None else []
        return self._client.put(f"/notifications/{notification_id}", files=multipart_parts(fields, files))

    def delete(self, notification_id: str) -> dict[str, Any]:
        return self._client.delete(f"/notifications/{notification_id}")


class FoundationAPI:
    """All endpoint groups sharing one client."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.auth = AuthAPI(client)
        self.questions = QuestionsAPI(client)
        self.solutions = SolutionsAPI(client)
        self.scholarships = ScholarshipsAPI(client)
        self.internships = InternshipsAPI(client)
        self.contests = ContestsAPI(client)
        self.votes = VotesAPI(client)
        self.schools = SchoolsAPI(client)
        self.departments = DepartmentsAPI(client)
        self.courses = CoursesAPI(client)
        self.course_chapters = CourseChaptersAPI(client)
        self.concours = ConcoursAPI(client)
        self.skills = SkillsAPI(client)
        self.skill_chapters = SkillChaptersAPI(client)
        self.live_sessions = LiveSessionsAPI(client)
        self.library = LibraryAPI(client)
        self.notifications = NotificationsAPI(client)
