"""
Learning resources admin pages: concours, library, live sessions, past
questions and their solutions.
"""

from __future__ import annotations

import logging

import streamlit as st

from foundation_console.api import unwrap
from foundation_console.assets import resolve_asset_url
from foundation_console.config import (
    LIVE_SESSION_STATUS_COLORS,
    QUESTION_DEPARTMENTS,
    QUESTION_LEVELS,
    QUESTION_SCHOOLS,
    QUESTION_SUBJECTS,
)
from foundation_console.domain import (
    book_category,
    departments_for_school,
    filter_books,
    format_datetime_local,
    format_readable_date,
    library_categories,
    live_session_actions,
    parse_timestamp,
    ref_id,
    ref_name,
)
from foundation_console.forms import (
    ConcoursForm,
    LibraryBookForm,
    LiveSessionForm,
    QuestionForm,
    SolutionForm,
    parse_form,
)
from foundation_console.ui.components import (
    cancel_editor,
    edit_delete_buttons,
    form_buttons,
    load_data,
    render_delete_confirmation,
    render_empty_state,
    render_messages,
    render_page_header,
    run_action,
    save_and_close,
    select_index,
    status_badge,
)
from foundation_console.ui.session import editor_state, flash, get_api, navigate, open_editor, request_delete

logger = logging.getLogger(__name__)


# =============================================================================
# Concours
# =============================================================================


def render_concours_page() -> None:
    namespace = "concours"
    api = get_api()
    if render_page_header("Manage Concours", "Upload entrance exam papers by department.", "Add Concours", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "Unable to load concours. Please try again later."
    concours = load_data(namespace, api.concours.get_all, rejected=failed, failed=failed)
    schools = load_data(namespace, api.schools.get_all, rejected=failed, failed=failed)
    departments = load_data(namespace, api.departments.get_all, rejected=failed, failed=failed)
    school_names = {school["_id"]: school.get("name", "") for school in schools}
    dept_names = {dept["_id"]: dept.get("name", "") for dept in departments}

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        department_ref = item.get("department")
        with st.container(border=True):
            st.subheader("Edit Concours" if item else "Add Concours")
            school_ids = list(school_names)
            # Outside the form so the department list follows the chosen school
            school = st.selectbox(
                "School",
                school_ids,
                index=select_index(school_ids, ref_id(department_ref.get("school")) if isinstance(department_ref, dict) else None),
                format_func=school_names.get,
                placeholder="Select a school",
                key=f"{namespace}_school",
            )
            available = departments_for_school(departments, school)
            dept_ids = [dept["_id"] for dept in available]
            with st.form(f"{namespace}_form"):
                title = st.text_input("Title", value=item.get("title", ""))
                year = st.text_input("Year", value=str(item.get("year", "")), max_chars=4)
                department = st.selectbox(
                    "Department",
                    dept_ids,
                    index=select_index(dept_ids, ref_id(department_ref)),
                    format_func=dept_names.get,
                    placeholder="Select a school first" if not school else "Select a department",
                )
                description = st.text_area("Description", value=item.get("description", ""))
                pdf = st.file_uploader("PDF", type=["pdf"])
                if item.get("pdfUrl"):
                    st.caption("Leave empty to keep the current PDF.")
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "title": title,
                    "year": year,
                    "department": department,
                    "description": description,
                    "pdf": pdf,
                    "is_edit": bool(item),
                }

                def submit():
                    form = parse_form(ConcoursForm, data)
                    if item:
                        return unwrap(api.concours.update(item["_id"], form.to_payload(), form.pdf))
                    return unwrap(api.concours.upload(form.to_payload(), form.pdf))

                save_and_close(namespace, submit, "Failed to save concours.", "Concours saved")

    render_delete_confirmation(
        namespace,
        lambda entry: f'"{entry.get("title", "")}"',
        lambda entry: unwrap(api.concours.delete(entry["_id"])),
        "Failed to delete concours.",
    )

    if not concours:
        render_empty_state("No concours uploaded yet.")
        return

    for entry in concours:
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                st.markdown(f"#### {entry.get('title', '')} ({entry.get('year', '')})")
                dept = entry.get("department")
                dept_label = ref_name(dept) or dept_names.get(ref_id(dept), "")
                if dept_label:
                    st.caption(dept_label)
                if entry.get("description"):
                    st.write(entry["description"])
            with col2:
                pdf_url = resolve_asset_url(entry.get("pdfUrl"))
                if pdf_url:
                    st.link_button("View PDF", pdf_url, use_container_width=True)
                edit_delete_buttons(namespace, entry)


# =============================================================================
# Library
# =============================================================================


def render_library_page() -> None:
    namespace = "library"
    api = get_api()
    if render_page_header("Manage Library", "Upload and curate PDFs for the digital library.", "Add Book", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "Unable to load library books. Please try again later."
    books = load_data(namespace, api.library.get_all, rejected=failed, failed=failed)

    filter1, filter2 = st.columns([2, 1])
    with filter1:
        search = st.text_input("Search", placeholder="Search by title, author or description")
    with filter2:
        category = st.selectbox("Category", library_categories(books))

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit Book" if item else "Add Book")
            with st.form(f"{namespace}_form"):
                title = st.text_input("Title", value=item.get("title", ""))
                author = st.text_input("Author", value=item.get("author", ""))
                book_cat = st.text_input("Category", value=item.get("category", ""))
                published = parse_timestamp(item.get("publishedDate"))
                published_date = st.date_input("Published Date", value=published.date() if published else None)
                description = st.text_area("Description", value=item.get("description", ""))
                pdf = st.file_uploader("PDF", type=["pdf"])
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "title": title,
                    "author": author,
                    "category": book_cat,
                    "published_date": published_date,
                    "description": description,
                    "pdf": pdf,
                    "is_edit": bool(item),
                }

                def submit():
                    form = parse_form(LibraryBookForm, data)
                    if item:
                        return unwrap(api.library.update(item["_id"], form.to_payload(), form.pdf))
                    return unwrap(api.library.create(form.to_payload(), form.pdf))

                save_and_close(namespace, submit, "Failed to save book.", "Book saved")

    render_delete_confirmation(
        namespace,
        lambda book: f'"{book.get("title", "")}"',
        lambda book: unwrap(api.library.delete(book["_id"])),
        "Failed to delete book.",
    )

    visible = filter_books(books, category, search)
    if not visible:
        render_empty_state("No books match your filters." if books else "No books in the library yet.")
        return

    cols = st.columns(3)
    for index, book in enumerate(visible):
        with cols[index % 3]:
            with st.container(border=True):
                st.markdown(f"#### {book.get('title', '')}")
                st.caption(" · ".join(part for part in (book.get("author"), book_category(book)) if part))
                if book.get("description"):
                    st.write(book["description"])
                pdf_url = resolve_asset_url(book.get("pdfUrl"))
                if pdf_url:
                    st.link_button("Open PDF", pdf_url, use_container_width=True)
                edit_delete_buttons(namespace, book)


# =============================================================================
# Live sessions
# =============================================================================


def _run_session_action(namespace: str, action, fallback: str) -> None:
    run_action(namespace, lambda: unwrap(action()), fallback)
    st.rerun()


def render_live_sessions_page() -> None:
    namespace = "live_sessions"
    api = get_api()
    if render_page_header("Manage Live Sessions", action="Add Session", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "Failed to load live sessions"
    sessions = load_data(namespace, api.live_sessions.get_all, rejected=failed, failed=failed)
    departments = load_data(namespace, api.departments.get_all, rejected=failed, failed=failed)
    dept_names = {dept["_id"]: dept.get("name", "") for dept in departments}
    dept_ids = list(dept_names)

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit Live Session" if item else "Add Live Session")
            with st.form(f"{namespace}_form"):
                department = st.selectbox(
                    "Department",
                    dept_ids,
                    index=select_index(dept_ids, ref_id(item.get("department"))),
                    format_func=dept_names.get,
                    placeholder="Select a department",
                )
                course_title = st.text_input("Course Title", value=item.get("courseTitle", ""))
                course_code = st.text_input("Course Code", value=item.get("courseCode", ""))
                lecturer = st.text_input("Lecturer", value=item.get("lecturer", ""))
                youtube_url = st.text_input("YouTube URL", value=item.get("youtubeUrl", ""))
                scheduled_at = st.text_input(
                    "Scheduled At",
                    value=format_datetime_local(item.get("scheduledAt")),
                    placeholder="YYYY-MM-DDTHH:MM",
                )
                description = st.text_area("Description", value=item.get("description", ""))
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "department": department,
                    "course_title": course_title,
                    "course_code": course_code,
                    "lecturer": lecturer,
                    "youtube_url": youtube_url,
                    "scheduled_at": scheduled_at,
                    "description": description,
                }

                def submit():
                    payload = parse_form(LiveSessionForm, data).to_payload()
                    if item:
                        return unwrap(api.live_sessions.update(item["_id"], payload))
                    return unwrap(api.live_sessions.create(payload))

                save_and_close(namespace, submit, "Failed to save live session", "Live session saved")

    render_delete_confirmation(
        namespace,
        lambda session: f'"{session.get("courseTitle", "")}"',
        lambda session: unwrap(api.live_sessions.delete(session["_id"])),
        "Failed to delete live session",
    )

    if not sessions:
        render_empty_state("No live sessions scheduled yet.")
        return

    for session in sessions:
        status = session.get("status") or "scheduled"
        actions = live_session_actions(status)
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                title = session.get("courseTitle", "")
                if session.get("courseCode"):
                    title += f" ({session['courseCode']})"
                st.markdown(f"#### {title}")
                st.markdown(status_badge(status.upper(), LIVE_SESSION_STATUS_COLORS.get(status, "gray")))
                dept = session.get("department")
                st.caption(
                    " · ".join(
                        part
                        for part in (
                            ref_name(dept) or dept_names.get(ref_id(dept), ""),
                            session.get("lecturer"),
                            format_readable_date(session.get("scheduledAt")),
                        )
                        if part
                    )
                )
                if session.get("description"):
                    st.write(session["description"])
            with col2:
                if st.button(
                    "Start", key=f"{namespace}_start_{session['_id']}", disabled=not actions["start"], use_container_width=True
                ):
                    _run_session_action(
                        namespace, lambda: api.live_sessions.start(session["_id"]), "Failed to start live session"
                    )
                if st.button(
                    "End", key=f"{namespace}_end_{session['_id']}", disabled=not actions["end"], use_container_width=True
                ):
                    _run_session_action(namespace, lambda: api.live_sessions.end(session["_id"]), "Failed to end live session")
                if session.get("youtubeUrl"):
                    st.link_button("Watch", session["youtubeUrl"], use_container_width=True)
            edit_delete_buttons(namespace, session)


# =============================================================================
# Questions and solutions
# =============================================================================


def render_questions_page() -> None:
    namespace = "questions"
    api = get_api()
    if render_page_header("View Questions", action="Upload Question", key=namespace):
        navigate("upload-question")
    render_messages(namespace)

    filters = st.columns(4)
    with filters[0]:
        department = st.selectbox("Department", ["", *QUESTION_DEPARTMENTS], format_func=lambda v: v or "All")
    with filters[1]:
        level = st.selectbox("Level", ["", *QUESTION_LEVELS], format_func=lambda v: v or "All")
    with filters[2]:
        subject = st.selectbox("Subject", ["", *QUESTION_SUBJECTS], format_func=lambda v: v or "All")
    with filters[3]:
        year = st.text_input("Year", max_chars=4)

    questions = load_data(
        namespace,
        lambda: api.questions.get_all(department=department, level=level, subject=subject, year=year),
        rejected="Failed to fetch questions",
        failed="An error occurred while fetching questions",
    )

    render_delete_confirmation(
        namespace,
        lambda question: f'"{question.get("subject", "")} {question.get("year", "")}"',
        lambda question: unwrap(api.questions.delete(question["_id"])),
        "An error occurred while deleting the question",
    )

    if not questions:
        render_empty_state("No questions found.")
        return

    header = st.columns([2, 2, 2, 1, 1, 1, 1])
    for col, label in zip(header, ("Subject", "School", "Department", "Level", "Year", "PDF", "")):
        col.markdown(f"**{label}**")
    for question in questions:
        row = st.columns([2, 2, 2, 1, 1, 1, 1])
        row[0].write(question.get("subject", ""))
        row[1].write(question.get("school", ""))
        row[2].write(question.get("department", ""))
        row[3].write(question.get("level", ""))
        row[4].write(str(question.get("year", "")))
        pdf_url = resolve_asset_url(question.get("pdfUrl"))
        if pdf_url:
            row[5].link_button("View", pdf_url)
        if row[6].button("Delete", key=f"{namespace}_delete_{question['_id']}"):
            request_delete(namespace, question)
            st.rerun()


def render_upload_question_page() -> None:
    namespace = "upload_question"
    api = get_api()
    st.title("Upload Question")
    render_messages(namespace)

    with st.form(f"{namespace}_form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            school = st.selectbox("School", QUESTION_SCHOOLS, index=None, placeholder="Select school")
            level = st.selectbox("Level", QUESTION_LEVELS, index=None, placeholder="Select level")
            year = st.text_input("Year", max_chars=4)
        with col2:
            department = st.selectbox("Department", QUESTION_DEPARTMENTS, index=None, placeholder="Select department")
            subject = st.selectbox("Subject", QUESTION_SUBJECTS, index=None, placeholder="Select subject")
        pdf = st.file_uploader("Question PDF", type=["pdf"])
        submitted = st.form_submit_button("Upload Question", type="primary")

    if submitted:
        data = {
            "school": school,
            "department": department,
            "level": level,
            "subject": subject,
            "year": year,
            "pdf": pdf,
        }

        def upload():
            form = parse_form(QuestionForm, data)
            return unwrap(api.questions.upload(form.to_payload(), form.pdf))

        ok, _ = run_action(namespace, upload, "An error occurred. Please try again.")
        if ok:
            flash("Question uploaded successfully!")
        st.rerun()


def render_upload_solution_page() -> None:
    namespace = "upload_solution"
    api = get_api()
    st.title("Upload Solution")
    render_messages(namespace)

    questions = load_data(
        namespace,
        api.questions.get_all,
        rejected="Failed to fetch questions",
        failed="An error occurred while fetching questions",
    )
    labels = {
        question["_id"]: " - ".join(
            str(part)
            for part in (question.get("subject"), question.get("school"), question.get("level"), question.get("year"))
            if part
        )
        for question in questions
    }

    with st.form(f"{namespace}_form"):
        question_id = st.selectbox(
            "Question", list(labels), index=None, format_func=labels.get, placeholder="Select a question"
        )
        youtube_url = st.text_input("YouTube URL (optional)")
        pdf = st.file_uploader("Solution PDF (optional)", type=["pdf"])
        submitted = st.form_submit_button("Upload Solution", type="primary")

    if submitted:
        data = {"question_id": question_id, "youtube_url": youtube_url, "pdf": pdf}

        def upload():
            form = parse_form(SolutionForm, data)
            return unwrap(api.solutions.upload(form.to_payload(), form.pdf))

        ok, _ = run_action(namespace, upload, "An error occurred. Please try again.")
        if ok:
            flash("Solution uploaded successfully!")
        st.rerun()
