"""
Academic structure admin pages: schools, departments, courses, skills and
their chapters.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import streamlit as st

from foundation_console.api import unwrap
from foundation_console.assets import resolve_asset_url
from foundation_console.config import COURSE_LEVELS
from foundation_console.domain import build_chapter_tree, ref_id, ref_name
from foundation_console.forms import (
    ChapterForm,
    CourseForm,
    DepartmentForm,
    SchoolForm,
    SkillForm,
    parse_form,
)
from foundation_console.ui.components import (
    cancel_editor,
    edit_delete_buttons,
    form_buttons,
    load_data,
    render_back_button,
    render_delete_confirmation,
    render_empty_state,
    render_image,
    render_messages,
    render_page_header,
    save_and_close,
    select_index,
)
from foundation_console.ui.session import editor_state, get_api, navigate, open_editor, query_param

logger = logging.getLogger(__name__)

DELETE_FAILED = "An error occurred while deleting"
SAVE_FAILED = "An error occurred"


# =============================================================================
# Schools
# =============================================================================


def render_schools_page() -> None:
    namespace = "schools"
    api = get_api()
    if render_page_header("Manage Schools", action="Add School", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    schools = load_data(
        namespace,
        api.schools.get_all,
        rejected="Failed to load schools",
        failed="An error occurred while loading schools",
    )

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit School" if item else "Add School")
            with st.form(f"{namespace}_form"):
                name = st.text_input("School Name", value=item.get("name", ""))
                location = st.text_input("Location", value=item.get("location", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {"name": name, "location": location, "description": description}

                def submit():
                    payload = parse_form(SchoolForm, data).to_payload()
                    if item:
                        return unwrap(api.schools.update(item["_id"], payload))
                    return unwrap(api.schools.create(payload))

                save_and_close(namespace, submit, SAVE_FAILED, "School saved")

    render_delete_confirmation(
        namespace,
        lambda school: f'"{school.get("name", "")}"',
        lambda school: unwrap(api.schools.delete(school["_id"])),
        DELETE_FAILED,
    )

    if not schools:
        render_empty_state("No schools found. Create your first school!")
        return

    cols = st.columns(3)
    for index, school in enumerate(schools):
        with cols[index % 3]:
            with st.container(border=True):
                st.markdown(f"#### {school.get('name', '')}")
                if school.get("location"):
                    st.caption(f"📍 {school['location']}")
                if school.get("description"):
                    st.write(school["description"])
                edit_delete_buttons(namespace, school)


# =============================================================================
# Departments
# =============================================================================


def render_departments_page() -> None:
    namespace = "departments"
    api = get_api()
    if render_page_header("Manage Departments", action="Add Department", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "An error occurred while loading data"
    departments = load_data(namespace, api.departments.get_all, rejected=failed, failed=failed)
    schools = load_data(namespace, api.schools.get_all, rejected=failed, failed=failed)
    school_names = {school["_id"]: school.get("name", "") for school in schools}
    school_ids = list(school_names)

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit Department" if item else "Add Department")
            with st.form(f"{namespace}_form"):
                school = st.selectbox(
                    "School",
                    school_ids,
                    index=select_index(school_ids, ref_id(item.get("school"))),
                    format_func=school_names.get,
                    placeholder="Select a school",
                )
                name = st.text_input("Department Name", value=item.get("name", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {"name": name, "school": school, "description": description}

                def submit():
                    payload = parse_form(DepartmentForm, data).to_payload()
                    if item:
                        return unwrap(api.departments.update(item["_id"], payload))
                    return unwrap(api.departments.create(payload))

                save_and_close(namespace, submit, SAVE_FAILED, "Department saved")

    render_delete_confirmation(
        namespace,
        lambda dept: f'"{dept.get("name", "")}"',
        lambda dept: unwrap(api.departments.delete(dept["_id"])),
        DELETE_FAILED,
    )

    if not departments:
        render_empty_state("No departments found. Create your first department!")
        return

    cols = st.columns(3)
    for index, dept in enumerate(departments):
        with cols[index % 3]:
            with st.container(border=True):
                st.markdown(f"#### {dept.get('name', '')}")
                school_label = ref_name(dept.get("school")) or school_names.get(ref_id(dept.get("school")), "")
                if school_label:
                    st.caption(f"🏫 {school_label}")
                if dept.get("description"):
                    st.write(dept["description"])
                edit_delete_buttons(namespace, dept)


# =============================================================================
# Courses
# =============================================================================


def render_courses_page() -> None:
    namespace = "courses"
    api = get_api()
    if render_page_header("Manage Courses", action="Add Course", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "An error occurred while loading data"
    departments = load_data(namespace, api.departments.get_all, rejected=failed, failed=failed)
    dept_names = {dept["_id"]: dept.get("name", "") for dept in departments}
    dept_ids = list(dept_names)

    filter1, filter2 = st.columns(2)
    with filter1:
        dept_filter = st.selectbox(
            "Filter by department", ["", *dept_ids], format_func=lambda value: dept_names.get(value, "All")
        )
    with filter2:
        level_filter = st.selectbox("Filter by level", ["", *COURSE_LEVELS], format_func=lambda value: value or "All")

    courses = load_data(
        namespace,
        lambda: api.courses.get_all(department_id=dept_filter or None, level=level_filter or None),
        rejected=failed,
        failed=failed,
    )

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit Course" if item else "Add Course")
            with st.form(f"{namespace}_form"):
                title = st.text_input("Course Title", value=item.get("title", ""))
                code = st.text_input("Course Code", value=item.get("code", ""))
                department = st.selectbox(
                    "Department",
                    dept_ids,
                    index=select_index(dept_ids, ref_id(item.get("department"))),
                    format_func=dept_names.get,
                    placeholder="Select a department",
                )
                level = st.selectbox(
                    "Level",
                    list(COURSE_LEVELS),
                    index=select_index(list(COURSE_LEVELS), str(item.get("level", ""))),
                    placeholder="Select a level",
                )
                instructor = st.text_input("Instructor", value=item.get("instructor", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                thumbnail = st.file_uploader("Thumbnail", type=["png", "jpg", "jpeg", "gif", "webp"])
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "title": title,
                    "code": code,
                    "department": department,
                    "level": level,
                    "instructor": instructor,
                    "description": description,
                    "thumbnail": thumbnail,
                }

                def submit():
                    form = parse_form(CourseForm, data)
                    if item:
                        return unwrap(api.courses.update(item["_id"], form.to_payload(), form.thumbnail))
                    return unwrap(api.courses.create(form.to_payload(), form.thumbnail))

                save_and_close(namespace, submit, SAVE_FAILED, "Course saved")

    render_delete_confirmation(
        namespace,
        lambda course: f'"{course.get("title", "")}"',
        lambda course: unwrap(api.courses.delete(course["_id"])),
        DELETE_FAILED,
    )

    if not courses:
        render_empty_state("No courses found. Create your first course!")
        return

    cols = st.columns(3)
    for index, course in enumerate(courses):
        with cols[index % 3]:
            with st.container(border=True):
                render_image(resolve_asset_url(course.get("thumbnail")))
                st.markdown(f"#### {course.get('title', '')}")
                meta = [course.get("code"), f"Level {course['level']}" if course.get("level") else None]
                dept_label = ref_name(course.get("department")) or dept_names.get(ref_id(course.get("department")))
                meta.append(dept_label)
                st.caption(" · ".join(part for part in meta if part))
                if course.get("instructor"):
                    st.write(f"Instructor: {course['instructor']}")
                if st.button("Chapters", key=f"course_chapters_{course['_id']}", use_container_width=True):
                    navigate("manage-course-chapters", course_id=course["_id"])
                edit_delete_buttons(namespace, course)


# =============================================================================
# Skills
# =============================================================================


def render_skills_page() -> None:
    namespace = "skills"
    api = get_api()
    if render_page_header("Manage Skills", action="Add Skill", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "An error occurred while loading data"
    category = st.text_input("Filter by category", placeholder="e.g. Programming")
    skills = load_data(namespace, lambda: api.skills.get_all(category=category or None), rejected=failed, failed=failed)

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit Skill" if item else "Add Skill")
            with st.form(f"{namespace}_form"):
                name = st.text_input("Skill Name", value=item.get("name", ""))
                skill_category = st.text_input("Category", value=item.get("category", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                thumbnail = st.file_uploader("Thumbnail", type=["png", "jpg", "jpeg", "gif", "webp"])
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {"name": name, "category": skill_category, "description": description, "thumbnail": thumbnail}

                def submit():
                    form = parse_form(SkillForm, data)
                    if item:
                        return unwrap(api.skills.update(item["_id"], form.to_payload(), form.thumbnail))
                    return unwrap(api.skills.create(form.to_payload(), form.thumbnail))

                save_and_close(namespace, submit, SAVE_FAILED, "Skill saved")

    render_delete_confirmation(
        namespace,
        lambda skill: f'"{skill.get("name", "")}"',
        lambda skill: unwrap(api.skills.delete(skill["_id"])),
        DELETE_FAILED,
    )

    if not skills:
        render_empty_state("No skills found. Create your first skill!")
        return

    cols = st.columns(3)
    for index, skill in enumerate(skills):
        with cols[index % 3]:
            with st.container(border=True):
                render_image(resolve_asset_url(skill.get("thumbnail")))
                st.markdown(f"#### {skill.get('name', '')}")
                if skill.get("category"):
                    st.caption(skill["category"])
                if skill.get("description"):
                    st.write(skill["description"])
                if st.button("Chapters", key=f"skill_chapters_{skill['_id']}", use_container_width=True):
                    navigate("manage-skill-chapters", skill_id=skill["_id"])
                edit_delete_buttons(namespace, skill)


# =============================================================================
# Chapters (shared by courses and skills)
# =============================================================================


def _render_chapters_page(
    *,
    namespace: str,
    owner_field: str,
    owner_id: str | None,
    load_owner: Callable[[str], Any],
    chapters_api: Any,
    load_chapters: Callable[[str], Any],
    back_page: str,
    back_label: str,
) -> None:
    render_back_button(back_label, back_page, key=f"{namespace}_back")
    if not owner_id:
        render_empty_state(f"No {owner_field} selected.")
        return

    failed = "An error occurred while loading data"
    owner = load_data(namespace, lambda: load_owner(owner_id), rejected=failed, failed=failed, default={})
    owner_label = owner.get("title") or owner.get("name") or owner_field.title()
    if render_page_header(f"Manage Chapters - {owner_label}", action="Add Chapter", key=namespace):
        open_editor(namespace, parent_id=None)
    render_messages(namespace)

    chapters = load_data(namespace, lambda: load_chapters(owner_id), rejected=failed, failed=failed)
    tree = build_chapter_tree(chapters)
    top_level = {chapter["_id"]: chapter.get("title", "") for chapter in tree}

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        parent_id = state.get("parent_id")
        heading = "Edit Chapter" if item else ("Add Sub-Chapter" if parent_id else "Add Chapter")
        with st.container(border=True):
            st.subheader(heading)
            with st.form(f"{namespace}_form"):
                title = st.text_input("Chapter Title", value=item.get("title", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                youtube_url = st.text_input(
                    "YouTube URL", value=item.get("youtubeUrl") or "", placeholder="https://www.youtube.com/watch?v=..."
                )
                order = st.number_input("Order", min_value=0, step=1, value=int(item.get("order") or 0))
                parent = parent_id
                if not parent_id:
                    options = ["", *(cid for cid in top_level if cid != item.get("_id"))]
                    parent = st.selectbox(
                        "Parent Chapter",
                        options,
                        index=select_index(options, ref_id(item.get("parentChapter")) or "") or 0,
                        format_func=lambda value: top_level.get(value, "None (top level)"),
                    )
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "owner_field": owner_field,
                    "owner_id": owner_id,
                    "title": title,
                    "description": description,
                    "youtube_url": youtube_url,
                    "order": order,
                    "parent_chapter": parent or None,
                }

                def submit():
                    payload = parse_form(ChapterForm, data).to_payload()
                    if item:
                        return unwrap(chapters_api.update(item["_id"], payload))
                    return unwrap(chapters_api.create(payload))

                save_and_close(namespace, submit, SAVE_FAILED, "Chapter saved")

    render_delete_confirmation(
        namespace,
        lambda chapter: f'"{chapter.get("title", "")}"',
        lambda chapter: unwrap(chapters_api.delete(chapter["_id"])),
        DELETE_FAILED,
    )

    if not tree:
        render_empty_state(f"No chapters found. Add chapters to this {owner_field}.")
        return

    for chapter in tree:
        with st.container(border=True):
            st.markdown(f"#### {chapter.get('order', 0)}. {chapter.get('title', '')}")
            if chapter.get("description"):
                st.write(chapter["description"])
            if chapter.get("youtubeUrl"):
                with st.expander("Video"):
                    st.video(chapter["youtubeUrl"])
            edit_delete_buttons(namespace, chapter, parent_id=None)
            if st.button("Add Sub-Chapter", key=f"{namespace}_sub_{chapter['_id']}"):
                open_editor(namespace, parent_id=chapter["_id"])
                st.rerun()
            for sub in chapter.get("subChapters") or []:
                with st.container(border=True):
                    st.markdown(f"**{sub.get('order', 0)}. {sub.get('title', '')}**")
                    if sub.get("description"):
                        st.caption(sub["description"])
                    if sub.get("youtubeUrl"):
                        st.caption(sub["youtubeUrl"])
                    edit_delete_buttons(namespace, sub, parent_id=ref_id(sub.get("parentChapter")))


def render_course_chapters_page() -> None:
    api = get_api()
    _render_chapters_page(
        namespace="course_chapters",
        owner_field="course",
        owner_id=query_param("course_id"),
        load_owner=api.courses.get_by_id,
        chapters_api=api.course_chapters,
        load_chapters=api.course_chapters.get_by_course,
        back_page="manage-courses",
        back_label="Back to Courses",
    )


def render_skill_chapters_page() -> None:
    api = get_api()
    _render_chapters_page(
        namespace="skill_chapters",
        owner_field="skill",
        owner_id=query_param("skill_id"),
        load_owner=api.skills.get_by_id,
        chapters_api=api.skill_chapters,
        load_chapters=api.skill_chapters.get_by_skill,
        back_page="manage-skills",
        back_label="Back to Skills",
    )
