"""
Engagement admin pages: voting contests, their contestants and the
notification feed.
"""

from __future__ import annotations

import logging

import streamlit as st

from foundation_console.api import unwrap
from foundation_console.assets import resolve_asset_url
from foundation_console.config import VOTING_RESTRICTIONS, get_settings
from foundation_console.domain import format_readable_date, notification_media, ref_id, to_datetime_local
from foundation_console.forms import ContestantForm, ContestForm, NotificationForm, parse_form
from foundation_console.ui.components import (
    cancel_editor,
    edit_delete_buttons,
    form_buttons,
    load_data,
    render_back_button,
    render_delete_confirmation,
    render_empty_state,
    render_image,
    render_media,
    render_messages,
    render_page_header,
    save_and_close,
    select_index,
    status_badge,
)
from foundation_console.ui.session import editor_state, get_api, navigate, open_editor, query_param, request_delete

logger = logging.getLogger(__name__)


# =============================================================================
# Contests
# =============================================================================


def render_contests_page() -> None:
    namespace = "contests"
    api = get_api()
    if render_page_header("Manage Contests", "Create voting contests and control who may vote.", "Add Contest", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    failed = "An error occurred while loading data"
    contests = load_data(namespace, api.contests.get_all, rejected=failed, failed=failed)
    schools = load_data(namespace, api.schools.get_all, rejected=failed, failed=failed)
    departments = load_data(namespace, api.departments.get_all, rejected=failed, failed=failed)
    school_names = {school["_id"]: school.get("name", "") for school in schools}
    dept_names = {dept["_id"]: dept.get("name", "") for dept in departments}

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        with st.container(border=True):
            st.subheader("Edit Contest" if item else "Add Contest")
            restrictions = list(VOTING_RESTRICTIONS)
            # Outside the form so the matching school/department select appears
            restriction = st.selectbox(
                "Who can vote",
                restrictions,
                index=select_index(restrictions, item.get("votingRestriction") or "all"),
                format_func=VOTING_RESTRICTIONS.get,
                key=f"{namespace}_restriction",
            )
            with st.form(f"{namespace}_form"):
                name = st.text_input("Contest Name", value=item.get("name", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                col1, col2 = st.columns(2)
                with col1:
                    start_at = st.text_input(
                        "Starts At (UTC)", value=to_datetime_local(item.get("startAt")), placeholder="YYYY-MM-DDTHH:MM"
                    )
                with col2:
                    end_at = st.text_input(
                        "Ends At (UTC)", value=to_datetime_local(item.get("endAt")), placeholder="YYYY-MM-DDTHH:MM"
                    )
                is_active = st.checkbox("Active", value=item.get("isActive", True))
                restricted_school = restricted_department = None
                if restriction == "school":
                    school_ids = list(school_names)
                    restricted_school = st.selectbox(
                        "School",
                        school_ids,
                        index=select_index(school_ids, ref_id(item.get("restrictedSchool"))),
                        format_func=school_names.get,
                        placeholder="Select a school",
                    )
                elif restriction == "department":
                    dept_ids = list(dept_names)
                    restricted_department = st.selectbox(
                        "Department",
                        dept_ids,
                        index=select_index(dept_ids, ref_id(item.get("restrictedDepartment"))),
                        format_func=dept_names.get,
                        placeholder="Select a department",
                    )
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "name": name,
                    "description": description,
                    "start_at": start_at,
                    "end_at": end_at,
                    "is_active": is_active,
                    "voting_restriction": restriction,
                    "restricted_school": restricted_school,
                    "restricted_department": restricted_department,
                }

                def submit():
                    payload = parse_form(ContestForm, data).to_payload()
                    if item:
                        return unwrap(api.contests.update(item["_id"], payload))
                    return unwrap(api.contests.create(payload))

                save_and_close(namespace, submit, "An error occurred", "Contest saved")

    render_delete_confirmation(
        namespace,
        lambda contest: f'"{contest.get("name", "")}" and all its contestants',
        lambda contest: unwrap(api.contests.delete(contest["_id"])),
        "An error occurred while deleting",
    )

    if not contests:
        render_empty_state("No contests yet.")
        return

    for contest in contests:
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                st.markdown(f"#### {contest.get('name', '')}")
                active = contest.get("isActive")
                st.markdown(status_badge("ACTIVE" if active else "INACTIVE", "green" if active else "gray"))
                restriction = contest.get("votingRestriction") or "all"
                st.caption(
                    f"{format_readable_date(contest.get('startAt'))} → {format_readable_date(contest.get('endAt'))}"
                    f" · {VOTING_RESTRICTIONS.get(restriction, restriction)}"
                )
                if contest.get("description"):
                    st.write(contest["description"])
            with col2:
                if st.button("Contestants", key=f"{namespace}_contestants_{contest['_id']}", use_container_width=True):
                    navigate("manage-contestants", contest_id=contest["_id"])
            edit_delete_buttons(namespace, contest)


# =============================================================================
# Contestants
# =============================================================================


def render_contestants_page() -> None:
    namespace = "contestants"
    api = get_api()
    contest_id = query_param("contest_id")
    render_back_button("Back to Contests", "manage-contests", key=f"{namespace}_back")
    if not contest_id:
        st.warning("No contest selected.")
        return

    if render_page_header("Contestants", action="Add Contestant", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    contestants = load_data(
        namespace,
        lambda: api.contests.get_contestants(contest_id),
        rejected="Failed to load contestants",
        failed="An error occurred while loading contestants",
    )

    if editor_state(namespace) is not None:
        with st.container(border=True):
            st.subheader("Add Contestant")
            with st.form(f"{namespace}_form"):
                name = st.text_input("Name")
                bio = st.text_area("Bio")
                image = st.file_uploader("Photo", type=["png", "jpg", "jpeg", "gif", "webp"])
                save, cancel = form_buttons("Add")
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {"name": name, "bio": bio, "image": image}

                def submit():
                    form = parse_form(ContestantForm, data)
                    return unwrap(api.contests.add_contestant(contest_id, form.to_payload(), form.image))

                save_and_close(namespace, submit, "An error occurred", "Contestant added")

    render_delete_confirmation(
        namespace,
        lambda contestant: f'"{contestant.get("name", "")}"',
        lambda contestant: unwrap(api.contests.delete_contestant(contestant["_id"])),
        "An error occurred while deleting",
    )

    if not contestants:
        render_empty_state("No contestants in this contest yet.")
        return

    cols = st.columns(3)
    for index, contestant in enumerate(contestants):
        with cols[index % 3]:
            with st.container(border=True):
                render_image(resolve_asset_url(contestant.get("image")))
                st.markdown(f"#### {contestant.get('name', '')}")
                st.caption(f"{contestant.get('votes', 0)} votes")
                if contestant.get("bio"):
                    st.write(contestant["bio"])
                if st.button("Delete", key=f"{namespace}_delete_{contestant['_id']}", use_container_width=True):
                    request_delete(namespace, contestant)
                    st.rerun()


# =============================================================================
# Notifications
# =============================================================================


def render_notifications_page() -> None:
    namespace = "notifications"
    api = get_api()
    if render_page_header("Manage Notifications", action="New Notification", key=namespace):
        open_editor(namespace)
    render_messages(namespace)

    notifications = load_data(
        namespace,
        lambda: api.notifications.get_all(limit=get_settings().notifications_page_size),
        rejected="Failed to fetch notifications",
        failed="An error occurred while loading notifications",
    )

    state = editor_state(namespace)
    if state is not None:
        item = state["item"] or {}
        current_kind, _ = notification_media(item)
        with st.container(border=True):
            st.subheader("Edit Notification" if item else "New Notification")
            with st.form(f"{namespace}_form"):
                title = st.text_input("Title", value=item.get("title", ""))
                description = st.text_area("Description", value=item.get("description", ""))
                media_type = st.radio(
                    "Media",
                    ["thumbnail", "video"],
                    index=1 if current_kind == "video" else 0,
                    format_func=str.title,
                    horizontal=True,
                )
                media = st.file_uploader("Thumbnail image or video")
                if item:
                    st.caption("Leave empty to keep the current media.")
                save, cancel = form_buttons()
            if cancel:
                cancel_editor(namespace)
            if save:
                data = {
                    "title": title,
                    "description": description,
                    "media_type": media_type,
                    "media": media,
                    "is_edit": bool(item),
                }

                def submit():
                    form = parse_form(NotificationForm, data)
                    if item:
                        return unwrap(api.notifications.update(item["_id"], form.to_payload(), form.media))
                    return unwrap(api.notifications.create(form.to_payload(), form.media))

                save_and_close(namespace, submit, "An error occurred while saving the notification", "Notification saved")

    render_delete_confirmation(
        namespace,
        lambda notification: f'"{notification.get("title", "")}"',
        lambda notification: unwrap(api.notifications.delete(notification["_id"])),
        "An error occurred while deleting the notification",
    )

    if not notifications:
        render_empty_state("No notifications yet.")
        return

    for notification in notifications:
        with st.container(border=True):
            col1, col2 = st.columns([1, 2])
            with col1:
                render_media(*notification_media(notification))
            with col2:
                st.markdown(f"#### {notification.get('title', '')}")
                st.caption(format_readable_date(notification.get("createdAt")))
                st.write(notification.get("description", ""))
            edit_delete_buttons(namespace, notification)
