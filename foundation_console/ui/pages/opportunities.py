"""
Opportunity admin pages: scholarship listings and internships.
"""

from __future__ import annotations

import logging
from typing import Any

import streamlit as st

from foundation_console.api import unwrap
from foundation_console.assets import resolve_asset_url
from foundation_console.config import INTERNSHIP_STATUS_COLORS, get_settings
from foundation_console.domain import (
    filter_scholarships,
    format_deadline,
    is_deadline_passed,
    parse_timestamp,
    sort_scholarships,
)
from foundation_console.forms import InternshipForm, ScholarshipForm, parse_form
from foundation_console.ui.components import (
    load_data,
    render_back_button,
    render_delete_confirmation,
    render_empty_state,
    render_image,
    render_messages,
    render_page_header,
    run_action,
    status_badge,
)
from foundation_console.ui.session import flash, get_api, navigate, query_param, request_delete

logger = logging.getLogger(__name__)

IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]


# =============================================================================
# Scholarships
# =============================================================================


def render_manage_scholarships_page() -> None:
    namespace = "manage_scholarships"
    api = get_api()
    if render_page_header(
        "Manage Scholarships", "Create, edit, and publish scholarship opportunities.", "Add Scholarship", key=namespace
    ):
        navigate("upload-scholarship")
    render_messages(namespace)

    scholarships = sort_scholarships(
        load_data(
            namespace,
            api.scholarships.get_all,
            rejected="Failed to fetch scholarships",
            failed="An error occurred while fetching scholarships",
        )
    )

    search = st.text_input("Search", placeholder="Search by organization, location or description")
    visible = filter_scholarships(scholarships, search)
    st.markdown(f"Showing **{len(visible)}** of {len(scholarships)} Listings")

    render_delete_confirmation(
        namespace,
        lambda item: f"the scholarship listing **{item.get('organizationName', '')}**",
        lambda item: unwrap(api.scholarships.delete(item["_id"])),
        "An unexpected error occurred while deleting the scholarship.",
    )

    if not visible:
        render_empty_state("No scholarships match your search." if scholarships else "No scholarships listed yet.")
        return

    for item in visible:
        closed = is_deadline_passed(item.get("deadline"))
        with st.container(border=True):
            col1, col2, col3 = st.columns([1, 3, 1])
            with col1:
                images = item.get("images") or []
                render_image(resolve_asset_url(images[0]) if images else None)
            with col2:
                st.markdown(f"#### {item.get('organizationName', '')}")
                st.markdown(status_badge("Closed" if closed else "Open", "gray" if closed else "green"))
                st.caption(f"{item.get('location', '')} · Deadline: {format_deadline(item.get('deadline'))}")
                st.write(item.get("description", ""))
            with col3:
                if item.get("websiteLink"):
                    st.link_button("Website", item["websiteLink"], use_container_width=True)
                if st.button("Edit", key=f"{namespace}_edit_{item['_id']}", use_container_width=True):
                    navigate("edit-scholarship", scholarship_id=item["_id"])
                if st.button("Delete", key=f"{namespace}_delete_{item['_id']}", use_container_width=True):
                    request_delete(namespace, item)
                    st.rerun()


def _render_existing_images(namespace: str, scholarship: dict[str, Any]) -> None:
    """Stored images of a listing, each with its own remove button."""
    api = get_api()
    images = scholarship.get("images") or []
    if not images:
        return
    st.markdown("**Current images**")
    cols = st.columns(4)
    for index, image in enumerate(images):
        with cols[index % 4]:
            render_image(resolve_asset_url(image))
            if st.button("Remove", key=f"{namespace}_remove_image_{index}", use_container_width=True):
                ok, _ = run_action(
                    namespace,
                    lambda: unwrap(api.scholarships.delete_image(scholarship["_id"], image)),
                    "Failed to delete image",
                )
                if ok:
                    flash("Image removed")
                st.rerun()


def render_upload_scholarship_page() -> None:
    """Create a listing, or edit one when ``scholarship_id`` is in the URL."""
    namespace = "upload_scholarship"
    api = get_api()
    scholarship_id = query_param("scholarship_id")
    render_back_button("Back to Scholarships", "manage-scholarships", key=f"{namespace}_back")
    st.title("Edit Scholarship" if scholarship_id else "Upload Scholarship")
    render_messages(namespace)

    item: dict[str, Any] = {}
    if scholarship_id:
        item = load_data(
            namespace,
            lambda: api.scholarships.get_by_id(scholarship_id),
            rejected="Failed to load scholarship",
            failed="An error occurred while loading the scholarship",
            default={},
        )
        if not item:
            return
        _render_existing_images(namespace, item)

    existing = len(item.get("images") or [])
    limit = get_settings().max_scholarship_images
    deadline = parse_timestamp(item.get("deadline"))

    with st.form(f"{namespace}_form"):
        organization_name = st.text_input("Organization Name", value=item.get("organizationName", ""))
        location = st.text_input("Location", value=item.get("location", ""))
        website_link = st.text_input("Website Link", value=item.get("websiteLink", ""), placeholder="https://")
        deadline_value = st.date_input("Deadline", value=deadline.date() if deadline else None)
        description = st.text_area("Description", value=item.get("description", ""), height=160)
        images = st.file_uploader(
            f"Images ({existing} of {limit} used)", type=IMAGE_TYPES, accept_multiple_files=True
        )
        submitted = st.form_submit_button("Save Changes" if item else "Upload Scholarship", type="primary")

    if not submitted:
        return

    data = {
        "organization_name": organization_name,
        "location": location,
        "website_link": website_link,
        "deadline": deadline_value,
        "description": description,
        "images": list(images or []),
        "existing_image_count": existing,
    }

    def submit():
        form = parse_form(ScholarshipForm, data)
        if item:
            return unwrap(api.scholarships.update(item["_id"], form.to_payload(), form.images))
        return unwrap(api.scholarships.upload(form.to_payload(), form.images))

    ok, _ = run_action(namespace, submit, "Failed to upload scholarship")
    if not ok:
        st.rerun()
    flash("Scholarship updated successfully!" if item else "Scholarship uploaded successfully!")
    navigate("manage-scholarships")


# =============================================================================
# Internships
# =============================================================================


def render_manage_internships_page() -> None:
    namespace = "manage_internships"
    api = get_api()
    if render_page_header("Manage Internships", "Post and manage internships/job openings.", "Add Internship", key=namespace):
        navigate("upload-internship")
    render_messages(namespace)

    internships = load_data(
        namespace,
        api.internships.get_all,
        rejected="Failed to fetch internships",
        failed="An error occurred while fetching internships",
    )

    render_delete_confirmation(
        namespace,
        lambda item: f"**{item.get('title', '')}** at {item.get('company', '')}",
        lambda item: unwrap(api.internships.delete(item["_id"])),
        "An error occurred while deleting the internship",
    )

    if not internships:
        render_empty_state("No internships posted yet.")
        return

    for item in internships:
        status = item.get("status") or "Active"
        with st.container(border=True):
            col1, col2, col3 = st.columns([1, 3, 1])
            with col1:
                render_image(resolve_asset_url(item.get("image")))
            with col2:
                st.markdown(f"#### {item.get('title', '')}")
                st.markdown(status_badge(status, INTERNSHIP_STATUS_COLORS.get(status, "gray")))
                st.caption(" · ".join(part for part in (item.get("company"), item.get("location"), item.get("duration")) if part))
                st.write(item.get("description", ""))
            with col3:
                if item.get("applicationLink"):
                    st.link_button("Apply", item["applicationLink"], use_container_width=True)
                if st.button("Delete", key=f"{namespace}_delete_{item['_id']}", use_container_width=True):
                    request_delete(namespace, item)
                    st.rerun()


def render_upload_internship_page() -> None:
    namespace = "upload_internship"
    api = get_api()
    render_back_button("Back to Internships", "manage-internships", key=f"{namespace}_back")
    st.title("Upload Internship")
    render_messages(namespace)

    with st.form(f"{namespace}_form"):
        col1, col2 = st.columns(2)
        with col1:
            title = st.text_input("Title")
            location = st.text_input("Location")
        with col2:
            company = st.text_input("Company")
            duration = st.text_input("Duration", placeholder="e.g. 3 months")
        application_link = st.text_input("Application Link", placeholder="https://")
        description = st.text_area("Description", height=160)
        image = st.file_uploader("Image (optional)", type=IMAGE_TYPES)
        submitted = st.form_submit_button("Upload Internship", type="primary")

    if not submitted:
        return

    data = {
        "title": title,
        "company": company,
        "location": location,
        "duration": duration,
        "description": description,
        "application_link": application_link,
        "image": image,
    }

    def submit():
        form = parse_form(InternshipForm, data)
        return unwrap(api.internships.upload(form.to_payload(), form.image))

    ok, _ = run_action(namespace, submit, "An error occurred. Please try again.")
    if not ok:
        st.rerun()
    flash("Internship uploaded successfully!")
    navigate("manage-internships")
