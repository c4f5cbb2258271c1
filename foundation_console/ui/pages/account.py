"""
Account pages: login, register, profile, edit profile, change password.
"""

from __future__ import annotations

import logging

import streamlit as st

from foundation_console.api import unwrap
from foundation_console.domain import avatar_url
from foundation_console.forms import (
    LoginForm,
    PasswordChangeForm,
    ProfileForm,
    RegistrationForm,
    parse_form,
)
from foundation_console.ui.components import (
    load_data,
    render_messages,
    render_stat,
    run_action,
)
from foundation_console.ui.session import flash, get_api, get_auth, navigate, set_error

logger = logging.getLogger(__name__)


def _after_sign_in() -> None:
    navigate("dashboard" if get_auth().is_admin else "home")


def render_login_page() -> None:
    namespace = "login"
    st.title("Login")
    st.caption("Sign in to access the admin panel")
    render_messages(namespace)

    with st.form("login_form"):
        email = st.text_input("Email Address")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", type="primary", use_container_width=True)

    if submitted:
        ok, form = run_action(
            namespace,
            lambda: parse_form(LoginForm, {"email": email, "password": password}),
            "Login failed",
        )
        if ok:
            success, message = get_auth().login(get_api(), form.email, form.password)
            if success:
                _after_sign_in()
            set_error(namespace, message)
            st.rerun()

    if st.button("Don't have an account? Sign Up"):
        navigate("register")


def render_register_page() -> None:
    namespace = "register"
    st.title("Create Account")
    render_messages(namespace)

    with st.form("register_form"):
        name = st.text_input("Full Name")
        email = st.text_input("Email Address")
        password = st.text_input("Password", type="password")
        confirm_password = st.text_input("Confirm Password", type="password")
        submitted = st.form_submit_button("Sign Up", type="primary", use_container_width=True)

    if submitted:
        data = {"name": name, "email": email, "password": password, "confirm_password": confirm_password}
        ok, form = run_action(namespace, lambda: parse_form(RegistrationForm, data), "Registration failed")
        if ok:
            success, message = get_auth().register(get_api(), form.to_payload())
            if success:
                _after_sign_in()
            set_error(namespace, message)
            st.rerun()

    if st.button("Already have an account? Sign In"):
        navigate("login")


def render_profile_page() -> None:
    namespace = "profile"
    auth = get_auth()
    api = get_api()

    st.title("My Profile")
    render_messages(namespace)

    profile = load_data(
        namespace,
        api.auth.get_profile,
        rejected="Failed to load profile",
        failed="Failed to load profile",
        key="user",
        default={},
    )
    if profile:
        auth.update_user(profile)
    # Cached user when the backend is unavailable
    user = profile or auth.user or {}

    stats = load_data(
        namespace,
        api.auth.get_profile_stats,
        rejected="Failed to load profile",
        failed="Failed to load profile",
        key="stats",
        default={},
    )

    col1, col2 = st.columns([1, 2])
    with col1:
        with st.container(border=True):
            st.image(avatar_url(user), width=160)
            st.markdown(f"### {user.get('name') or 'User'}")
            st.caption(user.get("email") or "")
            if user.get("role"):
                st.markdown(f'<span class="role-badge">{user["role"].upper()}</span>', unsafe_allow_html=True)
            st.write("")
            if st.button("Edit Profile", use_container_width=True):
                navigate("profile-edit")
            if st.button("Change Password", use_container_width=True):
                navigate("profile-change-password")
            if st.button("Logout", use_container_width=True):
                auth.logout()
                navigate("login")

    with col2:
        with st.container(border=True):
            st.markdown("#### Profile Information")
            info1, info2 = st.columns(2)
            with info1:
                st.caption("School")
                st.write(user.get("school") or "Not set")
                st.caption("Level")
                st.write(user.get("level") or "Not set")
            with info2:
                st.caption("Department")
                st.write(user.get("department") or "Not set")
                st.caption("Email")
                st.write(user.get("email") or "Not set")

        if stats:
            st.markdown("#### My Contributions")
            s1, s2, s3 = st.columns(3)
            with s1:
                render_stat("Questions", stats.get("questions") or 0)
            with s2:
                render_stat("Solutions", stats.get("solutions") or 0)
            with s3:
                render_stat("Total", stats.get("total") or 0)


def render_edit_profile_page() -> None:
    namespace = "profile_edit"
    auth = get_auth()
    user = auth.user or {}

    st.title("Edit Profile")
    render_messages(namespace)

    with st.form("profile_form"):
        st.image(avatar_url(user), width=120)
        image = st.file_uploader("Profile Picture", type=["png", "jpg", "jpeg", "gif", "webp"])
        name = st.text_input("Full Name", value=user.get("name") or "")
        school = st.text_input("School", value=user.get("school") or "")
        department = st.text_input("Department", value=user.get("department") or "")
        level = st.text_input("Level", value=user.get("level") or "")
        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("Save Changes", type="primary", use_container_width=True)
        with col2:
            cancelled = st.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        navigate("profile")

    if submitted:
        data = {"name": name, "school": school, "department": department, "level": level, "image": image}

        def save():
            form = parse_form(ProfileForm, data)
            return unwrap(get_api().auth.update_profile(form.to_payload(), form.image), key="user")

        ok, updated = run_action(namespace, save, "Failed to update profile")
        if ok:
            auth.update_user(updated)
            flash("Profile updated successfully!")
            navigate("profile")
        st.rerun()


def render_change_password_page() -> None:
    namespace = "change_password"
    st.title("Change Password")
    render_messages(namespace)

    with st.form("password_form"):
        current_password = st.text_input("Current Password", type="password")
        new_password = st.text_input("New Password", type="password")
        confirm_password = st.text_input("Confirm New Password", type="password")
        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("Change Password", type="primary", use_container_width=True)
        with col2:
            cancelled = st.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        navigate("profile")

    if submitted:
        data = {
            "current_password": current_password,
            "new_password": new_password,
            "confirm_password": confirm_password,
        }

        def change():
            form = parse_form(PasswordChangeForm, data)
            return unwrap(get_api().auth.update_password(form.current_password, form.new_password), key="message")

        ok, _ = run_action(namespace, change, "Failed to change password")
        if ok:
            flash("Password changed successfully!")
            navigate("profile")
        st.rerun()
