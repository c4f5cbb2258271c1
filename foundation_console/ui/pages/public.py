"""
Public pages: home, about, scholarship awards and voting.
"""

from __future__ import annotations

import logging

import streamlit as st

from foundation_console import config, domain
from foundation_console.assets import resolve_asset_url
from foundation_console.exceptions import FoundationConsoleError
from foundation_console.ui.components import (
    load_data,
    render_empty_state,
    render_hero,
    render_image,
    render_messages,
    render_section_title,
    render_stat,
)
from foundation_console.ui.session import flash, get_api, get_auth, navigate, set_error
from foundation_console.voting import VotingBoard

logger = logging.getLogger(__name__)


def render_home_page() -> None:
    settings = config.get_settings()
    render_hero(settings.site_name, "Promoting academic excellence and indigenous development initiatives since 2000.")

    cards = (
        ("About Us", "Our mission, history and the people behind the foundation.", "about"),
        ("Scholarships", "Discover available scholarships and funding opportunities.", "scholarship-awards"),
        ("Voting", "Cast your vote for your favourite contestants.", "voting"),
    )
    cols = st.columns(len(cards))
    for col, (title, description, page) in zip(cols, cards):
        with col:
            with st.container(border=True):
                st.markdown(f"### {title}")
                st.write(description)
                if st.button("Open", key=f"home_{page}", use_container_width=True):
                    navigate(page)

    auth = get_auth()
    if auth.is_admin:
        st.divider()
        if st.button("Go to the admin dashboard", type="primary"):
            navigate("dashboard")


def render_about_page() -> None:
    render_hero("About Us", "Tenenghang Foundation for Indigenous Development Initiatives")

    render_section_title("Our Mission")
    st.write(config.FOUNDATION_MISSION)

    render_section_title("Our Objectives")
    for objective in config.FOUNDATION_OBJECTIVES:
        st.markdown(f"- {objective}")

    render_section_title("Our History")
    st.write(config.FOUNDATION_HISTORY)

    render_section_title("What We Do")
    cols = st.columns(len(config.FOUNDATION_ACTIVITIES))
    for col, activity in zip(cols, config.FOUNDATION_ACTIVITIES):
        with col:
            with st.container(border=True):
                st.write(activity)

    render_section_title("Our Founder")
    with st.container(border=True):
        st.markdown(f"#### {config.FOUNDER_NAME}")
        st.caption("Founder & Executive President")
        st.write(config.FOUNDER_BIO)

    render_section_title("Management Team")
    cols = st.columns(4)
    for index, member in enumerate(config.MANAGEMENT_TEAM):
        with cols[index % 4]:
            with st.container(border=True):
                st.markdown(f"**{member}**")


def render_scholarship_awards_page() -> None:
    namespace = "scholarship_awards"
    render_hero("Scholarship Opportunities", "Discover available scholarships and funding opportunities")
    render_messages(namespace)

    api = get_api()
    scholarships = load_data(
        namespace,
        api.scholarships.get_all,
        rejected="Failed to load scholarships",
        failed="An error occurred while loading scholarships",
    )
    if not scholarships:
        st.markdown("### No Scholarships Available")
        st.caption("Check back later for available scholarship opportunities")
        return

    cols = st.columns(2)
    for index, scholarship in enumerate(scholarships):
        with cols[index % 2]:
            with st.container(border=True):
                images = scholarship.get("images") or []
                if images:
                    render_image(resolve_asset_url(images[0]))
                st.markdown(f"### {scholarship.get('organizationName', '')}")
                st.caption(f"📍 {scholarship.get('location', '')}")
                st.write(scholarship.get("description") or "")
                st.caption(f"Deadline: {domain.format_deadline(scholarship.get('deadline'))}")
                if scholarship.get("websiteLink"):
                    st.link_button("Visit Website", scholarship["websiteLink"])


# =============================================================================
# Voting
# =============================================================================


def _voting_board() -> VotingBoard:
    """The board survives reruns and is rebuilt when the signed-in user changes."""
    user_id = (get_auth().user or {}).get("_id")
    board = st.session_state.get("_voting_board")
    if board is None or st.session_state.get("_voting_board_user") != user_id:
        board = VotingBoard(get_api(), signed_in=user_id is not None)
        board.load()
        st.session_state["_voting_board"] = board
        st.session_state["_voting_board_user"] = user_id
    return board


def render_voting_page() -> None:
    namespace = "voting"
    render_hero("Vote for Your Favorite", "Support contestants by casting your vote in active contests")

    board = _voting_board()
    error = board.take_error()
    if error:
        set_error(namespace, error)
    render_messages(namespace)

    if st.button("Refresh", key="voting_refresh"):
        board.load()
        st.rerun()

    if not board.contests:
        render_empty_state("No contests available at the moment.")
        return

    st.markdown("#### Select a contest")
    chip_cols = st.columns(min(len(board.contests), 4))
    for index, contest in enumerate(board.contests):
        with chip_cols[index % len(chip_cols)]:
            selected = contest.get("_id") == board.selected_id
            label = contest.get("name", "Contest")
            if not contest.get("isActive"):
                label += " (inactive)"
            if st.button(
                label,
                key=f"contest_{contest['_id']}",
                type="primary" if selected else "secondary",
                use_container_width=True,
            ):
                try:
                    board.select(contest["_id"])
                except FoundationConsoleError as exc:
                    set_error(namespace, exc.user_message("Failed to load contest"))
                st.rerun()

    if board.selected is None:
        render_empty_state("Select a contest to see its contestants.")
        return

    contest = board.selected
    st.divider()
    st.markdown(f"## {contest.get('name', '')}")
    if contest.get("description"):
        st.write(contest["description"])

    if board.stats:
        col1, col2, col3 = st.columns(3)
        with col1:
            render_stat("Total Votes", board.stats.get("totalVotes", 0))
        with col2:
            render_stat("Contestants", board.stats.get("totalContestants", 0))
        with col3:
            render_stat("Leading Votes", board.leading_votes())

    if not board.contestants:
        render_empty_state("No contestants in this contest yet.")
        return

    auth = get_auth()
    cols = st.columns(3)
    for index, contestant in enumerate(board.contestants):
        with cols[index % 3]:
            with st.container(border=True):
                image = contestant.get("image")
                render_image(resolve_asset_url(image))
                st.markdown(f"### {contestant.get('name', '')}")
                if contestant.get("bio"):
                    st.write(contestant["bio"])
                st.markdown(f"**{contestant.get('voteCount') or 0}** votes")

                voted = board.has_voted_for(contestant)
                if st.button(
                    "VOTED" if voted else "VOTE",
                    key=f"vote_{contestant['_id']}",
                    type="primary",
                    # Guests keep the button so a click can send them to login
                    disabled=voted or (auth.is_authenticated and not board.can_vote(contestant)),
                    use_container_width=True,
                ):
                    if not auth.is_authenticated:
                        navigate("login")
                    try:
                        flash(board.cast_vote(contestant))
                    except FoundationConsoleError as exc:
                        logger.info("Vote not cast: %s", exc)
                        flash(exc.user_message("Failed to cast vote"), "error")
                    st.rerun()
