"""Status card shown after submission."""

from __future__ import annotations

import streamlit as st

from models.intake import ApplicationStatus, StatusCode

STATUS_BADGES: dict[StatusCode, tuple[str, str]] = {
    StatusCode.PENDING: ("orange", "Pending"),
    StatusCode.REVIEWING: ("blue", "Under Review"),
    StatusCode.APPROVED: ("green", "Approved"),
    StatusCode.REJECTED: ("red", "Rejected"),
}


def status_badge(status: StatusCode) -> str:
    color, label = STATUS_BADGES[status]
    return f":{color}-background[{label}]"


def render_status_tracker(status: ApplicationStatus) -> None:
    with st.container(border=True):
        st.markdown(f"**Application ID:** `{status.id}`")
        st.markdown(f"**Status:** {status_badge(status.status)}")
        st.caption(f"Last updated: {status.last_updated.strftime('%Y-%m-%d %H:%M UTC')}")
        if status.comment:
            st.write(status.comment)


__all__ = ["STATUS_BADGES", "render_status_tracker", "status_badge"]
