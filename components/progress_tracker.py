"""Progress tracker shown above every wizard step."""

from __future__ import annotations

import html
from typing import Sequence

import streamlit as st

_STYLE_STATE_KEY = "_progress_tracker_styles_v1"


def _inject_tracker_styles() -> None:
    """Inject the tracker styling once per session."""

    if st.session_state.get(_STYLE_STATE_KEY):
        return

    st.session_state[_STYLE_STATE_KEY] = True
    st.markdown(
        """
        <style>
        .progress-tracker {
            display: flex;
            flex-wrap: wrap;
            gap: 0.5rem;
            font-size: 0.9rem;
            margin: 0.25rem 0 1rem;
        }

        .progress-tracker span {
            padding: 0.3rem 0.8rem;
            border-radius: 999px;
            border: 1px solid rgba(120, 120, 120, 0.35);
            color: rgba(120, 120, 120, 0.9);
        }

        .progress-tracker span[data-state="done"] {
            border-color: rgba(59, 130, 246, 0.6);
        }

        .progress-tracker span[data-state="current"] {
            border-color: rgba(59, 130, 246, 0.9);
            box-shadow: 0 0 0 2px rgba(59, 130, 246, 0.3);
            font-weight: 600;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def step_state(index: int, current: int) -> str:
    if index < current:
        return "done"
    if index == current:
        return "current"
    return "upcoming"


def build_tracker_segments(current: int, labels: Sequence[str]) -> list[str]:
    """Return HTML segments for each step label."""

    icons = {"done": "✔︎", "current": "➤", "upcoming": "•"}
    segments: list[str] = []
    for idx, label in enumerate(labels):
        status = step_state(idx, current)
        text = f"{icons[status]} {idx + 1}. {label}"
        segments.append(f"<span data-state='{status}'>{html.escape(text)}</span>")
    return segments


def render_progress_tracker(current: int, labels: Sequence[str]) -> None:
    """Render the step labels with the active one highlighted."""

    if not labels:
        return
    _inject_tracker_styles()
    st.progress((current + 1) / len(labels))
    st.markdown(
        f"<div class='progress-tracker'>{''.join(build_tracker_segments(current, labels))}</div>",
        unsafe_allow_html=True,
    )


__all__ = ["build_tracker_segments", "render_progress_tracker", "step_state"]
