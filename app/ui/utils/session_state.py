"""
Session state helpers for Streamlit.

Only view state lives here; movie data is always re-fetched from the API.
"""

import streamlit as st


def get_editing_movie_id() -> int | None:
    """ID of the movie being edited, or None when adding."""
    return st.session_state.get("editing_movie_id")


def show_form(movie_id: int | None = None) -> None:
    """Switch to the add form, or the update form for movie_id."""
    st.session_state["view"] = "form"
    st.session_state["editing_movie_id"] = movie_id


def show_list() -> None:
    """Switch back to the movie grid."""
    st.session_state["view"] = "list"
    st.session_state["editing_movie_id"] = None


def current_view() -> str:
    return st.session_state.get("view", "list")


def init_session_state() -> None:
    """Initialize session state keys if not present."""
    if "view" not in st.session_state:
        st.session_state["view"] = "list"
    if "editing_movie_id" not in st.session_state:
        st.session_state["editing_movie_id"] = None
    if "pending_remove_id" not in st.session_state:
        st.session_state["pending_remove_id"] = None


def request_remove(movie_id: int, state=None) -> None:
    """Ask for confirmation before movie_id is removed."""
    state = st.session_state if state is None else state
    state["pending_remove_id"] = movie_id


def get_pending_remove(state=None) -> int | None:
    """ID of the movie awaiting remove confirmation, if any."""
    state = st.session_state if state is None else state
    return state.get("pending_remove_id")


def clear_pending_remove(state=None) -> None:
    state = st.session_state if state is None else state
    state["pending_remove_id"] = None
