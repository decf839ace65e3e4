"""
Streamlit main app for the Movie Catalog.

Run: streamlit run app/ui/app.py --server.port 8501
"""

import sys
from pathlib import Path

import requests
import streamlit as st

# Ensure project root in path
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from app.ui.utils import api_client
from app.ui.utils.session_state import (
    current_view,
    get_editing_movie_id,
    init_session_state,
    show_form,
    show_list,
    request_remove,
    get_pending_remove,
    clear_pending_remove,
)
from app.ui.components.movie_card import render_movie_card
from app.ui.components.movie_form import render_movie_form

st.set_page_config(
    page_title="Movie Collection",
    page_icon="🎬",
    layout="wide",
)

init_session_state()

st.title("🎬 Movie Collection")


def handle_edit(movie_id: int) -> None:
    show_form(movie_id)
    st.rerun()


def handle_remove(movie_id: int) -> None:
    request_remove(movie_id)
    st.rerun()


def confirm_remove(movie_id: int) -> None:
    clear_pending_remove()
    try:
        api_client.delete_movie(movie_id)
        st.toast("Movie removed")
    except requests.RequestException as e:
        st.error(f"Failed to remove movie: {api_client.get_error_message(e)}")
        return
    st.rerun()


def render_remove_confirmation(movie_id: int) -> None:
    st.warning("Are you sure you want to remove this movie?")
    col1, col2, _ = st.columns([1, 1, 4])
    with col1:
        if st.button("Yes, remove", key=f"confirm_remove_{movie_id}", type="primary"):
            confirm_remove(movie_id)
    with col2:
        if st.button("Cancel", key=f"cancel_remove_{movie_id}"):
            clear_pending_remove()
            st.rerun()


def render_list_view() -> None:
    if st.button("➕ Add Movie"):
        show_form(None)
        st.rerun()

    try:
        movies = api_client.list_movies()
    except requests.RequestException as e:
        st.error(f"API not available: {api_client.get_error_message(e)}")
        st.info("Start the API with: uvicorn app.api.main:app --host 0.0.0.0 --port 3001")
        return

    if not movies:
        st.info("No movies yet. Add your first one!")
        return

    pending_id = get_pending_remove()
    if pending_id is not None:
        render_remove_confirmation(pending_id)

    columns = st.columns(4)
    for index, movie in enumerate(movies):
        with columns[index % len(columns)]:
            render_movie_card(movie, on_edit=handle_edit, on_remove=handle_remove)


def render_form_view() -> None:
    movie_id = get_editing_movie_id()
    initial_data = None
    if movie_id is not None:
        try:
            initial_data = api_client.get_movie(movie_id)
        except requests.RequestException as e:
            st.error(f"Failed to load movie: {api_client.get_error_message(e)}")
            show_list()
            return

    if st.button("← Back"):
        show_list()
        st.rerun()

    submission = render_movie_form(initial_data)
    if submission is None:
        return

    try:
        if movie_id is None:
            api_client.create_movie(**submission)
        else:
            api_client.update_movie(movie_id, **submission)
    except requests.RequestException as e:
        st.error(f"Failed to save movie: {api_client.get_error_message(e)}")
        return

    show_list()
    st.rerun()


if current_view() == "form":
    render_form_view()
else:
    render_list_view()
