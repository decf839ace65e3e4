"""
Movie display card component.
"""

import streamlit as st

from app.ui.utils.api_client import resolve_image_url


def render_movie_card(movie: dict, on_edit: callable, on_remove: callable) -> None:
    """
    Render a movie card with Update and Remove buttons.

    Args:
        movie: Movie record from the API
        on_edit: Callback(movie_id) when Update is clicked
        on_remove: Callback(movie_id) when Remove is clicked
    """
    movie_id = movie["id"]
    with st.container(border=True):
        st.image(resolve_image_url(movie["image"]), use_container_width=True)
        st.markdown(f"**{movie['title']}**  ★ {movie['rating']}")
        st.caption(movie["director"])
        col1, col2 = st.columns(2)
        with col1:
            st.caption("Year")
            st.write(movie["year"])
        with col2:
            st.caption("Genre")
            st.write(movie["genre"])
        col1, col2 = st.columns(2)
        with col1:
            if st.button("✏️ Update", key=f"edit_{movie_id}", use_container_width=True):
                on_edit(movie_id)
        with col2:
            if st.button("🗑️ Remove", key=f"remove_{movie_id}", use_container_width=True):
                on_remove(movie_id)
