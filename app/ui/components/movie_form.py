"""
Add/update movie form component.
"""

import streamlit as st

from app.ui.utils.api_client import resolve_image_url
from app.ui.utils.form_validation import validate_movie_form


def render_movie_form(initial_data: dict | None = None) -> dict | None:
    """
    Render the add or update form.

    Args:
        initial_data: Movie to pre-fill (update mode); None for a new movie

    Returns:
        Dict with ``fields``, ``image`` and ``image_file`` if submitted and valid, else None.
    """
    is_edit = initial_data is not None
    initial_data = initial_data or {}
    current_image = initial_data.get("image", "")

    with st.form("movie_form"):
        st.subheader("Update Movie" if is_edit else "Add New Movie")
        title = st.text_input("Title", value=initial_data.get("title", ""), max_chars=255)
        director = st.text_input("Director", value=initial_data.get("director", ""), max_chars=255)
        year = st.number_input(
            "Year",
            min_value=1800,
            max_value=2100,
            value=initial_data.get("year", 2000),
            step=1,
        )
        genre = st.text_input("Genre", value=initial_data.get("genre", ""), max_chars=100)
        rating = st.number_input(
            "Rating",
            min_value=0.0,
            max_value=10.0,
            value=float(initial_data.get("rating", 5.0)),
            step=0.1,
            format="%.1f",
        )
        if current_image:
            st.image(resolve_image_url(current_image), width=200)
        uploaded = st.file_uploader("Poster image", type=["png", "jpg", "jpeg", "gif", "webp"])
        image_url = st.text_input(
            "...or image URL",
            value="" if current_image.startswith("/") else current_image,
        )
        submitted = st.form_submit_button("Update Movie" if is_edit else "Add Movie")

    if not submitted:
        return None

    image = image_url.strip() or current_image
    error = validate_movie_form(
        title, director, int(year), genre, float(rating), has_image=bool(uploaded or image)
    )
    if error:
        st.error(error)
        return None

    image_file = None
    if uploaded is not None:
        image_file = (uploaded.name, uploaded.getvalue(), uploaded.type)
    return {
        "fields": {
            "title": title.strip(),
            "director": director.strip(),
            "year": int(year),
            "genre": genre.strip(),
            "rating": round(float(rating), 1),
        },
        "image": image or None,
        "image_file": image_file,
    }
