"""
Client-side checks for the movie form.

The API only requires fields on create; the rating range is enforced here.
"""

MIN_RATING = 1.0
MAX_RATING = 10.0


def validate_movie_form(
    title: str,
    director: str,
    year: int | None,
    genre: str,
    rating: float | None,
    has_image: bool,
) -> str | None:
    """
    Check a submitted movie form.

    Returns:
        An error message, or None if the form is valid.
    """
    if not title.strip() or not director.strip() or not genre.strip():
        return "Please fill in all fields and upload an image"
    if not year or rating is None or not has_image:
        return "Please fill in all fields and upload an image"
    if rating < MIN_RATING or rating > MAX_RATING:
        return "Rating must be between 1 and 10"
    return None
