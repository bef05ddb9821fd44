import datetime
import math
from urllib.parse import urlparse

AVAILABLE_GENRES = [
    "Action", "Comedy", "Horror", "Drama", "Romance",
    "Sci-Fi", "Thriller", "Adventure", "Fantasy", "Animation",
    "Documentary", "Crime", "Mystery", "War", "Western",
    "Nollywood", "Bollywood", "Asian"
]

QUALITY_OPTIONS = ["480p", "720p", "1080p", "1440p", "4K"]

MIN_RELEASE_YEAR = 1900


class MovieValidationError(ValueError):
    pass


def empty_movie():
    return {
        "title": "",
        "description": "",
        "ai_summary": "",
        "genre": [],
        "poster_url": "",
        "quality_options": [],
        "premium_only": False,
        "download_enabled": True,
        "view_count": 0,
        "rating": 0,
        "download_count": 0,
        "is_featured": False,
        "is_trending": False,
        "tags": [],
        "release_year": "",
        "duration": "",
        "video_url": ""
    }


def clamp_rating(value):
    """Ratings are stored on a 0-10 scale."""
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return 0.0
    if rating != rating:  # NaN
        return 0.0
    return min(max(rating, 0.0), 10.0)


def non_negative_int(value):
    try:
        return max(int(float(value)), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def round_half_up(value, decimals=0):
    """Rounds halves up. Only meant for non-negative values."""
    factor = 10 ** decimals
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if decimals == 0 else rounded


def split_tags(text, sep=","):
    if not text:
        return []
    return [t.strip() for t in text.split(sep) if t.strip()]


def is_valid_url(value):
    parsed = urlparse(value.strip())
    return bool(parsed.scheme) and bool(parsed.netloc)


def _parse_int(value):
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _strip_list(values):
    return [v for v in (values or []) if str(v).strip() != ""]


def validate_movie(form, has_poster_file=False, current_year=None):
    """
    Checks a submitted movie form and returns a cleaned copy.
    Raises MovieValidationError with the first problem found.
    """
    if current_year is None:
        current_year = datetime.date.today().year

    if not str(form.get("title", "")).strip():
        raise MovieValidationError("Title is required")
    if not str(form.get("description", "")).strip():
        raise MovieValidationError("Description is required")
    if not _strip_list(form.get("genre")):
        raise MovieValidationError("At least one genre is required")
    if not str(form.get("release_year", "")).strip():
        raise MovieValidationError("Release year is required")
    if not str(form.get("duration", "")).strip():
        raise MovieValidationError("Duration is required")
    if not str(form.get("video_url", "")).strip():
        raise MovieValidationError("Video URL is required")

    release_year = _parse_int(form["release_year"])
    if release_year is None or release_year < MIN_RELEASE_YEAR or release_year > current_year:
        raise MovieValidationError(
            f"Please enter a valid release year between {MIN_RELEASE_YEAR} and {current_year}"
        )

    duration = _parse_int(form["duration"])
    if duration is None or duration < 1:
        raise MovieValidationError("Duration must be a positive number")

    if not is_valid_url(form["video_url"]):
        raise MovieValidationError("Please enter a valid video URL")

    poster_url = str(form.get("poster_url", "")).strip()
    if not has_poster_file:
        if not poster_url:
            raise MovieValidationError("Poster image is required (either upload a file or provide a URL)")
        if not is_valid_url(poster_url):
            raise MovieValidationError("Please enter a valid poster URL")

    movie = dict(form)
    movie["genre"] = _strip_list(form.get("genre"))
    movie["quality_options"] = _strip_list(form.get("quality_options"))
    movie["tags"] = _strip_list(form.get("tags"))
    movie["release_year"] = str(release_year)
    movie["duration"] = str(duration)
    movie["rating"] = clamp_rating(form.get("rating", 0))
    movie["view_count"] = non_negative_int(form.get("view_count", 0))
    movie["download_count"] = non_negative_int(form.get("download_count", 0))
    return movie


def clean_updates(updates):
    # Appwrite rejects its own metadata ($id, $createdAt, ...) in update payloads
    return {key: value for key, value in updates.items() if not key.startswith("$")}


def add_form_key(state):
    """A new key gives Streamlit a fresh, empty form."""
    state.setdefault("add_movie_form_version", 0)
    return f"add_movie_form_{state['add_movie_form_version']}"


def mark_movie_added(state, title):
    state["add_movie_form_version"] = state.get("add_movie_form_version", 0) + 1
    state["add_movie_success"] = title


def pop_added_title(state):
    return state.pop("add_movie_success", None)
