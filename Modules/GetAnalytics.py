import streamlit as st
from Modules.MovieForm import round_half_up
from Modules.MovieStore import (
    get_all_movies,
    get_genre_stats,
    get_movie_stats,
    get_movies,
    get_top_movies_by_downloads,
    get_top_movies_by_views,
)


def percent_of(part, total):
    """Rounded percentage; an empty catalog reads as 0%."""
    if not total:
        return 0
    return round_half_up(part / total * 100)


def compute_analytics(movies):
    total_views = sum(m.get("view_count") or 0 for m in movies)
    total_downloads = sum(m.get("download_count") or 0 for m in movies)

    rated = [m for m in movies if (m.get("rating") or 0) > 0]
    average_rating = sum(m["rating"] for m in rated) / len(rated) if rated else 0

    return {
        "total_views": total_views,
        "total_downloads": total_downloads,
        "average_rating": round_half_up(average_rating, 1),
        "total_ratings": len(rated)
    }


@st.cache_data(ttl=60, show_spinner=False)
def load_all_movies(_db):
    return get_all_movies(_db)


def get_dashboard_data(db, all_movies=None):
    print("[INFO] Fetching dashboard data...")

    if all_movies is None:
        all_movies = get_all_movies(db)

    data = {
        "stats": get_movie_stats(db),
        "recent": get_movies(db, 10),
        "top_viewed": get_top_movies_by_views(db, 5),
        "top_downloaded": get_top_movies_by_downloads(db, 5),
        "analytics": compute_analytics(all_movies),
        "genres": get_genre_stats(db, all_movies)
    }

    print("[INFO] Dashboard data loaded successfully")
    return data
