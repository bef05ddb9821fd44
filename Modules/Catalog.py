import pandas as pd

SORT_OPTIONS = {
    "newest": "Newest Added",
    "oldest": "Oldest Added",
    "title-asc": "Title (A-Z)",
    "title-desc": "Title (Z-A)",
    "year-new": "Release Year (Newest)",
    "year-old": "Release Year (Oldest)",
}

TABLE_COLUMNS = ["title", "genre", "release_year", "rating", "view_count", "download_count",
                 "is_featured", "is_trending", "premium_only"]


def filter_movies(movies, search="", genre="All"):
    term = (search or "").lower()

    def matches(movie):
        matches_search = term in (movie.get("title") or "").lower() or \
            term in (movie.get("description") or "").lower()
        genres = movie.get("genre")
        matches_genre = genre == "All" or (isinstance(genres, list) and genre in genres)
        return matches_search and matches_genre

    return [m for m in movies if matches(m)]


def _year(movie):
    try:
        return int(movie.get("release_year") or 0)
    except (TypeError, ValueError):
        return 0


def sort_movies(movies, sort_by):
    # ISO-8601 timestamps from Appwrite sort correctly as strings
    if sort_by == "newest":
        return sorted(movies, key=lambda m: m.get("$createdAt", ""), reverse=True)
    if sort_by == "oldest":
        return sorted(movies, key=lambda m: m.get("$createdAt", ""))
    if sort_by == "title-asc":
        return sorted(movies, key=lambda m: (m.get("title") or "").lower())
    if sort_by == "title-desc":
        return sorted(movies, key=lambda m: (m.get("title") or "").lower(), reverse=True)
    if sort_by == "year-new":
        return sorted(movies, key=_year, reverse=True)
    if sort_by == "year-old":
        return sorted(movies, key=_year)
    return list(movies)


def movies_to_df(movies, columns=TABLE_COLUMNS):
    """Flattens movie documents for st.dataframe, genre lists joined with commas."""
    if not movies:
        return pd.DataFrame(columns=["id"] + columns)

    rows = []
    for m in movies:
        row = {"id": m.get("$id")}
        for col in columns:
            value = m.get(col)
            row[col] = ", ".join(value) if isinstance(value, list) else value
        rows.append(row)
    return pd.DataFrame(rows)
