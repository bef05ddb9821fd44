import json

import streamlit as st
from appwrite.exception import AppwriteException
from Database.Appwrite_Connection import Connect
from Modules.auth import login_blocker
from Modules.Catalog import SORT_OPTIONS, filter_movies, movies_to_df, sort_movies
from Modules.Drive import get_google_drive_embed_url, get_google_drive_stream_url
from Modules.GetAnalytics import load_all_movies
from Modules.Menu import global_sidebar
from Modules.MovieForm import AVAILABLE_GENRES, QUALITY_OPTIONS, clamp_rating, non_negative_int, split_tags
from Modules.MovieStore import delete_movie, get_movies_paginated, search_movies, update_movie, upload_poster
from Modules.theme_config import genre_tags

st.set_page_config(page_title="Movies", page_icon="🎞", layout="wide")

# protect the page
login_blocker()

PAGE_SIZE = 50


def init_page_state():
    for key, value in {"movies_page": 1, "edit_id": None, "delete_id": None}.items():
        if key not in st.session_state:
            st.session_state[key] = value


def show_details(movie):
    col1, col2 = st.columns([1, 3])
    with col1:
        if movie.get("poster_url"):
            st.image(movie["poster_url"], use_container_width=True)
    with col2:
        st.markdown(f"Genres: {genre_tags(movie.get('genre'))}", unsafe_allow_html=True)
        st.markdown(f"**Released:** {movie.get('release_year') or 'N/A'} | "
                    f"**Duration:** {movie.get('duration') or 'N/A'} mins | "
                    f"**Rating:** {movie.get('rating') or 0}/10")
        st.markdown(f"**Views:** {movie.get('view_count') or 0:,} | "
                    f"**Downloads:** {movie.get('download_count') or 0:,}")
        flags = [label for key, label in [("is_featured", "⭐ Featured"), ("is_trending", "📈 Trending"),
                                          ("premium_only", "🔒 Premium"), ("download_enabled", "⬇ Downloads on")]
                 if movie.get(key)]
        st.markdown(" · ".join(flags) or "No flags set")
        st.write(movie.get("description") or "")
        if movie.get("ai_summary"):
            st.caption(f"AI summary: {movie['ai_summary']}")
        if movie.get("quality_options"):
            st.markdown(f"**Qualities:** {', '.join(movie['quality_options'])}")
        if movie.get("tags"):
            st.markdown(f"**Tags:** {', '.join(movie['tags'])}")
        if movie.get("video_url"):
            st.markdown(f"**Video:** {movie['video_url']}")
        if movie.get("file_references"):
            try:
                references = json.loads(movie["file_references"])
            except ValueError:
                st.code(movie["file_references"])
            else:
                for quality, ref in (references.items() if isinstance(references, dict) else []):
                    drive_id = ref.get("primary_drive")
                    if drive_id:
                        st.markdown(f"**{quality}** · [stream]({get_google_drive_stream_url(drive_id)}) · "
                                    f"[preview]({get_google_drive_embed_url(drive_id)}) · "
                                    f"{non_negative_int(ref.get('file_size')):,} bytes")
        st.caption(f"ID `{movie['$id']}` · added {movie.get('$createdAt', '')}")


def show_edit_form(db, movie):
    with st.form(f"edit_{movie['$id']}"):
        st.subheader(f"✏ Edit {movie.get('title', '')}")

        col1, col2, col3 = st.columns([3, 1, 1])
        with col1:
            title = st.text_input("Title", movie.get("title", ""))
        with col2:
            release_year = st.text_input("Release Year", str(movie.get("release_year") or ""))
        with col3:
            duration = st.text_input("Duration (mins)", str(movie.get("duration") or ""))

        description = st.text_area("Description", movie.get("description", ""))
        ai_summary = st.text_area("AI Summary", movie.get("ai_summary", ""))

        col1, col2 = st.columns(2)
        with col1:
            current_genres = movie.get("genre") or []
            genre = st.multiselect("Genres", sorted(set(AVAILABLE_GENRES) | set(current_genres)),
                                   default=current_genres)
        with col2:
            current_qualities = movie.get("quality_options") or []
            quality_options = st.multiselect("Quality Options",
                                             QUALITY_OPTIONS + [q for q in current_qualities if q not in QUALITY_OPTIONS],
                                             default=current_qualities)

        tags = st.text_input("Tags (comma separated)", ", ".join(movie.get("tags") or []))
        video_url = st.text_input("Video URL", movie.get("video_url", ""))
        poster_url = st.text_input("Poster URL", movie.get("poster_url", ""))
        poster_file = st.file_uploader("Replace poster", type=["png", "jpg", "jpeg", "webp"])

        col1, col2, col3 = st.columns(3)
        with col1:
            rating = st.number_input("Rating (0-10)", 0.0, 10.0, clamp_rating(movie.get("rating")), step=0.1)
        with col2:
            view_count = st.number_input("View Count", 0, value=non_negative_int(movie.get("view_count")))
        with col3:
            download_count = st.number_input("Download Count", 0, value=non_negative_int(movie.get("download_count")))

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            premium_only = st.checkbox("Premium Only", bool(movie.get("premium_only")))
        with col2:
            download_enabled = st.checkbox("Enable Downloads", bool(movie.get("download_enabled")))
        with col3:
            is_featured = st.checkbox("Featured Movie", bool(movie.get("is_featured")))
        with col4:
            is_trending = st.checkbox("Trending Now", bool(movie.get("is_trending")))

        col1, col2 = st.columns(2)
        with col1:
            saved = st.form_submit_button("💾 Save Changes")
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        st.session_state.edit_id = None
        st.rerun()

    if saved:
        updates = {
            "title": title,
            "release_year": release_year,
            "duration": duration,
            "description": description,
            "ai_summary": ai_summary,
            "genre": genre,
            "quality_options": quality_options,
            "tags": split_tags(tags),
            "video_url": video_url,
            "poster_url": poster_url,
            "rating": rating,
            "view_count": int(view_count),
            "download_count": int(download_count),
            "premium_only": premium_only,
            "download_enabled": download_enabled,
            "is_featured": is_featured,
            "is_trending": is_trending,
        }
        try:
            if poster_file is not None:
                uploaded = upload_poster(db, poster_file.getvalue(), poster_file.name, poster_file.type)
                updates["poster_url"] = db.file_view_url(uploaded["$id"])
            update_movie(db, movie["$id"], updates)
        except AppwriteException as e:
            st.error(f"❌ Failed to update movie: {e.message}")
        else:
            load_all_movies.clear()
            st.session_state.edit_id = None
            st.success("✅ Movie updated!")
            st.rerun()


def show_delete_confirm(db, movie):
    st.warning(f"Are you sure you want to delete **{movie.get('title', '')}**? This action cannot be undone.")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("🗑 Delete", key=f"confirm_delete_{movie['$id']}", type="primary"):
            try:
                delete_movie(db, movie["$id"])
            except AppwriteException as e:
                st.error(f"❌ Failed to delete movie: {e.message}")
            else:
                load_all_movies.clear()
                st.session_state.delete_id = None
                st.success("✅ Movie deleted.")
                st.rerun()
    with col2:
        if st.button("Cancel", key=f"cancel_delete_{movie['$id']}"):
            st.session_state.delete_id = None
            st.rerun()


def show_movie(db, movie):
    year = f" ({movie['release_year']})" if movie.get("release_year") else ""
    editing = st.session_state.edit_id == movie["$id"]
    deleting = st.session_state.delete_id == movie["$id"]

    with st.expander(f"🎬 {movie.get('title', 'Untitled')}{year}", expanded=editing or deleting):
        if editing:
            show_edit_form(db, movie)
            return

        show_details(movie)

        col1, col2, _ = st.columns([1, 1, 4])
        with col1:
            if st.button("✏ Edit", key=f"edit_{movie['$id']}_btn"):
                st.session_state.edit_id = movie["$id"]
                st.session_state.delete_id = None
                st.rerun()
        with col2:
            if st.button("🗑 Delete", key=f"delete_{movie['$id']}_btn"):
                st.session_state.delete_id = movie["$id"]
                st.session_state.edit_id = None
                st.rerun()

        if deleting:
            show_delete_confirm(db, movie)


def show():
    init_page_state()

    st.title("🎞 Movies Management")
    st.write("Manage your movie collection")

    db = Connect()

    # ---------- Filters ----------
    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        search_term = st.text_input("Search", placeholder="Search by title or description...")
    with col2:
        selected_genre = st.selectbox("Genre", ["All"] + AVAILABLE_GENRES)
    with col3:
        sort_by = st.selectbox("Sort By", list(SORT_OPTIONS.keys()), format_func=SORT_OPTIONS.get)

    search_catalog = st.checkbox("Search the whole catalog instead of the current page",
                                 help="Uses Appwrite full-text search on title and description.")

    # ---------- Fetch ----------
    try:
        if search_catalog and search_term:
            movies = search_movies(db, search_term, limit=100)
            page = None
        else:
            page = get_movies_paginated(db, st.session_state.movies_page, PAGE_SIZE)
            movies = page["documents"]
    except AppwriteException as e:
        st.error(f"❌ Failed to load movies: {e.message}")
        return

    shown = sort_movies(filter_movies(movies, "" if search_catalog else search_term, selected_genre), sort_by)

    if not shown:
        st.info("No movies found. Try adjusting your search or filters."
                if search_term or selected_genre != "All" else "Get started by adding your first movie.")
    else:
        with st.expander("📋 Table view"):
            st.dataframe(movies_to_df(shown), use_container_width=True, hide_index=True)

        for movie in shown:
            show_movie(db, movie)

    # ---------- Pagination ----------
    if page is not None:
        st.caption(f"Showing {len(shown)} of {len(movies)} movies on page {page['page']} "
                   f"({page['total']} in catalog)")
        col1, col2, _ = st.columns([1, 1, 4])
        with col1:
            if st.button("⬅ Previous", disabled=not page["has_prev"]):
                st.session_state.movies_page -= 1
                st.rerun()
        with col2:
            if st.button("Next ➡", disabled=not page["has_next"]):
                st.session_state.movies_page += 1
                st.rerun()
    else:
        st.caption(f"Showing {len(shown)} catalog search results")


show()

global_sidebar()
