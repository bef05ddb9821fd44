import streamlit as st
from appwrite.exception import AppwriteException
from Database.Appwrite_Connection import Connect
from Modules.auth import login_blocker
from Modules.GetAnalytics import load_all_movies
from Modules.Menu import global_sidebar
from Modules.MovieForm import (
    AVAILABLE_GENRES,
    QUALITY_OPTIONS,
    MovieValidationError,
    add_form_key,
    empty_movie,
    mark_movie_added,
    pop_added_title,
    split_tags,
    validate_movie,
)
from Modules.MovieStore import add_movie, upload_poster

st.set_page_config(page_title="Add Movie", page_icon="➕", layout="wide")

# protect the page
login_blocker()


def show():
    st.title("➕ Add New Movie")
    st.write("Fill out the form below to add a new movie to your collection")

    added_title = pop_added_title(st.session_state)
    if added_title is not None:
        st.success(f"✅ Movie '{added_title}' added successfully!")
        st.page_link("pages/3_Movies.py", label="View all movies", icon="🎞")

    defaults = empty_movie()

    # fields keep their values until a movie is added
    with st.form(add_form_key(st.session_state)):
        st.subheader("Basic Information")
        col1, col2, col3 = st.columns([3, 1, 1])
        with col1:
            title = st.text_input("Movie Title *", placeholder="Enter movie title")
        with col2:
            release_year = st.text_input("Release Year *", placeholder="2024")
        with col3:
            duration = st.text_input("Duration (minutes) *", placeholder="120")

        description = st.text_area("Description *", placeholder="Enter movie description")
        ai_summary = st.text_area("AI Summary", placeholder="Optional AI-generated summary")

        st.subheader("Categories & Media")
        col1, col2 = st.columns(2)
        with col1:
            genre = st.multiselect("Genres *", AVAILABLE_GENRES)
        with col2:
            quality_options = st.multiselect("Quality Options", QUALITY_OPTIONS)

        video_url = st.text_input("Video URL *", placeholder="https://example.com/video.mp4")
        tags = st.text_input("Tags", placeholder="Enter tags separated by commas")

        st.subheader("Statistics")
        col1, col2, col3 = st.columns(3)
        with col1:
            rating = st.number_input("Rating (0-10)", 0.0, 10.0, float(defaults["rating"]), step=0.1)
        with col2:
            view_count = st.number_input("View Count", 0, value=defaults["view_count"])
        with col3:
            download_count = st.number_input("Download Count", 0, value=defaults["download_count"])

        st.subheader("Poster")
        poster_file = st.file_uploader("Upload Poster Image", type=["png", "jpg", "jpeg", "webp"])
        poster_url = st.text_input("Or Poster URL", placeholder="https://example.com/poster.jpg")

        st.subheader("Settings")
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            premium_only = st.toggle("Premium Only", defaults["premium_only"])
        with col2:
            download_enabled = st.toggle("Enable Downloads", defaults["download_enabled"])
        with col3:
            is_featured = st.toggle("Featured Movie", defaults["is_featured"])
        with col4:
            is_trending = st.toggle("Trending Now", defaults["is_trending"])

        submitted = st.form_submit_button("🎬 Add Movie")

    if not submitted:
        return

    form = dict(defaults)
    form.update({
        "title": title,
        "description": description,
        "ai_summary": ai_summary,
        "genre": genre,
        "poster_url": poster_url,
        "quality_options": quality_options,
        "premium_only": premium_only,
        "download_enabled": download_enabled,
        "view_count": view_count,
        "rating": rating,
        "download_count": download_count,
        "is_featured": is_featured,
        "is_trending": is_trending,
        "tags": split_tags(tags),
        "release_year": release_year,
        "duration": duration,
        "video_url": video_url,
    })

    try:
        movie = validate_movie(form, has_poster_file=poster_file is not None)
    except MovieValidationError as e:
        st.error(f"❌ {e}")
        return

    db = Connect()
    try:
        with st.spinner("Adding movie..."):
            if poster_file is not None:
                uploaded = upload_poster(db, poster_file.getvalue(), poster_file.name, poster_file.type)
                movie["poster_url"] = db.file_view_url(uploaded["$id"])
            add_movie(db, movie)
    except AppwriteException as e:
        st.error(f"❌ Failed to add movie: {e.message or 'please try again.'}")
        return

    load_all_movies.clear()
    mark_movie_added(st.session_state, movie["title"])
    st.rerun()


show()

global_sidebar()
