import datetime

import streamlit as st
from appwrite.exception import AppwriteException
from Database.Appwrite_Connection import Connect
from Modules.Analytics_Utils import movie_list, records_to_df, safe_bar_chart, safe_pie_chart, stat_card
from Modules.auth import login_blocker
from Modules.GetAnalytics import get_dashboard_data, load_all_movies, percent_of
from Modules.Menu import global_sidebar
from Modules.MovieForm import round_half_up
from Modules.MovieStore import get_movies_by_filter

st.set_page_config(page_title="Dashboard", page_icon="📊", layout="wide")

# protect the page
login_blocker()


def show():
    col_title, col_refresh = st.columns([4, 1])
    with col_title:
        st.title("📊 Dashboard Overview")
        st.caption(f"Last updated: {datetime.datetime.now():%Y-%m-%d %H:%M:%S}")
    with col_refresh:
        if st.button("🔄 Refresh"):
            load_all_movies.clear()
            st.rerun()

    db = Connect()

    try:
        with st.spinner("Loading dashboard..."):
            data = get_dashboard_data(db, load_all_movies(db))
    except AppwriteException as e:
        st.error(f"❌ Could not load dashboard data: {e.message}")
        return

    stats = data["stats"]
    analytics = data["analytics"]
    total = stats["total_movies"]

    # 🎬 Catalog counts
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        stat_card("🎬 Total Movies", total, f"{total} movies in database")
    with col2:
        stat_card("⭐ Featured Movies", stats["featured_movies"],
                  f"{percent_of(stats['featured_movies'], total)}% of total")
    with col3:
        stat_card("📈 Trending Movies", stats["trending_movies"],
                  f"{percent_of(stats['trending_movies'], total)}% of total")
    with col4:
        stat_card("🔒 Premium Movies", stats["premium_movies"],
                  f"{percent_of(stats['premium_movies'], total)}% premium content")

    # 👀 Engagement
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        stat_card("👀 Total Views", analytics["total_views"],
                  f"Avg {round_half_up(analytics['total_views'] / total) if total else 0} per movie")
    with col2:
        stat_card("⬇ Total Downloads", analytics["total_downloads"],
                  f"Avg {round_half_up(analytics['total_downloads'] / total) if total else 0} per movie")
    with col3:
        stat_card("🌟 Average Rating", float(analytics["average_rating"]),
                  f"{analytics['total_ratings']} movies rated")
    with col4:
        stat_card("✅ Content Quality", f"{percent_of(analytics['total_ratings'], total)}%",
                  f"{analytics['total_ratings']}/{total} have ratings")

    st.markdown("---")

    # 🎭 Genres
    col1, col2 = st.columns([2, 1])
    with col1:
        genre_df = records_to_df(data["genres"], ["genre", "count"])
        safe_bar_chart(genre_df, "genre", "count", "🎭 Movies per Genre", horizontal=True)
    with col2:
        access_df = records_to_df([
            {"access": "Premium", "count": stats["premium_movies"]},
            {"access": "Free", "count": max(total - stats["premium_movies"], 0)},
        ]) if total else records_to_df([])
        safe_pie_chart(access_df, "access", "count", "🔒 Free vs Premium")

    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("🔥 Most Viewed")
        movie_list(data["top_viewed"], "view_count", "views")
    with col2:
        st.subheader("⬇ Most Downloaded")
        movie_list(data["top_downloaded"], "download_count", "downloads")

    st.markdown("---")

    recent_tab, featured_tab, trending_tab = st.tabs(["🆕 Recently Added", "⭐ Featured", "📈 Trending"])
    with recent_tab:
        movie_list(data["recent"])
    try:
        with featured_tab:
            movie_list(get_movies_by_filter(db, featured=True, limit=10), "view_count", "views")
        with trending_tab:
            movie_list(get_movies_by_filter(db, trending=True, limit=10), "view_count", "views")
    except AppwriteException as e:
        st.error(f"❌ Could not load featured/trending movies: {e.message}")

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        st.page_link("pages/4_Add_Movie.py", label="Add a new movie", icon="➕")
    with col2:
        st.page_link("pages/5_Bulk_Upload.py", label="Bulk upload from CSV", icon="📤")


show()

global_sidebar()
