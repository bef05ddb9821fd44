import pandas as pd
import streamlit as st
from Database.Appwrite_Connection import Connect
from Modules.auth import login_blocker
from Modules.CsvImport import (
    REQUIRED_HEADERS,
    CsvFormatError,
    import_movies,
    parse_csv,
    preview_rows,
    read_csv,
    summary_message,
    template_csv,
)
from Modules.GetAnalytics import load_all_movies
from Modules.Menu import global_sidebar

st.set_page_config(page_title="Bulk Upload", page_icon="📤", layout="wide")

# protect the page
login_blocker()


def show():
    st.title("📤 Bulk Upload Movies")
    st.write("Upload multiple movies at once using a CSV file")

    with st.expander("📄 CSV format", expanded=False):
        st.markdown(f"""
Required columns: `{'`, `'.join(REQUIRED_HEADERS)}`

- Lists (`genre`, `quality_options`, `tags`) are separated with `|`, e.g. `Action|Comedy`.
- `premium_only`, `is_featured`, `is_trending` are `true` or `false`; downloads stay enabled unless `download_enabled` is `false`.
- `primary_drive_720p` / `file_size_720p` (and `1080p`, `4k`) hold Google Drive file ids and sizes in bytes.
- A sheet exported with `720p_url`, `1080p_url`, `4k_url` Google Drive links is also accepted; its lists are comma separated.
""")
        st.download_button("⬇ Download CSV template", template_csv(),
                           file_name="movie_upload_template.csv", mime="text/csv")

    csv_file = st.file_uploader("Select CSV file", type=["csv"])
    if csv_file is None:
        st.info("Please select a CSV file to continue.")
        return

    try:
        df = read_csv(csv_file.getvalue())
        movies = parse_csv(df)
    except CsvFormatError as e:
        st.error(f"❌ {e}")
        return
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        st.error(f"❌ Error processing CSV: {e}")
        return

    st.subheader("Preview")
    st.caption(f"First rows of {len(df)} found in `{csv_file.name}`")
    st.dataframe(preview_rows(df), use_container_width=True, hide_index=True)

    if not movies:
        st.warning("⚠ The CSV file has no movie rows.")
        return

    if st.button(f"🚀 Upload {len(movies)} Movies", type="primary"):
        progress = st.progress(0, text="Uploading movies...")
        result = import_movies(Connect(), movies,
                               on_progress=lambda pct: progress.progress(pct, text=f"Uploading movies... {pct}%"))
        load_all_movies.clear()

        if result.failed:
            st.warning(summary_message(result))
            for title, error in result.errors:
                st.caption(f"❌ {title or 'Untitled'}: {error}")
        else:
            st.success(summary_message(result))
        st.page_link("pages/3_Movies.py", label="View all movies", icon="🎞")


show()

global_sidebar()
