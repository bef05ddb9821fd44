import os
import sys

from appwrite.exception import AppwriteException
from tqdm import tqdm

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
from ETL_config import FAILED_ROWS_PATH, MOVIE_CSV_PATH, PREVIEW_ROWS
from Database.Appwrite_Connection import Connect
from Modules.CsvImport import (
    CsvFormatError,
    ImportResult,
    movies_to_csv_df,
    parse_csv,
    preview_rows,
    read_csv,
    summary_message,
)
from Modules.MovieStore import add_movie


# ==============================
# READ CSV
# ==============================
def load_movies(path):
    print(f"\n[STEP 1] Reading {path}...")

    df = read_csv(path)
    movies = parse_csv(df)

    print(preview_rows(df, PREVIEW_ROWS)[["title", "genre", "release_year"]].to_string(index=False))
    print(f"[INFO] Parsed {len(movies)} movies.")
    return movies


# ==============================
# UPLOAD MOVIES
# ==============================
def upload_movies(movies, db):
    print("\n[STEP 2] Uploading Movies...")

    success = 0
    failed = []
    errors = []

    for movie in tqdm(movies, desc="Uploading Movies"):
        try:
            add_movie(db, movie)
            success += 1
        except AppwriteException as e:
            failed.append(movie)
            errors.append((movie.get("title", ""), str(e)))

    return ImportResult(success, len(failed), errors), failed


# ==============================
# SAVE FAILURES
# ==============================
def save_failed(failed, path=FAILED_ROWS_PATH):
    if not failed:
        return None

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    movies_to_csv_df(failed).to_csv(path, index=False)

    print(f"[INFO] Wrote {len(failed)} failed rows to {path}")
    return path


# ==============================
# PIPELINE
# ==============================
if __name__ == "__main__":
    print("Starting Bulk Import...")

    csv_path = sys.argv[1] if len(sys.argv) > 1 else MOVIE_CSV_PATH

    try:
        movies = load_movies(csv_path)
    except (CsvFormatError, FileNotFoundError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    db = Connect()
    result, failed = upload_movies(movies, db)

    for title, error in result.errors:
        print(f"[ERROR] {title}: {error}")
    save_failed(failed)

    print(f"\n{summary_message(result)}")
