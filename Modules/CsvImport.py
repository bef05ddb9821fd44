import io
import json
from collections import namedtuple

import pandas as pd
from appwrite.exception import AppwriteException

from Modules.Drive import is_drive_csv, parse_google_drive_row
from Modules.MovieForm import empty_movie, non_negative_int, round_half_up
from Modules.MovieStore import add_movie

REQUIRED_HEADERS = ["title", "description", "genre", "release_year", "duration"]

TEMPLATE_HEADERS = [
    "title",
    "description",
    "ai_summary",
    "genre",
    "poster_url",
    "quality_options",
    "premium_only",
    "download_enabled",
    "view_count",
    "rating",
    "download_count",
    "is_featured",
    "is_trending",
    "tags",
    "release_year",
    "duration",
    "video_url",
    "primary_drive_720p",
    "file_size_720p",
    "primary_drive_1080p",
    "file_size_1080p",
    "primary_drive_4k",
    "file_size_4k"
]

SAMPLE_ROW = [
    "Sample Movie Title",
    "This is a sample movie description about DJ Afro narration",
    "AI-generated summary would go here",
    "Action|Comedy",
    "https://example.com/poster.jpg",
    "720p|1080p",
    "false",
    "true",
    "0",
    "4.5",
    "0",
    "false",
    "true",
    "DJ Afro|Funny|Classic",
    "2023",
    "120",
    "https://example.com/video.mp4",
    "1ABC123XYZ_720p",
    "1073741824",
    "1ABC123XYZ_1080p",
    "2147483648",
    "",
    ""
]

# CSV column suffix -> quality key stored in file_references
FILE_REFERENCE_QUALITIES = {
    "720p": "720p",
    "1080p": "1080p",
    "4k": "4K",
}

ImportResult = namedtuple("ImportResult", ["success", "failed", "errors"])


class CsvFormatError(ValueError):
    pass


def template_csv():
    return ",".join(TEMPLATE_HEADERS) + "\n" + ",".join(SAMPLE_ROW) + "\n"


def read_csv(source):
    """
    Reads a CSV into a DataFrame of trimmed strings.
    Accepts a path, an open file object or the raw bytes of an upload.
    """
    if isinstance(source, bytes):
        source = io.StringIO(source.decode("utf-8-sig"))

    df = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True)
    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()

    # rows made only of separators
    df = df[(df != "").any(axis=1)].reset_index(drop=True)
    return df


def missing_headers(columns):
    return [h for h in REQUIRED_HEADERS if h not in columns]


def check_headers(columns):
    missing = missing_headers(columns)
    if missing:
        raise CsvFormatError(f"Missing required header: {missing[0]}")


def preview_rows(df, n=5):
    return df.head(n)


def _to_float(value):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number == number else 0.0


def _split_pipe(value):
    return value.split("|") if value else []


def parse_csv_row(row):
    file_references = {}
    for suffix, quality in FILE_REFERENCE_QUALITIES.items():
        drive_id = row.get(f"primary_drive_{suffix}")
        if drive_id:
            file_references[quality] = {
                "primary_drive": drive_id,
                "file_size": non_negative_int(row.get(f"file_size_{suffix}") or "0")
            }

    return {
        "title": row.get("title") or "",
        "description": row.get("description") or "",
        "ai_summary": row.get("ai_summary") or "",
        "genre": _split_pipe(row.get("genre")),
        "poster_url": row.get("poster_url") or "",
        "quality_options": _split_pipe(row.get("quality_options")) or ["720p"],
        "premium_only": row.get("premium_only") == "true",
        "download_enabled": row.get("download_enabled") != "false",
        "view_count": non_negative_int(row.get("view_count") or "0"),
        "rating": _to_float(row.get("rating") or "0"),
        "download_count": non_negative_int(row.get("download_count") or "0"),
        "is_featured": row.get("is_featured") == "true",
        "is_trending": row.get("is_trending") == "true",
        "tags": _split_pipe(row.get("tags")),
        "release_year": row.get("release_year") or "",
        "duration": row.get("duration") or "",
        "video_url": row.get("video_url") or "",
        "file_references": json.dumps(file_references)
    }


def parse_csv(df):
    check_headers(df.columns)

    records = df.to_dict(orient="records")

    if is_drive_csv(df.columns):
        movies = []
        for row in records:
            movie = empty_movie()
            movie.update(parse_google_drive_row(row))
            movies.append(movie)
        return movies

    return [parse_csv_row(row) for row in records]


def _format_cell(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "|".join(str(v) for v in value)
    if value is None:
        return ""
    return str(value)


def movie_to_csv_row(movie):
    """Turns a parsed movie back into a template row, so the row can be imported again."""
    row = {header: _format_cell(movie.get(header)) for header in TEMPLATE_HEADERS}

    try:
        references = json.loads(movie.get("file_references") or "{}")
    except ValueError:
        references = {}
    if not isinstance(references, dict):
        references = {}

    # Drive-link rows store "4k", template rows store "4K"
    suffixes = {quality.lower(): suffix for suffix, quality in FILE_REFERENCE_QUALITIES.items()}
    for quality, ref in references.items():
        suffix = suffixes.get(str(quality).lower())
        if suffix and isinstance(ref, dict) and ref.get("primary_drive"):
            row[f"primary_drive_{suffix}"] = str(ref["primary_drive"])
            row[f"file_size_{suffix}"] = str(non_negative_int(ref.get("file_size")))

    return row


def movies_to_csv_df(movies):
    return pd.DataFrame([movie_to_csv_row(m) for m in movies], columns=TEMPLATE_HEADERS)


def import_movies(db, movies, on_progress=None):
    """Uploads movies one at a time; a failed row is counted and the import carries on."""
    success = 0
    failed = 0
    errors = []

    for i, movie in enumerate(movies):
        try:
            add_movie(db, movie)
            success += 1
        except AppwriteException as e:
            failed += 1
            errors.append((movie.get("title", ""), str(e)))

        if on_progress:
            on_progress(round_half_up((i + 1) / len(movies) * 100))

    return ImportResult(success, failed, errors)


def summary_message(result):
    message = f"Bulk upload complete! Added {result.success} movies successfully."
    if result.failed > 0:
        message += f" {result.failed} failed."
    return message
