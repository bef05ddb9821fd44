import json
import re

from Modules.MovieForm import non_negative_int

FILE_ID_PATTERN = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
OPEN_ID_PATTERN = re.compile(r"id=([a-zA-Z0-9_-]+)")

# CSV column prefix -> quality key stored in file_references
DRIVE_QUALITIES = {
    "720p": "720p",
    "1080p": "1080p",
    "4k": "4k",
}


def extract_google_drive_file_id(url):
    """Handles /file/d/<id>/view links and open?id=<id> links."""
    if not url:
        return None

    match = FILE_ID_PATTERN.search(url)
    if match:
        return match.group(1)

    match = OPEN_ID_PATTERN.search(url)
    if match:
        return match.group(1)

    return None


def get_google_drive_stream_url(file_id):
    return f"https://drive.google.com/uc?export=download&id={file_id}"


def get_google_drive_embed_url(file_id):
    return f"https://drive.google.com/file/d/{file_id}/preview"


def is_drive_csv(columns):
    return any(f"{prefix}_url" in columns for prefix in DRIVE_QUALITIES)


def _split(value):
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def parse_google_drive_row(row):
    drive_urls = {}

    for prefix, quality in DRIVE_QUALITIES.items():
        file_id = extract_google_drive_file_id(row.get(f"{prefix}_url") or "")
        if file_id:
            drive_urls[quality] = {
                "primary_drive": file_id,
                "file_size": non_negative_int(row.get(f"{prefix}_size"))
            }

    return {
        "title": row.get("title") or "",
        "description": row.get("description") or "",
        "genre": _split(row.get("genre")),
        "release_year": str(non_negative_int(row.get("release_year"))),
        "duration": str(non_negative_int(row.get("duration"))),
        "file_references": json.dumps(drive_urls),
        "quality_options": list(drive_urls.keys()),
        "premium_only": row.get("premium_only") == "true",
        "download_enabled": row.get("download_enabled") != "false",
        "tags": _split(row.get("tags"))
    }


def parse_google_drive_urls(rows):
    return [parse_google_drive_row(row) for row in rows]
