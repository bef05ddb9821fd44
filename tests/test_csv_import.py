import io
import json

import pytest

from conftest import FakeConnection
from Modules.CsvImport import (
    TEMPLATE_HEADERS,
    CsvFormatError,
    check_headers,
    import_movies,
    missing_headers,
    parse_csv,
    parse_csv_row,
    preview_rows,
    read_csv,
    summary_message,
    template_csv,
)

CSV_TEXT = """title,description,genre,release_year,duration,quality_options,premium_only,download_enabled,rating,view_count,tags,primary_drive_720p,file_size_720p,primary_drive_4k
Commando, Narrated action ,Action|Comedy,1985,90,720p|1080p,true,false,4.5,12,DJ Afro|Classic,abc720,1000,xyz4k

,,,,,,,,,,,,,
Rambo,Jungle,Action,1982,93,,,,,,,,,
"""


def test_template_has_header_and_sample():
    lines = template_csv().strip().split("\n")
    assert lines[0].split(",") == TEMPLATE_HEADERS
    assert len(lines[1].split(",")) == len(TEMPLATE_HEADERS)


def test_template_parses_back():
    movies = parse_csv(read_csv(template_csv().encode("utf-8")))
    assert movies[0]["title"] == "Sample Movie Title"
    assert movies[0]["genre"] == ["Action", "Comedy"]


def test_read_csv_trims_and_drops_blank_rows():
    df = read_csv(CSV_TEXT.encode("utf-8"))
    assert list(df["title"]) == ["Commando", "Rambo"]
    assert df.loc[0, "description"] == "Narrated action"


def test_read_csv_accepts_bytes_with_bom():
    df = read_csv("\ufefftitle,description\nA,B\n".encode("utf-8"))
    assert list(df.columns) == ["title", "description"]


def test_read_csv_bytes_without_newline_is_data():
    df = read_csv(b"title,description")
    assert list(df.columns) == ["title", "description"]
    assert df.empty


def test_read_csv_accepts_path_and_file_object(tmp_path):
    path = tmp_path / "movies.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")

    assert list(read_csv(str(path))["title"]) == ["Commando", "Rambo"]
    assert list(read_csv(io.StringIO(CSV_TEXT))["title"]) == ["Commando", "Rambo"]


def test_missing_headers():
    assert missing_headers(["title", "genre"]) == ["description", "release_year", "duration"]
    with pytest.raises(CsvFormatError, match="Missing required header: description"):
        check_headers(["title", "genre"])


def test_parse_csv_row_full():
    movie = parse_csv(read_csv(CSV_TEXT.encode("utf-8")))[0]

    assert movie["genre"] == ["Action", "Comedy"]
    assert movie["quality_options"] == ["720p", "1080p"]
    assert movie["premium_only"] is True
    assert movie["download_enabled"] is False
    assert movie["rating"] == 4.5
    assert movie["view_count"] == 12
    assert movie["tags"] == ["DJ Afro", "Classic"]
    assert json.loads(movie["file_references"]) == {
        "720p": {"primary_drive": "abc720", "file_size": 1000},
        "4K": {"primary_drive": "xyz4k", "file_size": 0},
    }


def test_parse_csv_row_defaults():
    movie = parse_csv_row({"title": "Rambo"})

    assert movie["quality_options"] == ["720p"]
    assert movie["download_enabled"] is True
    assert movie["is_featured"] is False
    assert movie["view_count"] == 0
    assert movie["rating"] == 0
    assert movie["genre"] == []
    assert movie["file_references"] == "{}"


def test_parse_csv_switches_to_drive_links():
    text = ("title,description,genre,release_year,duration,720p_url,720p_size\n"
            "Commando,Action,\"Action, Comedy\",1985,90,https://drive.google.com/file/d/AbC_123/view,500\n")
    movie = parse_csv(read_csv(text.encode("utf-8")))[0]

    assert movie["genre"] == ["Action", "Comedy"]
    assert movie["quality_options"] == ["720p"]
    assert json.loads(movie["file_references"])["720p"]["primary_drive"] == "AbC_123"
    assert movie["video_url"] == ""


def test_preview_rows_limits():
    df = read_csv(CSV_TEXT.encode("utf-8"))
    assert len(preview_rows(df, 1)) == 1


def test_import_movies_counts_failures(db):
    db.databases.fail_titles.add("Broken")
    progress = []
    movies = [{"title": "Commando"}, {"title": "Broken"}, {"title": "Rambo"}, {"title": "Rocky"}]

    result = import_movies(db, movies, on_progress=progress.append)

    assert result.success == 3
    assert result.failed == 1
    assert result.errors[0][0] == "Broken"
    assert progress == [25, 50, 75, 100]
    assert summary_message(result) == "Bulk upload complete! Added 3 movies successfully. 1 failed."


def test_summary_without_failures():
    result = import_movies(FakeConnection(), [{"title": "Commando"}])
    assert summary_message(result) == "Bulk upload complete! Added 1 movies successfully."
