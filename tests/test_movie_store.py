import pytest
from appwrite.exception import AppwriteException

from conftest import FakeConnection, FakeDatabases, make_movie
from Modules import MovieStore


def page_of(n, start=0, total=None):
    docs = [make_movie(f"m{(start + i) % 10}", f"Movie {start + i}") for i in range(n)]
    return {"total": total if total is not None else n, "documents": docs}


def test_get_all_movies_stops_on_short_page():
    databases = FakeDatabases(pages=[page_of(100), page_of(100, 100), page_of(7, 200)])
    movies = MovieStore.get_all_movies(FakeConnection(databases))

    assert len(movies) == 207
    assert len(databases.list_calls) == 3


def test_get_all_movies_breaks_after_offset_cap():
    databases = FakeDatabases(pages=[page_of(100) for _ in range(150)])
    movies = MovieStore.get_all_movies(FakeConnection(databases))

    # offsets 0..10000 are fetched, then the loop gives up
    assert len(databases.list_calls) == 101
    assert len(movies) == 10100


def test_get_all_movies_empty_collection():
    databases = FakeDatabases(pages=[{"total": 0, "documents": []}])
    assert MovieStore.get_all_movies(FakeConnection(databases)) == []


def test_get_movies_paginated_flags():
    databases = FakeDatabases(pages=[page_of(50, total=120), page_of(20, total=120)])
    db = FakeConnection(databases)

    first = MovieStore.get_movies_paginated(db, page=1, limit=50)
    assert first["has_next"] and not first["has_prev"]
    assert first["total"] == 120

    last = MovieStore.get_movies_paginated(db, page=3, limit=50)
    assert not last["has_next"] and last["has_prev"]
    assert len(last["documents"]) == 20


def test_get_movie_stats_uses_totals():
    databases = FakeDatabases(pages=[
        {"total": 40, "documents": []},
        {"total": 5, "documents": []},
        {"total": 8, "documents": []},
        {"total": 12, "documents": []},
    ])
    stats = MovieStore.get_movie_stats(FakeConnection(databases))

    assert stats == {"total_movies": 40, "featured_movies": 5, "trending_movies": 8, "premium_movies": 12}


def test_get_movies_by_filter_builds_one_query_per_filter():
    databases = FakeDatabases(pages=[{"total": 0, "documents": []}])
    MovieStore.get_movies_by_filter(FakeConnection(databases), featured=True, genre="Action", limit=10)

    # two filters + limit + order
    assert len(databases.list_calls[0]) == 4


def test_count_genres_sorted_by_frequency():
    movies = [
        {"genre": ["Action", "Comedy"]},
        {"genre": ["Action"]},
        {"genre": "Drama"},
        {},
        {"genre": ["Comedy", "Action", "Horror"]},
    ]
    assert MovieStore.count_genres(movies) == [
        {"genre": "Action", "count": 3},
        {"genre": "Comedy", "count": 2},
        {"genre": "Horror", "count": 1},
    ]


def test_get_genre_stats_reuses_given_movies(db):
    stats = MovieStore.get_genre_stats(db, [{"genre": ["War"]}])
    assert stats == [{"genre": "War", "count": 1}]
    assert db.databases.list_calls == []


def test_add_movie_creates_document(db):
    created = MovieStore.add_movie(db, {"title": "Commando"})
    assert created["title"] == "Commando"
    assert db.databases.created[0]["$id"] == "doc1"


def test_add_movie_reraises_appwrite_errors(db):
    db.databases.fail_titles.add("Broken")
    with pytest.raises(AppwriteException):
        MovieStore.add_movie(db, {"title": "Broken"})


def test_update_movie_strips_metadata(db):
    MovieStore.update_movie(db, "m1", {"$id": "m1", "$createdAt": "x", "title": "New"})
    assert db.databases.updated == [("m1", {"title": "New"})]


def test_delete_movie(db):
    assert MovieStore.delete_movie(db, "m1") is True
    assert db.databases.deleted == ["m1"]


def test_increment_counters():
    databases = FakeDatabases(documents={
        "m1": make_movie("m1", "Rambo", view_count=4),
        "m2": make_movie("m2", "Rocky"),
    })
    db = FakeConnection(databases)

    assert MovieStore.increment_view_count(db, "m1") == 5
    assert MovieStore.increment_download_count(db, "m2") == 1
    assert databases.documents["m1"]["view_count"] == 5
    assert databases.documents["m2"]["download_count"] == 1


def test_get_movie_by_id_missing(db):
    with pytest.raises(AppwriteException):
        MovieStore.get_movie_by_id(db, "nope")


def test_upload_poster_returns_file(db):
    uploaded = MovieStore.upload_poster(db, b"\x89PNG", "poster.png", "image/png")
    assert uploaded["$id"] == "file123"
    assert db.storage.files[0][0] == "media_files"
