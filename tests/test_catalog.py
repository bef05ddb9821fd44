from conftest import make_movie
from Modules.Catalog import filter_movies, movies_to_df, sort_movies

MOVIES = [
    make_movie("m1", "Rambo", description="Jungle war", genre=["Action", "War"], release_year="1982"),
    make_movie("m2", "commando", description="One man army", genre=["Action"], release_year="1985"),
    make_movie("m3", "Titanic", description="Love at sea", genre=["Romance"], release_year=""),
]


def titles(movies):
    return [m["title"] for m in movies]


def test_filter_by_search_in_title_or_description():
    assert titles(filter_movies(MOVIES, "RAMBO")) == ["Rambo"]
    assert titles(filter_movies(MOVIES, "army")) == ["commando"]
    assert len(filter_movies(MOVIES, "")) == 3


def test_filter_by_genre():
    assert titles(filter_movies(MOVIES, genre="Action")) == ["Rambo", "commando"]
    assert titles(filter_movies(MOVIES, "jungle", "Romance")) == []


def test_sort_by_created():
    assert titles(sort_movies(MOVIES, "newest")) == ["Titanic", "commando", "Rambo"]
    assert titles(sort_movies(MOVIES, "oldest")) == ["Rambo", "commando", "Titanic"]


def test_sort_by_title_ignores_case():
    assert titles(sort_movies(MOVIES, "title-asc")) == ["commando", "Rambo", "Titanic"]
    assert titles(sort_movies(MOVIES, "title-desc")) == ["Titanic", "Rambo", "commando"]


def test_sort_by_year_missing_last():
    assert titles(sort_movies(MOVIES, "year-new")) == ["commando", "Rambo", "Titanic"]
    assert titles(sort_movies(MOVIES, "year-old")) == ["Titanic", "Rambo", "commando"]


def test_unknown_sort_keeps_order():
    assert titles(sort_movies(MOVIES, "whatever")) == ["Rambo", "commando", "Titanic"]


def test_movies_to_df_joins_lists():
    df = movies_to_df(MOVIES)
    assert df.loc[0, "genre"] == "Action, War"
    assert df.loc[0, "id"] == "m1"
    assert movies_to_df([]).empty
