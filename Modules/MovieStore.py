from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.input_file import InputFile
from appwrite.query import Query
from collections import Counter
from Modules.MovieForm import clean_updates

# Appwrite caps a single page at 100 documents
PAGE_LIMIT = 100
MAX_OFFSET = 10000


def _list(db, queries):
    return db.databases.list_documents(
        database_id=db.database_id,
        collection_id=db.collection_id,
        queries=queries
    )


def get_all_movies(db):
    """Pages through the whole collection, newest first."""
    all_documents = []
    offset = 0
    has_more = True

    try:
        while has_more:
            response = _list(db, [
                Query.limit(PAGE_LIMIT),
                Query.offset(offset),
                Query.order_desc("$createdAt")
            ])
            documents = response["documents"]
            all_documents.extend(documents)
            has_more = len(documents) == PAGE_LIMIT
            offset += PAGE_LIMIT

            if offset > MAX_OFFSET:
                print(f"[WARN] Breaking pagination loop at {MAX_OFFSET:,} movies")
                break
    except AppwriteException as e:
        print(f"[ERROR] Error fetching all movies: {e}")
        raise

    print(f"[INFO] Fetched {len(all_documents)} total movies")
    return all_documents


def get_movies(db, limit=100):
    try:
        response = _list(db, [
            Query.limit(min(limit, PAGE_LIMIT)),
            Query.order_desc("$createdAt")
        ])
        return response["documents"]
    except AppwriteException as e:
        print(f"[ERROR] Error fetching movies: {e}")
        raise


def get_movies_by_filter(db, featured=None, trending=None, premium=None, genre=None, limit=25):
    queries = []

    if featured is not None:
        queries.append(Query.equal("is_featured", featured))
    if trending is not None:
        queries.append(Query.equal("is_trending", trending))
    if premium is not None:
        queries.append(Query.equal("premium_only", premium))
    if genre:
        queries.append(Query.contains("genre", genre))

    queries.append(Query.limit(limit or 25))
    queries.append(Query.order_desc("$createdAt"))

    try:
        return _list(db, queries)["documents"]
    except AppwriteException as e:
        print(f"[ERROR] Error fetching filtered movies: {e}")
        raise


def get_movies_paginated(db, page=1, limit=50):
    offset = (page - 1) * limit

    try:
        response = _list(db, [
            Query.limit(min(limit, PAGE_LIMIT)),
            Query.offset(offset),
            Query.order_desc("$createdAt")
        ])
    except AppwriteException as e:
        print(f"[ERROR] Error fetching movies with pagination: {e}")
        raise

    return {
        "documents": response["documents"],
        "total": response["total"],
        "page": page,
        "limit": limit,
        "has_next": offset + limit < response["total"],
        "has_prev": page > 1
    }


def _count(db, queries=None):
    return _list(db, (queries or []) + [Query.limit(1)])["total"]


def get_movie_stats(db):
    """Totals come from the response count, so each query fetches one document at most."""
    try:
        return {
            "total_movies": _count(db),
            "featured_movies": _count(db, [Query.equal("is_featured", True)]),
            "trending_movies": _count(db, [Query.equal("is_trending", True)]),
            "premium_movies": _count(db, [Query.equal("premium_only", True)])
        }
    except AppwriteException as e:
        print(f"[ERROR] Error fetching movie stats: {e}")
        raise


def _top_by(db, attribute, limit):
    return _list(db, [Query.limit(limit), Query.order_desc(attribute)])["documents"]


def get_top_movies_by_views(db, limit=10):
    try:
        return _top_by(db, "view_count", limit)
    except AppwriteException as e:
        print(f"[ERROR] Error fetching top movies by views: {e}")
        raise


def get_top_movies_by_downloads(db, limit=10):
    try:
        return _top_by(db, "download_count", limit)
    except AppwriteException as e:
        print(f"[ERROR] Error fetching top movies by downloads: {e}")
        raise


def count_genres(movies):
    counts = Counter()
    for movie in movies:
        genres = movie.get("genre")
        if isinstance(genres, list):
            counts.update(genres)

    # most_common keeps first-seen order for ties
    return [{"genre": genre, "count": count} for genre, count in counts.most_common()]


def get_genre_stats(db, movies=None):
    if movies is None:
        movies = get_all_movies(db)
    return count_genres(movies)


def get_movie_by_id(db, movie_id):
    try:
        return db.databases.get_document(
            database_id=db.database_id,
            collection_id=db.collection_id,
            document_id=movie_id
        )
    except AppwriteException as e:
        print(f"[ERROR] Error fetching movie {movie_id}: {e}")
        raise


def search_movies(db, search_term, limit=25):
    """Full-text search needs a fulltext index on title and description."""
    try:
        return _list(db, [
            Query.or_queries([
                Query.search("title", search_term),
                Query.search("description", search_term)
            ]),
            Query.limit(limit)
        ])["documents"]
    except AppwriteException as e:
        print(f"[ERROR] Error searching movies: {e}")
        raise


def add_movie(db, movie):
    try:
        return db.databases.create_document(
            database_id=db.database_id,
            collection_id=db.collection_id,
            document_id=ID.unique(),
            data=movie
        )
    except AppwriteException as e:
        print(f"[ERROR] Error adding movie '{movie.get('title', '')}': {e}")
        raise


def upload_poster(db, data, filename, mime_type=None):
    try:
        return db.storage.create_file(
            bucket_id=db.bucket_id,
            file_id=ID.unique(),
            file=InputFile.from_bytes(data, filename=filename, mime_type=mime_type)
        )
    except AppwriteException as e:
        print(f"[ERROR] Error uploading poster {filename}: {e}")
        raise


def delete_movie(db, movie_id):
    try:
        db.databases.delete_document(
            database_id=db.database_id,
            collection_id=db.collection_id,
            document_id=movie_id
        )
        return True
    except AppwriteException as e:
        print(f"[ERROR] Error deleting movie {movie_id}: {e}")
        raise


def update_movie(db, movie_id, updates):
    data = clean_updates(updates)

    try:
        return db.databases.update_document(
            database_id=db.database_id,
            collection_id=db.collection_id,
            document_id=movie_id,
            data=data
        )
    except AppwriteException as e:
        print(f"[ERROR] Error updating movie {movie_id}: {e}")
        raise


def _increment(db, movie_id, field):
    movie = get_movie_by_id(db, movie_id)
    new_value = (movie.get(field) or 0) + 1
    update_movie(db, movie_id, {field: new_value})
    return new_value


def increment_view_count(db, movie_id):
    return _increment(db, movie_id, "view_count")


def increment_download_count(db, movie_id):
    return _increment(db, movie_id, "download_count")
