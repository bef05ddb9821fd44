import pytest
from appwrite.exception import AppwriteException


class FakeDatabases:
    """Serves list_documents from queued responses and records every write."""

    def __init__(self, pages=None, documents=None):
        self.pages = list(pages or [])
        self.documents = dict(documents or {})
        self.list_calls = []
        self.created = []
        self.updated = []
        self.deleted = []
        self.fail_titles = set()

    def list_documents(self, database_id, collection_id, queries=None):
        self.list_calls.append(queries)
        if self.pages:
            return self.pages.pop(0)
        docs = list(self.documents.values())
        return {"total": len(docs), "documents": docs}

    def get_document(self, database_id, collection_id, document_id):
        if document_id not in self.documents:
            raise AppwriteException("Document not found", 404)
        return dict(self.documents[document_id])

    def create_document(self, database_id, collection_id, document_id, data):
        if data.get("title") in self.fail_titles:
            raise AppwriteException("Invalid document structure", 400)
        doc = dict(data, **{"$id": f"doc{len(self.created) + 1}"})
        self.created.append(doc)
        return doc

    def update_document(self, database_id, collection_id, document_id, data=None):
        self.updated.append((document_id, data))
        doc = dict(self.documents.get(document_id, {"$id": document_id}))
        doc.update(data or {})
        self.documents[document_id] = doc
        return doc

    def delete_document(self, database_id, collection_id, document_id):
        self.deleted.append(document_id)
        self.documents.pop(document_id, None)
        return ""


class FakeStorage:
    def __init__(self):
        self.files = []

    def create_file(self, bucket_id, file_id, file):
        self.files.append((bucket_id, file))
        return {"$id": "file123", "bucketId": bucket_id}


class FakeAccount:
    def __init__(self):
        self.recoveries = []
        self.updated_recoveries = []
        self.created = []

    def create_email_password_session(self, email, password):
        if password != "correct-horse":
            raise AppwriteException("Invalid credentials", 401, "user_invalid_credentials")
        return {"$id": "sess1", "userId": "user1"}

    def create(self, user_id, email, password, name=None):
        self.created.append((email, name))
        return {"$id": "user2", "email": email, "name": name}

    def create_recovery(self, email, url):
        self.recoveries.append((email, url))
        return {"$id": "token1"}

    def update_recovery(self, user_id, secret, password):
        self.updated_recoveries.append((user_id, secret, password))
        return {"$id": "token1"}


class FakeUsers:
    def __init__(self, sessions=None):
        self.sessions = sessions if sessions is not None else {"user1": ["sess1"]}
        self.deleted_sessions = []

    def list_sessions(self, user_id):
        if user_id not in self.sessions:
            raise AppwriteException("User not found", 404)
        return {"total": len(self.sessions[user_id]),
                "sessions": [{"$id": s} for s in self.sessions[user_id]]}

    def get(self, user_id):
        return {"$id": user_id, "name": "Admin User", "email": "admin@example.com"}

    def delete_session(self, user_id, session_id):
        if session_id not in self.sessions.get(user_id, []):
            raise AppwriteException("Session not found", 404)
        self.sessions[user_id].remove(session_id)
        self.deleted_sessions.append((user_id, session_id))
        return ""


class FakeConnection:
    database_id = "movies_db"
    collection_id = "movies"
    bucket_id = "media_files"

    def __init__(self, databases=None):
        self.databases = databases or FakeDatabases()
        self.storage = FakeStorage()
        self.account = FakeAccount()
        self.users = FakeUsers()

    def file_view_url(self, file_id):
        return f"https://appwrite.test/v1/storage/buckets/{self.bucket_id}/files/{file_id}/view?project=test"


def make_movie(movie_id, title, **fields):
    movie = {"$id": movie_id, "$createdAt": f"2024-01-{int(movie_id[-1]) + 1:02d}T10:00:00.000+00:00",
             "title": title, "description": "", "genre": []}
    movie.update(fields)
    return movie


@pytest.fixture
def db():
    return FakeConnection()
