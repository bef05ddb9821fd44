from appwrite.client import Client
from appwrite.services.account import Account
from appwrite.services.databases import Databases
from appwrite.services.storage import Storage
from appwrite.services.users import Users
from dotenv import load_dotenv
import os


DEFAULT_ENDPOINT = "https://fra.cloud.appwrite.io/v1"
DEFAULT_PROJECT_ID = "dj-afro-movies-2"


# Appwrite Connection
class AppwriteConnection:
    def __init__(self, endpoint, project_id, api_key=None,
                 database_id="movies_db", collection_id="movies", bucket_id="media_files"):
        self.endpoint = endpoint.rstrip("/")
        self.project_id = project_id
        self.database_id = database_id
        self.collection_id = collection_id
        self.bucket_id = bucket_id

        self.client = Client()
        self.client.set_endpoint(self.endpoint)
        self.client.set_project(project_id)
        if api_key:
            self.client.set_key(api_key)

        self.databases = Databases(self.client)
        self.storage = Storage(self.client)
        self.account = Account(self.client)
        self.users = Users(self.client)

    def file_view_url(self, file_id):
        return f"{self.endpoint}/storage/buckets/{self.bucket_id}/files/{file_id}/view?project={self.project_id}"


def Connect():
    # Credentials come from .env or the process environment
    load_dotenv()
    db = AppwriteConnection(
        os.getenv("APPWRITE_ENDPOINT", DEFAULT_ENDPOINT),
        os.getenv("APPWRITE_PROJECT_ID", DEFAULT_PROJECT_ID),
        api_key=os.getenv("APPWRITE_API_KEY"),
        database_id=os.getenv("APPWRITE_DATABASE_ID", "movies_db"),
        collection_id=os.getenv("APPWRITE_MOVIES_COLLECTION_ID", "movies"),
        bucket_id=os.getenv("APPWRITE_MEDIA_BUCKET_ID", "media_files"),
    )

    return db
