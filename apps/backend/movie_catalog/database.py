"""
Database manager for the movie catalog.

Handles all document store operations including:
- Connection management with PyMongo
- Index setup for the users, movies and reviews collections
- Credential store operations (users)
- Catalog store operations (movies, reviews, rating aggregation)
"""

from typing import List, Optional

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from .config import Config
from .models import MovieData, ReviewData, UserData, serialize_document
from .utils import setup_logger


class DatabaseManager:
    """
    Handles all database operations.

    Responsibilities:
    - Client lifecycle (one MongoClient per process)
    - Index management
    - CRUD for users, movies and reviews
    - Review aggregation (join + average rating + sort)
    """

    COLLECTIONS = ["users", "movies", "reviews"]

    # (collection, index name, keys, options)
    INDEXES = [
        ("users", "username_1", [("username", ASCENDING)], {"unique": True}),
        ("movies", "title_1", [("title", ASCENDING)], {}),
        ("reviews", "movieId_1", [("movieId", ASCENDING)], {}),
    ]

    def __init__(self, config: Config):
        self.config = config
        self.client = self._create_client()
        self.db = self.client.get_default_database(default=config.db_name)
        self.logger = setup_logger("database", config.log_dir)

    def _create_client(self) -> MongoClient:
        """Create a MongoClient; the driver manages its own connection pool."""
        return MongoClient(
            self.config.db_uri,
            serverSelectionTimeoutMS=self.config.db_timeout_ms,
        )

    @property
    def users(self) -> Collection:
        return self.db["users"]

    @property
    def movies(self) -> Collection:
        return self.db["movies"]

    @property
    def reviews(self) -> Collection:
        return self.db["reviews"]

    def ping(self) -> None:
        """Round-trip to the server. Raises PyMongoError when unreachable."""
        self.client.admin.command("ping")

    def close(self) -> None:
        """Close the client and its pooled connections."""
        self.client.close()

    # ============ SETUP & STATUS ============

    def check_and_create_indexes(self) -> dict:
        """
        Create any missing indexes.

        Returns:
            Dict with "created" and "existing" lists of "collection.index" names
        """
        result = {"created": [], "existing": []}
        for collection_name, index_name, keys, options in self.INDEXES:
            collection = self.db[collection_name]
            label = f"{collection_name}.{index_name}"
            if index_name in collection.index_information():
                result["existing"].append(label)
                continue
            collection.create_index(keys, name=index_name, **options)
            self.logger.info(f"Created index: {label}")
            result["created"].append(label)
        return result

    def get_status(self) -> dict:
        """Get document counts for every collection."""
        return {name: self.db[name].count_documents({}) for name in self.COLLECTIONS}

    # ============ USERS ============

    def create_user(self, user: UserData) -> bool:
        """
        Insert a user whose password is already hashed.

        Returns:
            False if the username is taken (unique index), True otherwise
        """
        try:
            self.users.insert_one(user.to_dict())
            return True
        except DuplicateKeyError as e:
            self.logger.warning(f"Duplicate username {user.username}: {e}")
            return False

    def find_user_by_username(self, username: str) -> Optional[UserData]:
        """Get a user, including the password hash, or None."""
        doc = self.users.find_one(
            {"username": username},
            {"name": 1, "username": 1, "password": 1},
        )
        if not doc:
            return None
        return UserData.from_document(doc)

    # ============ MOVIES ============

    def insert_movie(self, movie: MovieData) -> dict:
        """Insert a movie and return the stored document."""
        doc = movie.to_dict()
        result = self.movies.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_document(doc)

    def get_movies(self) -> List[dict]:
        """Get all movies in natural order."""
        return [serialize_document(doc) for doc in self.movies.find()]

    def get_movie(self, movie_id: str) -> Optional[dict]:
        """Get a single movie by id, or None."""
        return serialize_document(self.movies.find_one({"_id": ObjectId(movie_id)}))

    def movie_exists(self, movie_id: str) -> bool:
        """Check if a movie exists."""
        return self.movies.count_documents({"_id": ObjectId(movie_id)}, limit=1) > 0

    def update_movie(self, movie_id: str, fields: dict) -> Optional[dict]:
        """Set fields on a movie and return the updated document, or None."""
        doc = self.movies.find_one_and_update(
            {"_id": ObjectId(movie_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_document(doc)

    def delete_movie(self, movie_id: str) -> Optional[dict]:
        """Delete a movie and return the removed document, or None."""
        return serialize_document(self.movies.find_one_and_delete({"_id": ObjectId(movie_id)}))

    # ============ REVIEWS ============

    def insert_review(self, review: ReviewData) -> dict:
        """Insert a review and return the stored document."""
        doc = review.to_dict()
        result = self.reviews.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_document(doc)

    @staticmethod
    def reviews_pipeline(movie_id: Optional[str] = None, sort: bool = True) -> List[dict]:
        """
        Build the aggregation joining movies to their reviews.

        Each movie gains a "reviews" array and an "avgRating" that is the
        mean review rating, or null when there are no reviews.
        """
        pipeline: List[dict] = []
        if movie_id is not None:
            pipeline.append({"$match": {"_id": ObjectId(movie_id)}})
        pipeline.extend([
            {
                "$lookup": {
                    "from": "reviews",
                    "localField": "_id",
                    "foreignField": "movieId",
                    "as": "reviews",
                }
            },
            {
                "$addFields": {
                    "avgRating": {
                        "$cond": {
                            "if": {"$gt": [{"$size": "$reviews"}, 0]},
                            "then": {"$avg": "$reviews.rating"},
                            "else": None,
                        }
                    }
                }
            },
        ])
        if sort:
            # null sorts lowest, so unrated movies land last
            pipeline.append({"$sort": {"avgRating": -1, "title": 1}})
        return pipeline

    def get_movies_with_reviews(self) -> List[dict]:
        """Get all movies with reviews, ordered by avgRating desc then title."""
        cursor = self.movies.aggregate(self.reviews_pipeline())
        return [serialize_document(doc) for doc in cursor]

    def get_movie_with_reviews(self, movie_id: str) -> Optional[dict]:
        """Get a single movie with its reviews and avgRating, or None."""
        docs = list(self.movies.aggregate(self.reviews_pipeline(movie_id, sort=False)))
        if not docs:
            return None
        return serialize_document(docs[0])
