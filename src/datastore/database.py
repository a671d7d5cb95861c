"""Database wiring for the persisted entities."""

import pymongo
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from datastore.exceptions import DatabaseError
from datastore.model_store import ModelStore
from datastore.models import Dataset, TutorStudent
from utils.logging import logger


class Database:
    """Holds one model store per entity kind."""

    COLLECTION_DATASETS: str = "datasets"
    COLLECTION_TUTOR_STUDENTS: str = "tutorstudents"

    def __init__(self, mongodb_client: AsyncIOMotorClient, database_name: str) -> None:
        """Initialize stores with a MongoDB client.
        Note: Use Database.setup() to create a properly initialized instance."""
        self.client = mongodb_client
        self._db: AsyncIOMotorDatabase = self.client.get_database(database_name)
        self.datasets: ModelStore[Dataset] = ModelStore(self._db.get_collection(self.COLLECTION_DATASETS), Dataset)
        self.tutor_students: ModelStore[TutorStudent] = ModelStore(
            self._db.get_collection(self.COLLECTION_TUTOR_STUDENTS), TutorStudent
        )

    @classmethod
    async def setup(cls, mongodb_client: AsyncIOMotorClient, database_name: str) -> "Database":
        """Factory method to create a Database and ensure its indexes."""
        try:
            database = cls(mongodb_client, database_name)

            logger.info(f"Ensuring indexes on {database_name}.{cls.COLLECTION_TUTOR_STUDENTS}")
            await database._db.get_collection(cls.COLLECTION_TUTOR_STUDENTS).create_indexes(
                [
                    # Lookups of a tutor's students
                    pymongo.IndexModel([("tutor_id", 1)], background=True),
                    # Lookups of a student's tutors
                    pymongo.IndexModel([("student_id", 1)], background=True),
                ]
            )

            return database

        except Exception as e:
            raise DatabaseError(f"Failed to setup indexes: {str(e)}")
