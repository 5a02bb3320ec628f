"""MongoDB connection setup for the mongo storage backend."""

import logging

import certifi
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from medscribe.core.config import DatabaseSettings

from .models.document_m import StoredDocumentMongo

logger = logging.getLogger(__name__)


async def init_mongo(database: DatabaseSettings) -> AsyncIOMotorClient:
    """Connect to MongoDB and register the Beanie document models."""
    mongo_uri = database.uri

    # Enable TLS only for Atlas SRV URIs
    if mongo_uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            mongo_uri,
            serverSelectionTimeoutMS=15000,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=15000)

    try:
        await init_beanie(
            database=client[database.db_name],
            document_models=[StoredDocumentMongo],
        )
    except PyMongoError:
        client.close()
        raise
    logger.info(f"✅ Database connection established (db: {database.db_name})")
    return client
