"""MongoDB Connection Manager — one async client per process, owned by the app lifespan.

Invariants:
    - Exactly one AsyncMongoClient per application instance, stored on app.state
    - connect() never raises for connectivity failures: it logs and returns False
    - Requests made without a reachable server fail at the store call, not here
    - close() is called once at shutdown

Design Decisions:
    - Held on app.state and handed out through get_connection(), not a module
      global, so each app (and each test) owns its client
    - AsyncMongoClient connects lazily; ping() is the only startup round-trip
"""

import logging

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class MongoConnectionManager:
    """Owns the process-wide MongoDB client and the customers collection handle."""

    def __init__(
        self,
        uri: str,
        database: str,
        collection_name: str = "customers",
        server_selection_timeout_ms: int = 5000,
    ):
        self.client = AsyncMongoClient(
            uri, serverSelectionTimeoutMS=server_selection_timeout_ms,
        )
        # A database in the URI path ("mongodb://host/helloworlddb") wins
        self.database = self.client.get_default_database(default=database)
        self.collection_name = collection_name

    @property
    def customers(self) -> AsyncCollection:
        return self.database[self.collection_name]

    async def connect(self) -> bool:
        """Best-effort startup check. Failures are logged, never raised."""
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(
                f"MongoDB connection failed: {e}",
                extra={"error_code": "DATABASE_UNREACHABLE"},
            )
            return False
        logger.info(f"MongoDB is connected (database={self.database.name})")
        return True

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB client closed")


def get_connection(request: Request) -> MongoConnectionManager:
    """FastAPI dependency for the app-wide connection manager."""
    connection = getattr(request.app.state, "mongo", None)
    if connection is None:
        raise RuntimeError("Database not initialized")
    return connection
