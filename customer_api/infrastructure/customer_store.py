"""Customer Store — thin MongoDB accessor over the customers collection.

Invariants:
    - One driver call per operation; an empty update reads instead of writing
    - Ids are parsed with bson.ObjectId; a malformed id raises bson.errors.InvalidId
    - Missing documents return None, never raise
    - Updates are merge writes ($set of the supplied keys), never upserts
    - Documents leave this module with "_id" rendered as a string "id"

Design Decisions:
    - No validation and no field whitelist here: the router's schemas decide
      which keys reach the store
"""

import logging
from typing import Any

from bson import ObjectId
from fastapi import Depends
from pymongo import ReturnDocument

from customer_api.core.repository_protocols import CustomerDocument
from customer_api.infrastructure.database import (
    MongoConnectionManager, get_connection,
)

logger = logging.getLogger(__name__)


def to_customer(document: dict[str, Any] | None) -> CustomerDocument | None:
    """Render a stored document for the API: "_id" becomes a leading string "id"."""
    if document is None:
        return None
    fields = {k: v for k, v in document.items() if k != "_id"}
    return {"id": str(document["_id"]), **fields}


class CustomerStore:
    """Implements CustomerRepository against a single MongoDB collection."""

    def __init__(self, collection):
        self._collection = collection

    async def find_all(self) -> list[CustomerDocument]:
        documents = await self._collection.find().to_list(length=None)
        return [to_customer(d) for d in documents]

    async def find_by_id(self, customer_id: str) -> CustomerDocument | None:
        document = await self._collection.find_one({"_id": ObjectId(customer_id)})
        return to_customer(document)

    async def create(self, fields: dict[str, Any]) -> CustomerDocument:
        document = dict(fields)
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(
            "Customer created",
            extra={"customer_id": str(result.inserted_id), "operation": "create"},
        )
        return to_customer(document)

    async def replace_by_id(
        self, customer_id: str, fields: dict[str, Any],
    ) -> CustomerDocument | None:
        oid = ObjectId(customer_id)
        if not fields:
            # MongoDB rejects an empty $set
            return to_customer(await self._collection.find_one({"_id": oid}))
        document = await self._collection.find_one_and_update(
            {"_id": oid},
            {"$set": dict(fields)},
            return_document=ReturnDocument.AFTER,
        )
        return to_customer(document)

    async def delete_by_id(self, customer_id: str) -> CustomerDocument | None:
        document = await self._collection.find_one_and_delete(
            {"_id": ObjectId(customer_id)},
        )
        if document is not None:
            logger.info(
                "Customer deleted",
                extra={"customer_id": customer_id, "operation": "delete"},
            )
        return to_customer(document)


def get_customer_store(
    connection: MongoConnectionManager = Depends(get_connection),
) -> CustomerStore:
    """FastAPI dependency: a store bound to the app's customers collection."""
    return CustomerStore(connection.customers)
