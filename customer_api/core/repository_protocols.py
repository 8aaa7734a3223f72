"""Boundary Protocols — contract between the HTTP router and the document store.

Invariants:
    - Routes depend on CustomerRepository, never on a driver type
    - Customer documents cross the boundary as plain dicts with a string "id"
    - A missing document is None, never an exception

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Any, Protocol

CustomerDocument = dict[str, Any]


class CustomerRepository(Protocol):
    """Contract for customer persistence, implemented by infrastructure."""
    async def find_all(self) -> list[CustomerDocument]: ...
    async def find_by_id(self, customer_id: str) -> CustomerDocument | None: ...
    async def create(self, fields: dict[str, Any]) -> CustomerDocument: ...
    async def replace_by_id(
        self, customer_id: str, fields: dict[str, Any],
    ) -> CustomerDocument | None: ...
    async def delete_by_id(self, customer_id: str) -> CustomerDocument | None: ...
