"""Customer Routes — CRUD on /customers, one store call per request.

Invariants:
    - Each handler awaits exactly one CustomerRepository call
    - Every handler goes through _respond(): results and exceptions are
      turned into responses by the app's ErrorPolicy, never inline
    - PUT sends every key the client supplied (explicit null clears a field);
      PATCH sends only supplied non-null keys
    - A missing document is a None result, left to the policy (200/null by default)
"""

import logging
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from customer_api.api.error_handlers import ErrorPolicy, get_error_policy
from customer_api.core.repository_protocols import CustomerRepository
from customer_api.infrastructure.customer_store import get_customer_store
from customer_api.schemas.customer import Customer, CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/customers", tags=["customers"])

_ERROR_RESPONSES = {
    500: {
        "description": "Store failure, including a malformed id",
        "content": {"text/plain": {"example": "Error boom"}},
    },
}


async def _respond(
    operation: str,
    call: Callable[[], Awaitable[Any]],
    policy: ErrorPolicy,
    status_code: int = status.HTTP_200_OK,
    customer_id: str | None = None,
) -> Response:
    """Run one store call and let the policy shape the outcome."""
    try:
        result = await call()
    except Exception as e:
        logger.error(
            f"Customer {operation} failed: {e}",
            exc_info=True,
            extra={"operation": operation, "customer_id": customer_id},
        )
        return policy.error_response(e, operation, customer_id)
    return policy.result_response(result, status_code, customer_id)


@router.get(
    "", summary="Returns all customers",
    responses={200: {"model": list[Customer]}, **_ERROR_RESPONSES},
)
async def list_customers(
    store: CustomerRepository = Depends(get_customer_store),
    policy: ErrorPolicy = Depends(get_error_policy),
):
    return await _respond("list", store.find_all, policy)


@router.get(
    "/{customer_id}", summary="Returns a single customer by id",
    responses={200: {"model": Customer}, **_ERROR_RESPONSES},
)
async def get_customer(
    customer_id: str,
    store: CustomerRepository = Depends(get_customer_store),
    policy: ErrorPolicy = Depends(get_error_policy),
):
    return await _respond(
        "get", lambda: store.find_by_id(customer_id), policy,
        customer_id=customer_id,
    )


@router.post(
    "", summary="Creates a new customer",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": Customer}, **_ERROR_RESPONSES},
)
async def create_customer(
    body: CustomerCreate,
    store: CustomerRepository = Depends(get_customer_store),
    policy: ErrorPolicy = Depends(get_error_policy),
):
    return await _respond(
        "create", lambda: store.create(body.to_store_fields()), policy,
        status_code=status.HTTP_201_CREATED,
    )


@router.put(
    "/{customer_id}", summary="Updates a customer with the supplied fields",
    responses={200: {"model": Customer}, **_ERROR_RESPONSES},
)
async def replace_customer(
    customer_id: str,
    body: CustomerUpdate,
    store: CustomerRepository = Depends(get_customer_store),
    policy: ErrorPolicy = Depends(get_error_policy),
):
    return await _respond(
        "replace",
        lambda: store.replace_by_id(customer_id, body.to_store_fields()),
        policy, customer_id=customer_id,
    )


@router.patch(
    "/{customer_id}", summary="Partially updates a customer",
    responses={200: {"model": Customer}, **_ERROR_RESPONSES},
)
async def update_customer(
    customer_id: str,
    body: CustomerUpdate,
    store: CustomerRepository = Depends(get_customer_store),
    policy: ErrorPolicy = Depends(get_error_policy),
):
    return await _respond(
        "update",
        lambda: store.replace_by_id(
            customer_id, body.to_store_fields(drop_nulls=True),
        ),
        policy, customer_id=customer_id,
    )


@router.delete(
    "/{customer_id}", summary="Deletes a customer",
    responses={200: {"model": Customer}, **_ERROR_RESPONSES},
)
async def delete_customer(
    customer_id: str,
    store: CustomerRepository = Depends(get_customer_store),
    policy: ErrorPolicy = Depends(get_error_policy),
):
    return await _respond(
        "delete", lambda: store.delete_by_id(customer_id), policy,
        customer_id=customer_id,
    )
