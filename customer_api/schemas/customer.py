"""Customer Schemas — camelCase request bodies and the response document.

Invariants:
    - Unknown request keys are dropped, never stored
    - firstName/lastName/email/phoneNumber are documented as required for
      creation but not enforced: a partial body is stored as sent
    - to_store_fields() only emits keys the client actually sent

Design Decisions:
    - All body fields Optional: enforcing "required" would be validation the
      store never performed
    - Required-at-creation fields listed through json_schema_extra so the
      generated docs still show them
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

REQUIRED_AT_CREATION = ("firstName", "lastName", "email", "phoneNumber")


class CustomerFields(BaseModel):
    """Every writable customer field."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    city: str | None = None
    country: str | None = None

    def to_store_fields(self, drop_nulls: bool = False) -> dict:
        """Keys the client sent, in camelCase. drop_nulls also skips explicit nulls."""
        return self.model_dump(
            by_alias=True, exclude_unset=True, exclude_none=drop_nulls,
        )


class CustomerCreate(CustomerFields):
    """POST /customers body."""
    model_config = ConfigDict(
        json_schema_extra={
            "required": list(REQUIRED_AT_CREATION),
            "example": {
                "firstName": "Pepita",
                "lastName": "Perez",
                "email": "pepita@email.com",
                "phoneNumber": "55555555",
                "city": "Medellín",
                "country": "Colombia",
            },
        },
    )


class CustomerUpdate(CustomerFields):
    """PUT/PATCH /customers/{id} body, any subset of fields."""
    model_config = ConfigDict(
        json_schema_extra={"example": {"city": "Bogotá"}},
    )


class Customer(CustomerFields):
    """Stored customer as returned by the API."""
    id: str = Field(description="Server-assigned ObjectId, 24 hex characters")
