"""Customer Routes — end-to-end behavior of /customers under the default error policy.

Tests:
    - POST returns 201 with the stored fields plus a generated id
    - unknown valid id → 200 null; malformed id → 500 "Error ..."
    - PUT merges supplied fields; PATCH ignores nulls
    - DELETE twice → document, then null
    - any store failure → 500 with a plain-text "Error " body
"""

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError


async def _create(client, body):
    res = await client.post("/customers", json=body)
    assert res.status_code == 201
    return res.json()


async def test_create_returns_201_with_generated_id(client, ana):
    res = await client.post("/customers", json=ana)

    assert res.status_code == 201
    body = res.json()
    assert ObjectId.is_valid(body["id"])
    assert {k: body[k] for k in ana} == ana


async def test_create_ignores_unknown_keys(client, fake_collection, ana):
    created = await _create(client, {**ana, "isAdmin": True})

    assert "isAdmin" not in created
    assert "isAdmin" not in fake_collection.documents[0]


async def test_create_accepts_partial_body(client):
    created = await _create(client, {"city": "Medellín"})
    assert set(created) == {"id", "city"}


async def test_create_stores_camel_case_keys(client, fake_collection, ana):
    await _create(client, ana)
    stored = fake_collection.documents[0]
    assert set(stored) == {"_id", "firstName", "lastName", "email", "phoneNumber"}


async def test_list_returns_every_customer(client, ana):
    first = await _create(client, ana)
    second = await _create(client, {**ana, "email": "ana2@x.com"})

    res = await client.get("/customers")

    assert res.status_code == 200
    assert sorted(c["id"] for c in res.json()) == sorted([first["id"], second["id"]])


async def test_list_empty_collection_returns_empty_array(client):
    res = await client.get("/customers")
    assert res.status_code == 200
    assert res.json() == []


async def test_get_existing_customer(client, ana):
    created = await _create(client, ana)

    res = await client.get(f"/customers/{created['id']}")

    assert res.status_code == 200
    assert res.json() == created


async def test_get_unknown_valid_id_returns_200_null(client):
    res = await client.get(f"/customers/{ObjectId()}")

    assert res.status_code == 200
    assert res.text == "null"
    assert res.json() is None


async def test_get_malformed_id_returns_500_error_text(client):
    res = await client.get("/customers/not-an-id")

    assert res.status_code == 500
    assert res.text.startswith("Error ")
    assert "not-an-id" in res.text
    assert res.headers["content-type"].startswith("text/plain")


async def test_put_updates_city_and_keeps_other_fields(client, ana):
    created = await _create(client, ana)

    res = await client.put(f"/customers/{created['id']}", json={"city": "Bogotá"})

    assert res.status_code == 200
    assert res.json() == {**created, "city": "Bogotá"}


async def test_put_explicit_null_clears_field(client, ana):
    created = await _create(client, {**ana, "country": "Colombia"})

    res = await client.put(f"/customers/{created['id']}", json={"country": None})

    assert res.status_code == 200
    assert res.json()["country"] is None


async def test_put_unknown_id_returns_200_null_and_writes_nothing(
    client, fake_collection,
):
    res = await client.put(f"/customers/{ObjectId()}", json={"city": "Cali"})

    assert res.status_code == 200
    assert res.json() is None
    assert fake_collection.documents == []


async def test_put_malformed_id_returns_500(client):
    res = await client.put("/customers/xyz", json={"city": "Cali"})
    assert res.status_code == 500
    assert res.text.startswith("Error ")


async def test_patch_sets_only_supplied_non_null_fields(client, ana):
    created = await _create(client, {**ana, "city": "Cali"})

    res = await client.patch(
        f"/customers/{created['id']}",
        json={"email": "ana@new.com", "city": None},
    )

    assert res.status_code == 200
    assert res.json() == {**created, "email": "ana@new.com"}


async def test_patch_ignores_unrelated_keys(client, ana):
    created = await _create(client, ana)

    res = await client.patch(f"/customers/{created['id']}", json={"sub": "x"})

    assert res.status_code == 200
    assert res.json() == created


async def test_delete_twice_returns_document_then_null(client, ana):
    created = await _create(client, ana)

    first = await client.delete(f"/customers/{created['id']}")
    second = await client.delete(f"/customers/{created['id']}")

    assert first.status_code == 200
    assert first.json() == created
    assert second.status_code == 200
    assert second.json() is None


async def test_deleted_customer_no_longer_listed(client, ana):
    created = await _create(client, ana)
    await client.delete(f"/customers/{created['id']}")

    res = await client.get("/customers")

    assert res.json() == []


async def test_store_failure_returns_500_error_text(client, fake_collection):
    fake_collection.fail_with = ServerSelectionTimeoutError("mongo:27017: timed out")

    for res in (
        await client.get("/customers"),
        await client.get(f"/customers/{ObjectId()}"),
        await client.post("/customers", json={"firstName": "Ana"}),
        await client.put(f"/customers/{ObjectId()}", json={"city": "Cali"}),
        await client.patch(f"/customers/{ObjectId()}", json={"city": "Cali"}),
        await client.delete(f"/customers/{ObjectId()}"),
    ):
        assert res.status_code == 500
        assert res.text == "Error mongo:27017: timed out"


async def test_invalid_body_type_returns_500_error_text(client):
    res = await client.post("/customers", json={"firstName": 123})

    assert res.status_code == 500
    assert res.text.startswith("Error ")
