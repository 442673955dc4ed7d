from delivery.addresses.infrastructure.repository import SQLAlchemyDeliveryAddressRepository


def test_add_and_list_addresses(client, signup, auth):
    signup("kim")
    headers = auth("kim")

    r = client.post(
        "/api/address",
        json={"delivery_address": "1 Main St", "delivery_address_info": "home"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["detail_address"] == ""

    r = client.post(
        "/api/address",
        json={"delivery_address": "2 Main St", "delivery_address_info": "office", "detail_address": "5F"},
        headers=headers,
    )
    assert r.status_code == 201

    r = client.get("/api/address", headers=headers)
    assert r.status_code == 200
    assert {a["delivery_address"] for a in r.json()} == {"1 Main St", "2 Main St"}


def test_address_rules(client, signup, auth):
    signup("kim")
    signup("lee")
    kim, lee = auth("kim"), auth("lee")

    for i in range(3):
        r = client.post("/api/address", json={"delivery_address": f"{i} St", "delivery_address_info": "x"}, headers=kim)
        assert r.status_code == 201

    r = client.post("/api/address", json={"delivery_address": "0 St", "delivery_address_info": "x"}, headers=kim)
    assert r.status_code == 409
    assert r.json()["message"] == "Delivery address already exists for this user : 0 St"

    r = client.post("/api/address", json={"delivery_address": "9 St", "delivery_address_info": "x"}, headers=kim)
    assert r.status_code == 400
    assert r.json()["message"] == "You can register at most 3 delivery addresses."

    # another account may use the same address
    r = client.post("/api/address", json={"delivery_address": "0 St", "delivery_address_info": "x"}, headers=lee)
    assert r.status_code == 201
    assert len(client.get("/api/address", headers=lee).json()) == 1


def test_addresses_require_auth(client):
    assert client.get("/api/address").status_code == 401


def test_duplicate_insert_race_is_a_conflict(client, signup, auth, monkeypatch):
    signup("kim")
    headers = auth("kim")
    body = {"delivery_address": "1 Main St", "delivery_address_info": "home"}
    assert client.post("/api/address", json=body, headers=headers).status_code == 201

    async def not_seen(self, account_id, delivery_address):
        return False

    # the pre-check misses the first row, as it would for a concurrent request
    monkeypatch.setattr(SQLAlchemyDeliveryAddressRepository, "exists_for_account", not_seen)
    r = client.post("/api/address", json=body, headers=headers)
    assert r.status_code == 409
    assert r.json()["message"] == "Delivery address already exists for this user : 1 Main St"

    assert len(client.get("/api/address", headers=headers).json()) == 1
