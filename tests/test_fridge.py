"""Fridge API tests."""

from unittest.mock import patch

from fridgepro.models.fridge import FridgeItem
from fridgepro.services.fridge_service import FridgeService


def add_item(client, headers, ingredient, quantity=1, unit="piece", **extra):
    return client.post(
        "/api/v1/fridge",
        headers=headers,
        json={"ingredient_id": ingredient.id, "quantity": quantity, "unit": unit, **extra},
    )


def test_add_fridge_item(client, auth_headers, ingredients):
    """Test adding an ingredient to the fridge."""
    response = add_item(
        client,
        auth_headers,
        ingredients["Tomato"],
        quantity=3,
        unit="pieces",
        expiry_date="2030-01-15T00:00:00Z",
        notes="Very ripe",
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user_id"] == auth_headers.user_id
    assert data["quantity"] == 3
    assert data["unit"] == "pieces"
    assert data["notes"] == "Very ripe"
    assert data["expiry_date"].startswith("2030-01-15")
    assert data["ingredient"]["name"] == "Tomato"
    assert data["ingredient"]["category"]["name"] == "Vegetables"


def test_add_same_ingredient_increments(client, db, auth_headers, ingredients):
    """Adding an ingredient already in the fridge tops up the existing item."""
    first = add_item(
        client, auth_headers, ingredients["Rice"], quantity=500, unit="g", notes="Basmati"
    )
    second = add_item(client, auth_headers, ingredients["Rice"], quantity=250, unit="g")

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["quantity"] == 750
    assert second.json()["notes"] == "Basmati"
    assert db.query(FridgeItem).filter(FridgeItem.user_id == auth_headers.user_id).count() == 1


def test_add_unknown_ingredient(client, auth_headers):
    response = client.post(
        "/api/v1/fridge",
        headers=auth_headers,
        json={"ingredient_id": 999, "quantity": 1, "unit": "piece"},
    )
    assert response.status_code == 404


def test_add_rejects_non_positive_quantity(client, auth_headers, ingredients):
    response = add_item(client, auth_headers, ingredients["Tomato"], quantity=0)
    assert response.status_code == 422


def test_list_fridge_items(client, auth_headers, other_auth_headers, ingredients):
    """Users only see their own fridge."""
    add_item(client, auth_headers, ingredients["Tomato"])
    add_item(client, auth_headers, ingredients["Onion"])
    add_item(client, other_auth_headers, ingredients["Cheese"])

    response = client.get("/api/v1/fridge", headers=auth_headers)
    assert response.status_code == 200
    names = [item["ingredient"]["name"] for item in response.json()]
    assert sorted(names) == ["Onion", "Tomato"]
    # Most recently added first
    assert names[0] == "Onion"


def test_update_fridge_item(client, auth_headers, ingredients):
    response = add_item(client, auth_headers, ingredients["Cheese"], quantity=200, unit="g")
    item_id = response.json()["id"]

    response = client.put(
        f"/api/v1/fridge/{item_id}",
        headers=auth_headers,
        json={"quantity": 150, "notes": "Half eaten"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["quantity"] == 150
    assert data["unit"] == "g"
    assert data["notes"] == "Half eaten"


def test_update_expiry_date_clears_and_keeps(client, auth_headers, ingredients):
    """Empty expiry clears it; omitting it keeps the current one."""
    item_id = add_item(
        client, auth_headers, ingredients["Chicken"], expiry_date="2030-03-01T00:00:00Z"
    ).json()["id"]

    kept = client.put(f"/api/v1/fridge/{item_id}", headers=auth_headers, json={"quantity": 2})
    assert kept.json()["expiry_date"].startswith("2030-03-01")

    cleared = client.put(
        f"/api/v1/fridge/{item_id}", headers=auth_headers, json={"expiry_date": ""}
    )
    assert cleared.status_code == 200
    assert cleared.json()["expiry_date"] is None


def test_update_other_users_item(client, auth_headers, other_auth_headers, ingredients):
    item_id = add_item(client, other_auth_headers, ingredients["Tomato"]).json()["id"]

    response = client.put(f"/api/v1/fridge/{item_id}", headers=auth_headers, json={"quantity": 5})
    assert response.status_code == 404


def test_delete_fridge_item(client, auth_headers, ingredients):
    item_id = add_item(client, auth_headers, ingredients["Tomato"]).json()["id"]

    response = client.delete(f"/api/v1/fridge/{item_id}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/fridge", headers=auth_headers).json() == []


def test_delete_other_users_item(client, auth_headers, other_auth_headers, ingredients):
    item_id = add_item(client, other_auth_headers, ingredients["Tomato"]).json()["id"]
    response = client.delete(f"/api/v1/fridge/{item_id}", headers=auth_headers)
    assert response.status_code == 404


def test_update_to_existing_ingredient_conflicts(client, auth_headers, ingredients):
    """An item cannot be switched to an ingredient that already has its own row."""
    add_item(client, auth_headers, ingredients["Tomato"])
    onion_id = add_item(client, auth_headers, ingredients["Onion"]).json()["id"]

    response = client.put(
        f"/api/v1/fridge/{onion_id}",
        headers=auth_headers,
        json={"ingredient_id": ingredients["Tomato"].id},
    )
    assert response.status_code == 409

    listing = client.get("/api/v1/fridge", headers=auth_headers).json()
    names = [item["ingredient"]["name"] for item in listing]
    assert sorted(names) == ["Onion", "Tomato"]


def test_concurrent_add_conflicts(client, db, auth_headers, ingredients):
    """A duplicate row inserted after the existence check is reported as a conflict."""
    add_item(client, auth_headers, ingredients["Rice"], quantity=500, unit="g")

    def insert_without_lookup(self, user_id, ingredient_id, quantity, unit, **kwargs):
        item = FridgeItem(
            user_id=user_id, ingredient_id=ingredient_id, quantity=quantity, unit=unit
        )
        self.db.add(item)
        self.db.flush()
        return item, True

    with patch.object(FridgeService, "add_or_increment", new=insert_without_lookup):
        response = add_item(client, auth_headers, ingredients["Rice"], quantity=250, unit="g")

    assert response.status_code == 409
    rows = db.query(FridgeItem).filter(FridgeItem.user_id == auth_headers.user_id).all()
    assert [row.quantity for row in rows] == [500]
