"""Ingredient catalog API tests."""

from unittest.mock import AsyncMock, patch

from fridgepro.models.fridge import FridgeItem
from fridgepro.models.ingredient import Ingredient
from fridgepro.schemas.ingredient import ExternalIngredient, NutritionInfo
from fridgepro.services.openfoodfacts import OpenFoodFactsError

SEARCH_PATH = "fridgepro.services.openfoodfacts.OpenFoodFactsService.search_ingredients"


def test_list_ingredients_sorted_by_name(client, auth_headers, ingredients):
    response = client.get("/api/v1/ingredients", headers=auth_headers)
    assert response.status_code == 200
    names = [i["name"] for i in response.json()]
    assert names == sorted(names)
    tomato = next(i for i in response.json() if i["name"] == "Tomato")
    assert tomato["category"]["name"] == "Vegetables"


def test_list_categories(client, auth_headers, ingredients):
    response = client.get("/api/v1/ingredients/categories", headers=auth_headers)
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Vegetables"]


def test_create_ingredient(client, auth_headers):
    """Test creating an ingredient with nutrition values."""
    response = client.post(
        "/api/v1/ingredients",
        headers=auth_headers,
        json={"name": " Leek ", "calories": 61, "protein": 1.5},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Leek"
    assert data["calories"] == 61
    assert data["category"] is None


def test_create_duplicate_ingredient(client, auth_headers, ingredients):
    """Names are unique regardless of case."""
    response = client.post("/api/v1/ingredients", headers=auth_headers, json={"name": "tomato"})
    assert response.status_code == 400


def test_create_ingredient_unknown_category(client, auth_headers):
    response = client.post(
        "/api/v1/ingredients", headers=auth_headers, json={"name": "Leek", "category_id": 999}
    )
    assert response.status_code == 400


def test_create_ingredient_rejects_negative_nutrition(client, auth_headers):
    response = client.post(
        "/api/v1/ingredients", headers=auth_headers, json={"name": "Leek", "calories": -5}
    )
    assert response.status_code == 422


def test_get_ingredient_not_found(client, auth_headers):
    response = client.get("/api/v1/ingredients/999", headers=auth_headers)
    assert response.status_code == 404


def test_update_ingredient(client, auth_headers, ingredients):
    ingredient_id = ingredients["Rice"].id
    response = client.put(
        f"/api/v1/ingredients/{ingredient_id}",
        headers=auth_headers,
        json={"name": "Basmati rice", "carbs": 28},
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Basmati rice"
    assert response.json()["carbs"] == 28


def test_update_ingredient_name_conflict(client, auth_headers, ingredients):
    response = client.put(
        f"/api/v1/ingredients/{ingredients['Rice'].id}",
        headers=auth_headers,
        json={"name": "PASTA"},
    )
    assert response.status_code == 400


def test_delete_unused_ingredient(client, auth_headers, ingredients):
    ingredient_id = ingredients["Salmon"].id
    response = client.delete(f"/api/v1/ingredients/{ingredient_id}", headers=auth_headers)
    assert response.status_code == 204
    missing = client.get(f"/api/v1/ingredients/{ingredient_id}", headers=auth_headers)
    assert missing.status_code == 404


def test_delete_ingredient_in_fridge(client, db, auth_headers, ingredients):
    """An ingredient someone holds cannot be deleted."""
    db.add(
        FridgeItem(
            user_id=auth_headers.user_id,
            ingredient_id=ingredients["Onion"].id,
            quantity=1,
            unit="piece",
        )
    )
    db.commit()

    response = client.delete(f"/api/v1/ingredients/{ingredients['Onion'].id}", headers=auth_headers)
    assert response.status_code == 400


def test_delete_ingredient_in_recipe(client, auth_headers, ingredients, make_recipe):
    make_recipe("Pilaf", ingredients["Rice"])
    response = client.delete(f"/api/v1/ingredients/{ingredients['Rice'].id}", headers=auth_headers)
    assert response.status_code == 400


def test_search_merges_local_and_openfoodfacts(client, auth_headers, ingredients):
    """Local matches come first and external duplicates are dropped."""
    external = [
        ExternalIngredient(name="tomato", category="Légumes"),
        ExternalIngredient(
            name="Tomato sauce",
            category="Sauces",
            nutritional_info=NutritionInfo(calories=29, proteins=1.3),
            source_id="3017620422003",
        ),
    ]
    with patch(SEARCH_PATH, new=AsyncMock(return_value=external)):
        response = client.get("/api/v1/ingredients/search?q=tom", headers=auth_headers)

    assert response.status_code == 200
    results = response.json()
    assert [r["name"] for r in results] == ["Tomato", "Tomato sauce"]
    assert results[0]["source"] == "local"
    assert results[0]["id"] == ingredients["Tomato"].id
    assert results[0]["category"] == "Vegetables"
    assert results[1]["source"] == "openfoodfacts"
    assert results[1]["id"] is None
    assert results[1]["source_id"] == "3017620422003"
    assert results[1]["calories"] == 29


def test_search_caps_results(client, auth_headers):
    external = [ExternalIngredient(name=f"Product {i}", category="Other") for i in range(30)]
    with patch(SEARCH_PATH, new=AsyncMock(return_value=external)):
        response = client.get("/api/v1/ingredients/search?q=product", headers=auth_headers)
    assert len(response.json()) == 20


def test_search_degrades_when_openfoodfacts_fails(client, auth_headers, ingredients):
    with patch(SEARCH_PATH, new=AsyncMock(side_effect=OpenFoodFactsError("timeout"))):
        response = client.get("/api/v1/ingredients/search?q=oni", headers=auth_headers)

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Onion"]


def test_external_search_reports_upstream_failure(client, auth_headers):
    with patch(SEARCH_PATH, new=AsyncMock(side_effect=OpenFoodFactsError("timeout"))):
        response = client.get("/api/v1/ingredients/external/search?q=milk", headers=auth_headers)
    assert response.status_code == 502


def test_external_search(client, auth_headers):
    external = [ExternalIngredient(name="Milk", category="Produits laitiers", source_id="123")]
    with patch(SEARCH_PATH, new=AsyncMock(return_value=external)):
        response = client.get("/api/v1/ingredients/external/search?q=milk", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()[0]["source"] == "openfoodfacts"


def test_delete_ingredient_on_shopping_list(client, auth_headers, ingredients):
    """An ingredient still on a shopping list cannot be deleted."""
    list_id = client.post(
        "/api/v1/shopping-lists", headers=auth_headers, json={"name": "Weekly groceries"}
    ).json()["id"]
    client.post(
        f"/api/v1/shopping-lists/{list_id}/items",
        headers=auth_headers,
        json={"ingredient_id": ingredients["Cheese"].id, "quantity": 1, "unit": "piece"},
    )

    cheese_id = ingredients["Cheese"].id
    response = client.delete(f"/api/v1/ingredients/{cheese_id}", headers=auth_headers)
    assert response.status_code == 400


def test_search_matches_wildcards_literally(client, db, auth_headers, ingredients):
    db.add(Ingredient(name="70% dark chocolate"))
    db.commit()

    with patch(SEARCH_PATH, new=AsyncMock(return_value=[])):
        url = "/api/v1/ingredients/search"
        percent = client.get(url, headers=auth_headers, params={"q": "%"})
        underscore = client.get(url, headers=auth_headers, params={"q": "_"})

    assert [r["name"] for r in percent.json()] == ["70% dark chocolate"]
    assert underscore.json() == []
