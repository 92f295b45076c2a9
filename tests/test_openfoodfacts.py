"""Tests for the OpenFoodFacts client."""

from unittest.mock import AsyncMock, patch

import pytest

from fridgepro.services.openfoodfacts import (
    OpenFoodFactsError,
    OpenFoodFactsService,
    extract_main_category,
    extract_nutrition,
    product_name,
)


@pytest.mark.parametrize(
    "categories, expected",
    [
        (None, "Other"),
        ("", "Other"),
        ("Snacks, fr:Biscuits, Desserts", "Biscuits"),
        ("Aliments, Produits laitiers, Fromages", "Produits laitiers"),
        ("Boissons, Jus", "Boissons"),
    ],
)
def test_extract_main_category(categories, expected):
    assert extract_main_category(categories) == expected


def test_extract_nutrition():
    nutrition = extract_nutrition(
        {
            "nutriments": {
                "energy-kcal_100g": 52,
                "proteins_100g": 0.3,
                "carbohydrates_100g": 14,
                "sugars_100g": "n/a",
            }
        }
    )
    assert nutrition.calories == 52
    assert nutrition.proteins == 0.3
    assert nutrition.carbohydrates == 14
    assert nutrition.sugars == 0
    assert extract_nutrition({}) is None


def test_product_name_prefers_french():
    assert product_name({"product_name_fr": " Pomme ", "product_name": "Apple"}) == "Pomme"
    assert product_name({"product_name": "Apple"}) == "Apple"
    assert product_name({"product_name": "  "}) is None


class TestOpenFoodFactsService:
    @pytest.mark.asyncio
    async def test_search_ingredients_dedupes_by_name(self):
        service = OpenFoodFactsService(base_url="https://off.test")
        payload = {
            "products": [
                {"code": "1", "product_name": "Lait demi-écrémé", "categories": "fr:Laits"},
                {"code": "2", "product_name": "lait demi-écrémé"},
                {"code": "3", "product_name": ""},
                {"code": "4", "product_name": "Lait entier", "nutriments": {"fat_100g": 3.6}},
            ]
        }

        with patch.object(service, "_get", new=AsyncMock(return_value=payload)) as mock_get:
            results = await service.search_ingredients("lait")

        assert [r.name for r in results] == ["Lait demi-écrémé", "Lait entier"]
        assert results[0].category == "Laits"
        assert results[0].source_id == "1"
        assert results[1].nutritional_info.fat == 3.6
        params = mock_get.call_args.kwargs["params"]
        assert params["search_terms"] == "lait"
        assert params["page_size"] == 50

    @pytest.mark.asyncio
    async def test_search_ingredients_caps_results(self):
        service = OpenFoodFactsService(base_url="https://off.test")
        payload = {"products": [{"product_name": f"Product {i}"} for i in range(40)]}

        with patch.object(service, "_get", new=AsyncMock(return_value=payload)):
            results = await service.search_ingredients("product")

        assert len(results) == 20

    @pytest.mark.asyncio
    async def test_search_propagates_errors(self):
        service = OpenFoodFactsService(base_url="https://off.test")
        with patch.object(service, "_get", new=AsyncMock(side_effect=OpenFoodFactsError("down"))):
            with pytest.raises(OpenFoodFactsError):
                await service.search_ingredients("lait")

    @pytest.mark.asyncio
    async def test_barcode_lookup(self):
        service = OpenFoodFactsService(base_url="https://off.test")
        found = {"status": 1, "product": {"product_name": "Nutella"}}

        with patch.object(service, "_get", new=AsyncMock(return_value=found)) as mock_get:
            assert await service.get_product_by_barcode("3017620422003") == found
        mock_get.assert_called_once_with("/api/v0/product/3017620422003.json")

        with patch.object(service, "_get", new=AsyncMock(return_value={"status": 0})):
            assert await service.get_product_by_barcode("000") is None

        with patch.object(service, "_get", new=AsyncMock(side_effect=OpenFoodFactsError("x"))):
            assert await service.get_product_by_barcode("000") is None
