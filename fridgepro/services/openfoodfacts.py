"""Product and ingredient lookup using the OpenFoodFacts API."""

import logging
from typing import Any

import httpx

from fridgepro.config import get_settings
from fridgepro.schemas.ingredient import ExternalIngredient, NutritionInfo

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    "code,product_name,product_name_fr,brands,categories,ingredients_text,"
    "ingredients_text_fr,nutriments,allergens_tags,traces_tags,image_url,image_front_url"
)
MAIN_CATEGORIES = (
    "Fruits",
    "Légumes",
    "Viandes",
    "Poissons",
    "Produits laitiers",
    "Céréales",
)
DEFAULT_CATEGORY = "Other"
MAX_INGREDIENT_RESULTS = 20


class OpenFoodFactsError(Exception):
    """OpenFoodFacts could not be reached or answered with an error."""


def extract_main_category(categories: str | None) -> str:
    """Pick the most useful category from a comma-separated OFF list.

    French-tagged (``fr:``) or well-known food families win; otherwise the
    first listed category is used.
    """
    if not categories:
        return DEFAULT_CATEGORY

    category_list = [category.strip() for category in categories.split(",") if category.strip()]
    preferred = [
        category
        for category in category_list
        if "fr:" in category or any(main in category for main in MAIN_CATEGORIES)
    ]
    if preferred:
        return preferred[0].replace("fr:", "").strip()
    return category_list[0] if category_list else DEFAULT_CATEGORY


def _nutrient(nutriments: dict[str, Any], *keys: str) -> float:
    for key in keys:
        value = nutriments.get(key)
        if isinstance(value, int | float):
            return float(value)
    return 0.0


def extract_nutrition(product: dict[str, Any]) -> NutritionInfo | None:
    """Per-100g nutrition from an OFF product, or None when absent."""
    nutriments = product.get("nutriments")
    if not nutriments:
        return None
    return NutritionInfo(
        calories=_nutrient(nutriments, "energy-kcal_100g", "energy_kcal_100g"),
        proteins=_nutrient(nutriments, "proteins_100g"),
        carbohydrates=_nutrient(nutriments, "carbohydrates_100g"),
        fat=_nutrient(nutriments, "fat_100g"),
        fiber=_nutrient(nutriments, "fiber_100g"),
        salt=_nutrient(nutriments, "salt_100g"),
        sugars=_nutrient(nutriments, "sugars_100g"),
    )


def product_name(product: dict[str, Any]) -> str | None:
    name = product.get("product_name_fr") or product.get("product_name")
    if not name or not name.strip():
        return None
    return name.strip()


class OpenFoodFactsService:
    """Service for searching the OpenFoodFacts product database."""

    def __init__(self, base_url: str | None = None, timeout: float = 15.0) -> None:
        self.base_url = (base_url or get_settings().openfoodfacts_base_url).rstrip("/")
        self.timeout = timeout

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"OpenFoodFacts request to {path} failed: {e}")
            raise OpenFoodFactsError(str(e)) from e

    async def search_products(
        self, query: str, page: int = 1, page_size: int = 20
    ) -> dict[str, Any]:
        """Full-text product search.

        Returns:
            Raw OFF search payload with ``products``, ``count``, ``page``...
        """
        return await self._get(
            "/cgi/search.pl",
            params={
                "search_terms": query,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page": page,
                "page_size": page_size,
                "fields": SEARCH_FIELDS,
                "countries": "France",
                "lang": "fr",
            },
        )

    async def get_product_by_barcode(self, barcode: str) -> dict[str, Any] | None:
        """Look up a product by barcode; None when unknown or unreachable."""
        try:
            data = await self._get(f"/api/v0/product/{barcode}.json")
        except OpenFoodFactsError:
            return None
        if data.get("status") == 1:
            return data
        return None

    async def search_ingredients(self, query: str) -> list[ExternalIngredient]:
        """Search products and reduce them to distinct ingredient candidates."""
        data = await self.search_products(query, page_size=50)

        ingredients: dict[str, ExternalIngredient] = {}
        for product in data.get("products") or []:
            name = product_name(product)
            if name is None or name.lower() in ingredients:
                continue
            ingredients[name.lower()] = ExternalIngredient(
                name=name,
                category=extract_main_category(product.get("categories")),
                nutritional_info=extract_nutrition(product),
                image=product.get("image_front_url"),
                source_id=product.get("code"),
            )
        return list(ingredients.values())[:MAX_INGREDIENT_RESULTS]


def get_openfoodfacts_service() -> OpenFoodFactsService:
    """Get an OpenFoodFacts service instance."""
    return OpenFoodFactsService()
