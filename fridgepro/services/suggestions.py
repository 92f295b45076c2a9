"""Recipe suggestions ranked by how much of each recipe the user can cook.

The ranking is a pure function over snapshots that the caller has already
loaded: the ingredient ids in the user's fridge, the recipe catalog, and the
user's favorite recipe ids. Nothing here touches the database.

Ranking rules:

* An empty fridge yields no suggestions at all.
* Favorites are always included, in catalog order, with their real score.
* Other recipes need a score above zero and are ordered by score, highest
  first. Equal scores keep catalog order.
* The combined list (favorites first) is cut at ``limit``.
"""

from collections.abc import Collection, Hashable, Iterable, Sequence
from dataclasses import dataclass
from fractions import Fraction

DEFAULT_SUGGESTION_LIMIT = 10


@dataclass(frozen=True)
class RecipeSnapshot:
    """The parts of a recipe that matter for scoring."""

    id: Hashable
    # One entry per recipe line; a repeated ingredient counts once per line
    ingredient_ids: tuple[Hashable, ...]

    @classmethod
    def of(cls, recipe_id: Hashable, ingredient_ids: Iterable[Hashable]) -> "RecipeSnapshot":
        return cls(id=recipe_id, ingredient_ids=tuple(ingredient_ids))


@dataclass(frozen=True)
class Suggestion:
    """A recipe annotated with how well it matches the fridge."""

    recipe: RecipeSnapshot
    compatibility_score: int
    available_count: int
    missing_ingredients_count: int
    is_favorite: bool

    @property
    def total_count(self) -> int:
        return self.available_count + self.missing_ingredients_count


def compatibility_score(available: int, total: int) -> int:
    """Percentage of available ingredients, rounded half up.

    A recipe without ingredients scores 0.
    """
    if total <= 0:
        return 0
    # Integer form of floor(100 * available / total + 0.5)
    return (200 * available + total) // (2 * total)


def score_recipe(
    recipe: RecipeSnapshot,
    inventory: Collection[Hashable],
    favorite_recipe_ids: Collection[Hashable] = (),
) -> Suggestion:
    """Score a single recipe against the ingredient ids on hand."""
    total = len(recipe.ingredient_ids)
    available = sum(1 for ingredient_id in recipe.ingredient_ids if ingredient_id in inventory)
    return Suggestion(
        recipe=recipe,
        compatibility_score=compatibility_score(available, total),
        available_count=available,
        missing_ingredients_count=total - available,
        is_favorite=recipe.id in favorite_recipe_ids,
    )


def suggest_recipes(
    inventory: Collection[Hashable],
    catalog: Sequence[RecipeSnapshot],
    favorite_recipe_ids: Collection[Hashable] = (),
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[Suggestion]:
    """Rank the catalog against the user's fridge.

    Args:
        inventory: Ingredient ids the user currently holds
        catalog: Every recipe that may be suggested
        favorite_recipe_ids: Recipe ids the user marked as favorite
        limit: Maximum number of suggestions returned

    Returns:
        Favorites first, then the best-scoring other recipes
    """
    if not inventory:
        return []

    inventory = frozenset(inventory)
    favorite_recipe_ids = frozenset(favorite_recipe_ids)

    favorites: list[Suggestion] = []
    others: list[Suggestion] = []
    for recipe in catalog:
        suggestion = score_recipe(recipe, inventory, favorite_recipe_ids)
        if suggestion.is_favorite:
            favorites.append(suggestion)
        elif suggestion.compatibility_score > 0:
            others.append(suggestion)

    # sorted() is stable, so ties stay in catalog order
    others = sorted(
        others,
        key=lambda s: Fraction(s.available_count, s.total_count),
        reverse=True,
    )

    remaining = max(limit - len(favorites), 0)
    return (favorites + others[:remaining])[: max(limit, 0)]
