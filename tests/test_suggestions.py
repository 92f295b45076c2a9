"""Tests for the recipe suggestion ranking."""

import pytest

from fridgepro.services.suggestions import (
    RecipeSnapshot,
    compatibility_score,
    score_recipe,
    suggest_recipes,
)

TOMATO, ONION, GARLIC, LEEK, CHICKEN, RICE = range(1, 7)


def recipe(recipe_id, *ingredient_ids):
    return RecipeSnapshot.of(recipe_id, ingredient_ids)


def ids(suggestions):
    return [s.recipe.id for s in suggestions]


class TestCompatibilityScore:
    @pytest.mark.parametrize(
        ("available", "total", "expected"),
        [
            (0, 3, 0),
            (1, 3, 33),
            (2, 3, 67),
            (3, 3, 100),
            (1, 2, 50),
            (1, 8, 13),
            (1, 200, 1),
            (1, 201, 0),
            (0, 0, 0),
        ],
    )
    def test_rounds_half_up(self, available, total, expected):
        assert compatibility_score(available, total) == expected

    def test_score_recipe_counts(self):
        suggestion = score_recipe(recipe("A", TOMATO, ONION, GARLIC), {TOMATO, ONION})
        assert suggestion.compatibility_score == 67
        assert suggestion.available_count == 2
        assert suggestion.missing_ingredients_count == 1
        assert suggestion.total_count == 3
        assert suggestion.is_favorite is False

    def test_duplicate_lines_count_twice(self):
        """A repeated ingredient line counts once per line in the total."""
        suggestion = score_recipe(recipe("A", TOMATO, TOMATO, GARLIC), {TOMATO})
        assert suggestion.available_count == 2
        assert suggestion.total_count == 3
        assert suggestion.compatibility_score == 67


def test_empty_inventory_returns_nothing():
    catalog = [recipe("A", TOMATO), recipe("B", ONION)]
    assert suggest_recipes(set(), catalog, favorite_recipe_ids={"A"}) == []


def test_orders_by_score():
    catalog = [recipe("A", TOMATO, ONION, GARLIC), recipe("B", TOMATO)]

    result = suggest_recipes({TOMATO, ONION}, catalog)

    assert ids(result) == ["B", "A"]
    assert [s.compatibility_score for s in result] == [100, 67]
    assert [s.missing_ingredients_count for s in result] == [0, 1]


def test_zero_score_recipe_excluded():
    result = suggest_recipes({TOMATO}, [recipe("C", GARLIC, LEEK)])
    assert result == []


def test_zero_score_favorite_included():
    result = suggest_recipes({TOMATO}, [recipe("D", CHICKEN)], favorite_recipe_ids={"D"})

    assert len(result) == 1
    assert result[0].recipe.id == "D"
    assert result[0].compatibility_score == 0
    assert result[0].is_favorite is True


def test_keeps_top_results_within_limit():
    # Recipe i needs rice plus i other ingredients, so scores strictly decrease
    catalog = [recipe(f"R{i}", RICE, *range(100, 100 + i)) for i in range(12)]

    result = suggest_recipes({RICE}, list(reversed(catalog)), limit=10)

    assert ids(result) == [f"R{i}" for i in range(10)]


def test_favorites_come_first_in_catalog_order():
    catalog = [
        recipe("A", TOMATO),
        recipe("F1", GARLIC, TOMATO),
        recipe("B", TOMATO, ONION),
        recipe("F2", CHICKEN),
    ]

    result = suggest_recipes({TOMATO, ONION}, catalog, favorite_recipe_ids={"F2", "F1"})

    assert ids(result) == ["F1", "F2", "A", "B"]
    assert [s.is_favorite for s in result] == [True, True, False, False]
    # Favorites keep their real score
    assert result[0].compatibility_score == 50
    assert result[1].compatibility_score == 0


def test_ties_keep_catalog_order():
    catalog = [recipe("A", TOMATO, GARLIC), recipe("B", ONION), recipe("C", ONION, LEEK)]

    result = suggest_recipes({TOMATO, ONION}, catalog)

    assert ids(result) == ["B", "A", "C"]


def test_ties_compare_exact_ratio():
    """1/3 and 33/100 round to the same score but 1/3 ranks higher."""
    catalog = [
        RecipeSnapshot.of("low", (TOMATO,) * 33 + tuple(range(400, 467))),
        recipe("high", TOMATO, GARLIC, LEEK),
    ]

    result = suggest_recipes({TOMATO}, catalog)

    assert [s.compatibility_score for s in result] == [33, 33]
    assert ids(result) == ["high", "low"]


def test_favorites_fill_the_limit():
    catalog = [recipe("A", TOMATO), recipe("F1", CHICKEN), recipe("F2", RICE)]

    result = suggest_recipes({TOMATO}, catalog, favorite_recipe_ids={"F1", "F2"}, limit=2)

    assert ids(result) == ["F1", "F2"]


def test_more_favorites_than_limit_are_truncated():
    catalog = [recipe(f"F{i}", TOMATO) for i in range(5)]
    favorites = {f"F{i}" for i in range(5)}

    result = suggest_recipes({TOMATO}, catalog, favorite_recipe_ids=favorites, limit=3)

    assert ids(result) == ["F0", "F1", "F2"]


def test_unknown_favorite_ids_are_ignored():
    result = suggest_recipes({TOMATO}, [recipe("A", TOMATO)], favorite_recipe_ids={"missing"})
    assert ids(result) == ["A"]


def test_recipe_without_ingredients_scores_zero():
    catalog = [recipe("empty"), recipe("A", TOMATO)]

    assert ids(suggest_recipes({TOMATO}, catalog)) == ["A"]

    favorite = suggest_recipes({TOMATO}, catalog, favorite_recipe_ids={"empty"})
    assert favorite[0].recipe.id == "empty"
    assert favorite[0].compatibility_score == 0
    assert favorite[0].missing_ingredients_count == 0


def test_inputs_are_not_mutated():
    inventory = {TOMATO}
    catalog = [recipe("B", TOMATO, ONION), recipe("A", TOMATO)]
    favorites = {"B"}

    suggest_recipes(inventory, catalog, favorites, limit=1)

    assert inventory == {TOMATO}
    assert [r.id for r in catalog] == ["B", "A"]
    assert [r.ingredient_ids for r in catalog] == [(TOMATO, ONION), (TOMATO,)]
    assert favorites == {"B"}


def test_result_properties_hold():
    inventory = {TOMATO, ONION, RICE}
    catalog = [
        recipe(1, TOMATO, GARLIC),
        recipe(2, LEEK),
        recipe(3, RICE, ONION, TOMATO),
        recipe(4, CHICKEN, RICE),
        recipe(5, GARLIC, LEEK, CHICKEN),
        recipe(6, ONION),
    ]
    favorites = {2, 4}

    result = suggest_recipes(inventory, catalog, favorites, limit=5)

    assert len(result) <= 5
    assert [s.recipe.id for s in result if s.is_favorite] == [2, 4]
    non_favorites = [s for s in result if not s.is_favorite]
    assert all(s.compatibility_score > 0 for s in non_favorites)
    scores = [s.compatibility_score for s in non_favorites]
    assert scores == sorted(scores, reverse=True)
    for s in result:
        assert 0 <= s.compatibility_score <= 100
        assert s.available_count + s.missing_ingredients_count == len(s.recipe.ingredient_ids)
        assert s.compatibility_score == compatibility_score(
            s.available_count, len(s.recipe.ingredient_ids)
        )
