"""Initial schema

Revision ID: 0b7c1e2f9a41
Revises:
Create Date: 2026-10-18 10:12:44.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0b7c1e2f9a41"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
    ]


def user_fk() -> sa.Column:
    return sa.Column(
        "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("ai_api_key", sa.String(255), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("icon", sa.String(20), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_categories_id", "categories", ["id"])

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("calories", sa.Float(), nullable=True),
        sa.Column("protein", sa.Float(), nullable=True),
        sa.Column("carbs", sa.Float(), nullable=True),
        sa.Column("fat", sa.Float(), nullable=True),
        sa.Column("fiber", sa.Float(), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_ingredients_id", "ingredients", ["id"])
    op.create_index("ix_ingredients_category_id", "ingredients", ["category_id"])

    op.create_table(
        "fridge_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(50), nullable=False),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "added_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        *timestamps(),
        sa.UniqueConstraint("user_id", "ingredient_id", name="uq_fridge_user_ingredient"),
    )
    op.create_index("ix_fridge_items_id", "fridge_items", ["id"])
    op.create_index("ix_fridge_items_user_id", "fridge_items", ["user_id"])
    op.create_index("ix_fridge_items_ingredient_id", "fridge_items", ["ingredient_id"])

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("instructions", sa.JSON(), nullable=False),
        sa.Column("prep_time", sa.Integer(), nullable=True),
        sa.Column("cook_time", sa.Integer(), nullable=True),
        sa.Column("servings", sa.Integer(), nullable=False),
        sa.Column("difficulty", sa.String(10), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("source", sa.String(20), nullable=False),
        sa.Column(
            "created_by_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *timestamps(),
    )
    op.create_index("ix_recipes_id", "recipes", ["id"])
    op.create_index("ix_recipes_created_by_id", "recipes", ["created_by_id"])

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(50), nullable=False),
        sa.Column("notes", sa.String(255), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_recipe_ingredients_id", "recipe_ingredients", ["id"])
    op.create_index("ix_recipe_ingredients_recipe_id", "recipe_ingredients", ["recipe_id"])
    op.create_index(
        "ix_recipe_ingredients_ingredient_id", "recipe_ingredients", ["ingredient_id"]
    )

    op.create_table(
        "favorite_recipes",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "added_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
    )
    op.create_index("ix_favorite_recipes_id", "favorite_recipes", ["id"])
    op.create_index("ix_favorite_recipes_user_id", "favorite_recipes", ["user_id"])
    op.create_index("ix_favorite_recipes_recipe_id", "favorite_recipes", ["recipe_id"])

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        *timestamps(),
    )
    op.create_index("ix_shopping_lists_id", "shopping_lists", ["id"])
    op.create_index("ix_shopping_lists_user_id", "shopping_lists", ["user_id"])

    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "shopping_list_id",
            sa.Integer(),
            sa.ForeignKey("shopping_lists.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(50), nullable=False),
        sa.Column("notes", sa.String(255), nullable=True),
        sa.Column("purchased", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
    )
    op.create_index("ix_shopping_list_items_id", "shopping_list_items", ["id"])
    op.create_index(
        "ix_shopping_list_items_shopping_list_id", "shopping_list_items", ["shopping_list_id"]
    )
    op.create_index(
        "ix_shopping_list_items_ingredient_id", "shopping_list_items", ["ingredient_id"]
    )

    op.create_table(
        "receipt_scans",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("parsed_items", sa.JSON(), nullable=True),
        sa.Column("items_added", sa.Integer(), nullable=True),
        sa.Column("items_updated", sa.Integer(), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_receipt_scans_id", "receipt_scans", ["id"])
    op.create_index("ix_receipt_scans_user_id", "receipt_scans", ["user_id"])


def downgrade() -> None:
    op.drop_table("receipt_scans")
    op.drop_table("shopping_list_items")
    op.drop_table("shopping_lists")
    op.drop_table("favorite_recipes")
    op.drop_table("recipe_ingredients")
    op.drop_table("recipes")
    op.drop_table("fridge_items")
    op.drop_table("ingredients")
    op.drop_table("categories")
    op.drop_table("users")
