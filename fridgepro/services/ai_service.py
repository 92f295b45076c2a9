"""Receipt extraction and recipe generation using the Anthropic API."""

import base64
import json
import logging
import math
import re
from dataclasses import dataclass, field

import anthropic
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fridgepro.config import get_settings
from fridgepro.services.ai_prompts import (
    RECEIPT_EXTRACTION_PROMPT,
    RECIPE_GENERATION_SYSTEM_PROMPT,
    get_recipe_generation_prompt,
)

logger = logging.getLogger(__name__)

DIFFICULTY_VALUES = ("easy", "medium", "hard")
DEFAULT_UNIT = "piece"
FALLBACK_INSTRUCTION = "Follow your cooking instincts to assemble and serve this dish."


class AIServiceError(Exception):
    """The AI provider failed or answered with something unusable."""


# --- Raw provider payloads ---


class _RawReceiptItem(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: float | str | None = None
    unit: str | None = None
    notes: str | None = None


class _RawReceipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_receipt: bool = Field(..., alias="isReceipt")
    items: list[_RawReceiptItem] = []


class _RawRecipeIngredient(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: float | str | None = None
    unit: str | None = None
    notes: str | None = None


class _RawRecipe(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str | None = None
    servings: float | str | None = None
    prep_time: float | str | None = Field(None, alias="prepTime")
    cook_time: float | str | None = Field(None, alias="cookTime")
    difficulty: str | None = None
    ingredients: list[_RawRecipeIngredient] = Field(..., min_length=1)
    instructions: list[str] = Field(..., min_length=1)
    image_url: str | None = Field(None, alias="imageUrl")
    tips: list[str] | None = None


# --- Normalized results ---


@dataclass
class ReceiptLine:
    """A product line read from a receipt."""

    name: str
    quantity: float = 1.0
    unit: str = DEFAULT_UNIT
    notes: str | None = None


@dataclass
class ReceiptAnalysis:
    """Outcome of a receipt image analysis."""

    is_receipt: bool
    items: list[ReceiptLine] = field(default_factory=list)


@dataclass
class GeneratedIngredient:
    """Ingredient line of a generated recipe."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    notes: str | None = None


@dataclass
class GeneratedRecipe:
    """Recipe produced by the AI provider, ready to store."""

    title: str
    difficulty: str
    ingredients: list[GeneratedIngredient]
    instructions: list[str]
    description: str | None = None
    servings: int | None = 4
    prep_time: int | None = 15
    cook_time: int | None = 0
    image_url: str | None = None
    tips: list[str] = field(default_factory=list)


@dataclass
class FridgeContextItem:
    """What the user has, as described to the model."""

    name: str
    quantity: float | None = None
    unit: str | None = None


# --- Parsing helpers ---


def extract_json(content: str) -> dict:
    """Parse a JSON object from a model reply.

    Markdown code fences are dropped; if the reply still has text around the
    object, the outermost ``{...}`` block is used.
    """
    trimmed = re.sub(r"```(?:json)?", "", content).strip()
    try:
        return json.loads(trimmed)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", trimmed, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(0))
            except json.JSONDecodeError:
                pass
    logger.warning(f"Unparseable AI response: {content[:500]}")
    raise AIServiceError("Invalid response from the AI model")


def _to_float(value: float | str | None) -> float | None:
    if value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def normalize_number(
    value: float | str | None, default: int | None, allow_zero: bool = False
) -> int | None:
    """Round a model-provided number to an int, falling back to ``default``.

    Negative values, unparseable text and (unless ``allow_zero``) zero all
    yield the default.
    """
    number = _to_float(value)
    if number is None or number < 0 or (number == 0 and not allow_zero):
        return default
    return math.floor(number + 0.5)


def parse_receipt_quantity(value: float | str | None) -> float:
    """Read a receipt quantity like ``"2"``, ``"1,5 kg"`` or ``3``; default 1."""
    if isinstance(value, int | float):
        number = float(value)
    else:
        cleaned = re.sub(r"[^0-9.]", "", str(value or "").replace(",", "."))
        match = re.match(r"\d+(?:\.\d*)?|\.\d+", cleaned)
        number = float(match.group(0)) if match else 0.0
    if not math.isfinite(number) or number <= 0:
        return 1.0
    return number


def normalize_difficulty(value: str | None) -> str:
    if not value:
        return "medium"
    normalized = value.strip().lower()
    return normalized if normalized in DIFFICULTY_VALUES else "medium"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_receipt(raw: dict) -> ReceiptAnalysis:
    """Validate and normalize a receipt extraction payload."""
    try:
        receipt = _RawReceipt.model_validate(raw)
    except ValidationError as e:
        raise AIServiceError(f"Unexpected receipt format from the AI model: {e}") from e

    items = []
    for item in receipt.items:
        name = item.name.strip()
        if not name:
            continue
        items.append(
            ReceiptLine(
                name=name,
                quantity=parse_receipt_quantity(item.quantity),
                unit=_clean(item.unit) or DEFAULT_UNIT,
                notes=_clean(item.notes),
            )
        )
    return ReceiptAnalysis(is_receipt=receipt.is_receipt, items=items)


def normalize_generated_recipe(raw: dict) -> GeneratedRecipe:
    """Validate and normalize a generated recipe payload."""
    try:
        recipe = _RawRecipe.model_validate(raw)
    except ValidationError as e:
        raise AIServiceError(f"Unexpected recipe format from the AI model: {e}") from e

    ingredients = []
    for ingredient in recipe.ingredients:
        if not ingredient.name.strip():
            raise AIServiceError("A generated ingredient has no name")
        quantity = _to_float(ingredient.quantity)
        ingredients.append(
            GeneratedIngredient(
                name=ingredient.name.strip(),
                quantity=quantity if quantity and quantity > 0 else None,
                unit=_clean(ingredient.unit),
                notes=_clean(ingredient.notes),
            )
        )

    instructions = [step.strip() for step in recipe.instructions if step.strip()]
    if not instructions:
        instructions = [FALLBACK_INSTRUCTION]

    return GeneratedRecipe(
        title=recipe.title.strip(),
        description=_clean(recipe.description),
        servings=normalize_number(recipe.servings, 4),
        prep_time=normalize_number(recipe.prep_time, 15, allow_zero=True),
        cook_time=normalize_number(recipe.cook_time, 0, allow_zero=True),
        difficulty=normalize_difficulty(recipe.difficulty),
        ingredients=ingredients,
        instructions=instructions,
        image_url=_clean(recipe.image_url),
        tips=[tip.strip() for tip in recipe.tips or [] if tip.strip()],
    )


class AIService:
    """Client for the Anthropic Messages API."""

    def __init__(self, api_key: str | None, model: str | None = None) -> None:
        """Initialize the AI service.

        Args:
            api_key: Anthropic key (the user's own, or the server fallback)
            model: Model name; defaults to the configured one
        """
        self.api_key = api_key
        self.model = model or get_settings().ai_model
        self._configured = bool(api_key)

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return self._configured

    async def _complete(self, content: list[dict], system: str | None = None) -> str:
        if not self.is_configured:
            raise AIServiceError("No AI API key configured")

        client = anthropic.AsyncAnthropic(api_key=self.api_key)
        kwargs = {"system": system} if system else {}
        try:
            message = await client.messages.create(
                model=self.model,
                max_tokens=4096,
                messages=[{"role": "user", "content": content}],
                **kwargs,
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {e}")
            raise AIServiceError(f"AI provider error: {e}") from e

        text = "".join(block.text for block in message.content if block.type == "text")
        text = text.replace("\r", "").strip()
        if not text:
            raise AIServiceError("No response received from the AI model")
        return text

    async def analyze_receipt_image(self, image_data: bytes, media_type: str) -> ReceiptAnalysis:
        """Read the purchased products from a receipt photo.

        Args:
            image_data: Raw bytes of the image
            media_type: MIME type (e.g., "image/jpeg", "image/png")

        Returns:
            Whether the image is a receipt, and its product lines
        """
        image_base64 = base64.standard_b64encode(image_data).decode("utf-8")
        response_text = await self._complete(
            [
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": media_type,
                        "data": image_base64,
                    },
                },
                {"type": "text", "text": RECEIPT_EXTRACTION_PROMPT},
            ]
        )
        return normalize_receipt(extract_json(response_text))

    async def generate_recipe(
        self, prompt: str, fridge_items: list[FridgeContextItem] | None = None
    ) -> GeneratedRecipe:
        """Generate a structured recipe, favoring what is in the fridge."""
        response_text = await self._complete(
            [{"type": "text", "text": get_recipe_generation_prompt(prompt, fridge_items)}],
            system=RECIPE_GENERATION_SYSTEM_PROMPT,
        )
        return normalize_generated_recipe(extract_json(response_text))
