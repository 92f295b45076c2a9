"""Prompt templates for receipt extraction and recipe generation."""

RECEIPT_EXTRACTION_PROMPT = """You extract data from grocery receipts.

1. Check whether the image really is a shopping receipt.
2. If it is not, answer exactly:
{"isReceipt": false, "items": []}
3. If it is, list the purchased products:
   - Give each product a clear, human-readable ingredient name (drop SKU codes, expand abbreviations).
   - Infer the quantity as a number when shown, otherwise 1.
   - Infer the unit (piece, kg, g, L, cl, pack, ...) when shown, otherwise null.
   - Add short notes (organic, on sale, ...) when relevant, otherwise null.
   - Skip tax, totals, store details, payment lines, discounts and coupons.

Respond ONLY with valid JSON, no other text:
{
  "isReceipt": boolean,
  "items": [
    {"name": "Product name", "quantity": number or null, "unit": "unit" or null, "notes": "note" or null}
  ]
}"""


RECIPE_GENERATION_SYSTEM_PROMPT = """You are a creative and precise chef. Write one detailed recipe.

Rules:
- When available ingredients are listed, build the recipe around them and add others only when needed.
- Give a catchy title and a short, appetizing description.
- Pick a sensible number of servings (4 when unspecified).
- Give preparation and cooking times in minutes, even approximate.
- Set difficulty to one of "easy", "medium", "hard".
- List ingredients with a numeric quantity when possible and a unit.
- Instructions are a list of clear steps, one sentence each.
- Optionally add a few tips.

Respond ONLY with valid JSON in exactly this shape:
{
  "title": "...",
  "description": "...",
  "servings": number,
  "prepTime": number,
  "cookTime": number,
  "difficulty": "easy" | "medium" | "hard",
  "ingredients": [{"name": "...", "quantity": number, "unit": "...", "notes": "..."}],
  "instructions": ["...", "..."],
  "imageUrl": "https://..." (optional),
  "tips": ["...", "..."] (optional)
}"""


def describe_fridge(fridge_items) -> str:
    """Render fridge contents as a bullet list for the model."""
    if not fridge_items:
        return "The user did not provide a list of available ingredients."

    lines = []
    for item in fridge_items:
        parts = [item.name]
        if item.quantity:
            parts.append(f"{item.quantity:g}")
        if item.unit:
            parts.append(item.unit)
        lines.append(f"- {' '.join(parts)}")
    return "The user has these ingredients (name, quantity, unit when known):\n" + "\n".join(
        lines
    )


def get_recipe_generation_prompt(request: str, fridge_items=None) -> str:
    """Generate the user turn for recipe generation."""
    return f"""User request:
{request}

{describe_fridge(fridge_items)}"""
