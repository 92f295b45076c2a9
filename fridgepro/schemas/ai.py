"""AI feature schemas."""

from pydantic import BaseModel, Field


class GenerateRecipeRequest(BaseModel):
    """Ask the AI provider for a recipe."""

    prompt: str = Field(..., min_length=10, max_length=2000)
    use_fridge: bool = True
