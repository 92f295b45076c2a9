"""AI API endpoints: receipt scanning and recipe generation."""

import base64
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from fridgepro.api.dependencies import (
    get_ai_service,
    get_current_user,
    get_fridge_service,
    get_recipe_service,
)
from fridgepro.api.recipes import recipe_to_response
from fridgepro.config import get_settings
from fridgepro.database import get_db
from fridgepro.models.receipt_scan import ReceiptScan
from fridgepro.models.user import User
from fridgepro.schemas.ai import GenerateRecipeRequest
from fridgepro.schemas.receipt_scan import ReceiptScanCreateResponse, ReceiptScanResponse
from fridgepro.schemas.recipe import RecipeResponse
from fridgepro.services.ai_service import AIService, AIServiceError
from fridgepro.services.fridge_service import FridgeService
from fridgepro.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


def require_configured(ai: AIService) -> None:
    if not ai.is_configured:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No AI API key configured. Add one to your profile.",
        )


@router.post("/extract-receipt", response_model=ReceiptScanCreateResponse)
async def extract_receipt(
    file: Annotated[UploadFile, File(description="Receipt image (JPEG, PNG, GIF, or WebP)")],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    ai: Annotated[AIService, Depends(get_ai_service)],
):
    """Upload a receipt image for scanning.

    The receipt is processed in the background; poll the scan until it is
    completed or failed. Products found are added to the fridge.
    """
    from fridgepro.tasks.receipt_scan import process_receipt_scan

    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}",
        )

    image_data = await file.read()

    max_bytes = get_settings().max_upload_bytes
    if len(image_data) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
        )
    if not image_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")

    require_configured(ai)

    scan = ReceiptScan(user_id=current_user.id, status="pending")
    db.add(scan)
    db.commit()
    db.refresh(scan)

    image_data_b64 = base64.b64encode(image_data).decode("utf-8")
    process_receipt_scan.delay(scan.id, image_data_b64, file.content_type)

    return ReceiptScanCreateResponse(
        id=scan.id,
        status="pending",
        message="Receipt uploaded successfully. Processing in background.",
    )


@router.get("/receipt-scans/{scan_id}", response_model=ReceiptScanResponse)
def get_receipt_scan(
    scan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the status and results of a receipt scan."""
    scan = (
        db.query(ReceiptScan)
        .filter(ReceiptScan.id == scan_id, ReceiptScan.user_id == current_user.id)
        .first()
    )
    if not scan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Receipt scan not found",
        )
    return scan


@router.get("/receipt-scans", response_model=list[ReceiptScanResponse])
def list_receipt_scans(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
):
    """List recent receipt scans for the user."""
    return (
        db.query(ReceiptScan)
        .filter(ReceiptScan.user_id == current_user.id)
        .order_by(ReceiptScan.created_at.desc(), ReceiptScan.id.desc())
        .limit(limit)
        .all()
    )


@router.post(
    "/generate-recipe", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED
)
async def generate_recipe(
    request: GenerateRecipeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    ai: Annotated[AIService, Depends(get_ai_service)],
    fridge: Annotated[FridgeService, Depends(get_fridge_service)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Have the AI write a recipe, optionally around the fridge contents, and save it."""
    require_configured(ai)

    fridge_items = fridge.get_context_items(current_user.id) if request.use_fridge else None
    try:
        generated = await ai.generate_recipe(request.prompt, fridge_items)
    except AIServiceError as e:
        logger.warning(f"Recipe generation failed for user {current_user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Recipe generation failed: {e}",
        ) from None

    recipe = recipes.create_generated_recipe(current_user.id, generated)
    return recipe_to_response(recipe, set(), recipes.get_inventory_ingredient_ids(current_user.id))
