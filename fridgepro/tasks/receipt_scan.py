"""Celery task for receipt scanning."""

import asyncio
import base64
import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from fridgepro.celery_app import app as celery_app
from fridgepro.config import get_settings
from fridgepro.database import SessionLocal
from fridgepro.models.receipt_scan import ReceiptScan
from fridgepro.models.user import User
from fridgepro.services.ai_service import AIService, AIServiceError, ReceiptLine
from fridgepro.services.fridge_service import FridgeService, find_or_create_ingredient

logger = logging.getLogger(__name__)


def mark_failed(db: Session, scan: ReceiptScan, message: str) -> dict:
    scan.status = "failed"
    scan.error_message = message
    scan.processed_at = datetime.now(UTC)
    db.commit()
    return {"error": message}


def stock_fridge(
    db: Session, user_id: int, lines: list[ReceiptLine]
) -> tuple[list[dict], int, int]:
    """Put receipt lines into the user's fridge.

    Returns:
        The per-line record, number of new fridge items, number topped up
    """
    fridge = FridgeService(db)
    records = []
    added = 0
    updated = 0

    for line in lines:
        ingredient = find_or_create_ingredient(db, line.name)
        item, created = fridge.add_or_increment(
            user_id, ingredient.id, line.quantity, line.unit, notes=line.notes
        )
        if created:
            added += 1
        else:
            updated += 1
        records.append(
            {
                "name": line.name,
                "quantity": line.quantity,
                "unit": line.unit,
                "notes": line.notes,
                "ingredient_id": ingredient.id,
                "fridge_item_id": item.id,
                "action": "added" if created else "updated",
            }
        )

    return records, added, updated


@celery_app.task(name="tasks.process_receipt_scan")
def process_receipt_scan(scan_id: int, image_data_b64: str, media_type: str) -> dict:
    """Read a receipt photo and stock the fridge with what was bought.

    Args:
        scan_id: ID of the ReceiptScan record
        image_data_b64: Base64-encoded image data
        media_type: MIME type of the image

    Returns:
        Dict with processing results
    """
    db = SessionLocal()
    try:
        scan = db.query(ReceiptScan).filter(ReceiptScan.id == scan_id).first()
        if not scan:
            logger.error(f"ReceiptScan {scan_id} not found")
            return {"error": "Scan not found"}

        scan.status = "processing"
        db.commit()

        user = db.query(User).filter(User.id == scan.user_id).first()
        service = AIService(user.ai_api_key or get_settings().anthropic_api_key)
        if not service.is_configured:
            return mark_failed(db, scan, "No AI API key configured")

        image_data = base64.b64decode(image_data_b64)
        try:
            analysis = asyncio.run(service.analyze_receipt_image(image_data, media_type))
        except AIServiceError as e:
            logger.error(f"Failed to analyze receipt {scan_id}: {e}")
            return mark_failed(db, scan, str(e))

        if not analysis.is_receipt:
            return mark_failed(db, scan, "The image does not look like a receipt")
        if not analysis.items:
            return mark_failed(db, scan, "No products found on the receipt")

        records, items_added, items_updated = stock_fridge(db, scan.user_id, analysis.items)

        scan.status = "completed"
        scan.error_message = None
        scan.parsed_items = records
        scan.items_added = items_added
        scan.items_updated = items_updated
        scan.processed_at = datetime.now(UTC)
        db.commit()
        logger.info(
            f"Receipt scan {scan_id} completed: {items_added} added, {items_updated} updated"
        )

        return {
            "status": "completed",
            "items_added": items_added,
            "items_updated": items_updated,
            "parsed_items": records,
        }

    except Exception as e:
        logger.exception(f"Error processing receipt scan {scan_id}")
        db.rollback()
        try:
            scan = db.query(ReceiptScan).filter(ReceiptScan.id == scan_id).first()
            if scan:
                mark_failed(db, scan, str(e))
        except Exception as db_error:
            logger.error(f"Failed to update scan status: {db_error}")
        return {"error": str(e)}
    finally:
        db.close()
