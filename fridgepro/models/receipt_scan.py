"""ReceiptScan model for tracking receipt upload and processing."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from fridgepro.database import Base
from fridgepro.models.mixins import TimestampMixin, UserOwnedMixin


class ReceiptScan(Base, TimestampMixin, UserOwnedMixin):
    """Model for tracking receipt scan uploads and their processing status."""

    __tablename__ = "receipt_scans"

    id = Column(Integer, primary_key=True, index=True)
    status = Column(
        String(20), nullable=False, default="pending"
    )  # pending, processing, completed, failed
    error_message = Column(Text, nullable=True)

    # Lines read from the receipt (list of {name, quantity, unit, notes, fridge_item_id, action})
    parsed_items = Column(JSON, nullable=True)

    # Summary of what was done to the fridge
    items_added = Column(Integer, nullable=True)
    items_updated = Column(Integer, nullable=True)

    # When processing completed
    processed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="receipt_scans")
