"""
Payment gateway factory configuration model
"""
import re

from app.components.contracts import (DEFAULT_DELETED_MESSAGE_TEMPLATE,
                                      DEFAULT_QUESTION_TEMPLATE)
from app.core.database import Base
from app.utils.datetime_utils import isoformat_or_none, utc_now
from sqlalchemy import Boolean, Column, DateTime, String, Text

FACTORY_ID_PATTERN = re.compile(r"^[a-z0-9_-]+$")


class PaymentGatewayFactory(Base):
    """
    Named payment gateway configuration (an ePayco "factory")

    Identified by a machine name; ``label`` is what users see.
    """
    __tablename__ = "payment_gateway_factories"

    # Where users land after cancelling or confirming a delete
    collection_route = "factories_list"
    question_template = DEFAULT_QUESTION_TEMPLATE
    deleted_message_template = DEFAULT_DELETED_MESSAGE_TEMPLATE

    id = Column(String(64), primary_key=True)  # Machine name, e.g. "acme_gateway"
    label_text = Column("label", String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Gateway credentials
    customer_id = Column(String(64), nullable=True)
    public_key = Column(String(255), nullable=True)
    test_mode = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<PaymentGatewayFactory(id='{self.id}', label='{self.label_text}')>"

    def label(self) -> str:
        """Human-readable label"""
        return self.label_text

    def to_dict(self):
        """Convert to dictionary"""
        return {
            "id": self.id,
            "label": self.label_text,
            "description": self.description,
            "customer_id": self.customer_id,
            "public_key": self.public_key,
            "test_mode": self.test_mode,
            "created_at": isoformat_or_none(self.created_at),
            "updated_at": isoformat_or_none(self.updated_at),
        }
