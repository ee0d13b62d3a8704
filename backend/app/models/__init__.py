"""
SQLAlchemy models
"""
from app.core.database import Base  # noqa: F401
# Import all models here so Alembic can detect them
from app.models.payment_gateway_factory import (  # noqa: F401
    FACTORY_ID_PATTERN, PaymentGatewayFactory)
