"""
Payment gateway factory service (SQLAlchemy-backed resource store)
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (ResourceConflictError, ResourceNotFoundError,
                                 StoreDeleteFailedError)
from app.core.logging_config import LoggingConfig
from app.models.payment_gateway_factory import PaymentGatewayFactory

logger = LoggingConfig.get_logger(__name__)

UPDATABLE_FIELDS = ("label", "description", "customer_id", "public_key", "test_mode")


class FactoryService:
    """Service for managing payment gateway factories"""

    def __init__(self, db: Session):
        self.db = db

    def list_factories(self) -> List[PaymentGatewayFactory]:
        """List all factories ordered by label"""
        return (
            self.db.query(PaymentGatewayFactory)
            .order_by(PaymentGatewayFactory.label_text, PaymentGatewayFactory.id)
            .all()
        )

    def get_factory(self, factory_id: str) -> Optional[PaymentGatewayFactory]:
        """Get factory by ID, None if missing"""
        return self.db.get(PaymentGatewayFactory, factory_id)

    def load(self, factory_id: str) -> PaymentGatewayFactory:
        """
        Load factory by ID

        Raises:
            ResourceNotFoundError: if no factory has this ID
        """
        factory = self.get_factory(factory_id)
        if factory is None:
            raise ResourceNotFoundError(factory_id, f"Payment gateway factory {factory_id} not found")
        return factory

    def create_factory(
        self,
        factory_id: str,
        label: str,
        description: Optional[str] = None,
        customer_id: Optional[str] = None,
        public_key: Optional[str] = None,
        test_mode: bool = True,
    ) -> PaymentGatewayFactory:
        """
        Create a new factory

        Raises:
            ResourceConflictError: if the ID is already taken
        """
        if self.get_factory(factory_id) is not None:
            raise ResourceConflictError(factory_id, f"Payment gateway factory {factory_id} already exists")

        factory = PaymentGatewayFactory(
            id=factory_id,
            label_text=label,
            description=description,
            customer_id=customer_id,
            public_key=public_key,
            test_mode=test_mode,
        )
        try:
            self.db.add(factory)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ResourceConflictError(factory_id) from e
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Error creating factory {factory_id}", exc_info=True)
            raise

        self.db.refresh(factory)
        logger.info("Created payment gateway factory", extra={"resource_id": factory_id})
        return factory

    def update_factory(self, factory_id: str, changes: Dict[str, Any]) -> PaymentGatewayFactory:
        """
        Apply a partial update

        Args:
            factory_id: Factory ID
            changes: Field values keyed by public field name; unknown keys are ignored
        """
        factory = self.load(factory_id)
        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                continue
            if field in ("label", "test_mode") and value is None:
                # Required columns
                continue
            setattr(factory, "label_text" if field == "label" else field, value)

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Error updating factory {factory_id}", exc_info=True)
            raise

        self.db.refresh(factory)
        logger.info(
            "Updated payment gateway factory",
            extra={"resource_id": factory_id, "fields": sorted(changes)},
        )
        return factory

    def delete(self, factory_id: str) -> None:
        """
        Delete factory by ID

        Raises:
            ResourceNotFoundError: if the factory does not exist (e.g. already deleted)
            StoreDeleteFailedError: if the database rejects the delete
        """
        try:
            factory = self.load(factory_id)
            self.db.delete(factory)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Error deleting factory {factory_id}: {e}",
                exc_info=True,
                extra={"resource_id": factory_id},
            )
            raise StoreDeleteFailedError(factory_id) from e
