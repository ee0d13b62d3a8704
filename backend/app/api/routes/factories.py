"""
API routes for managing payment gateway factories
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ResourceConflictError, ResourceNotFoundError
from app.core.logging_config import LoggingConfig
from app.models.payment_gateway_factory import (FACTORY_ID_PATTERN,
                                                PaymentGatewayFactory)
from app.services.factory_service import FactoryService

router = APIRouter(prefix="/api/factories", tags=["factories"])
logger = LoggingConfig.get_logger(__name__)


class FactoryCreate(BaseModel):
    """Request model for creating factory"""
    id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=FACTORY_ID_PATTERN.pattern,
        description="Machine name (lowercase letters, digits, '_' and '-')"
    )
    label: str = Field(..., min_length=1, max_length=255, description="Human-readable label")
    description: Optional[str] = None
    customer_id: Optional[str] = Field(default=None, max_length=64, description="Gateway customer ID")
    public_key: Optional[str] = Field(default=None, max_length=255, description="Gateway public key")
    test_mode: bool = True


class FactoryUpdate(BaseModel):
    """Request model for updating factory"""
    label: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    customer_id: Optional[str] = Field(default=None, max_length=64)
    public_key: Optional[str] = Field(default=None, max_length=255)
    test_mode: Optional[bool] = None


class FactoryResponse(BaseModel):
    """Response model for factory"""
    id: str
    label: str
    description: Optional[str]
    customer_id: Optional[str]
    public_key: Optional[str]
    test_mode: bool
    created_at: datetime
    updated_at: datetime


def _to_response(factory: PaymentGatewayFactory) -> FactoryResponse:
    return FactoryResponse(
        id=factory.id,
        label=factory.label(),
        description=factory.description,
        customer_id=factory.customer_id,
        public_key=factory.public_key,
        test_mode=factory.test_mode,
        created_at=factory.created_at,
        updated_at=factory.updated_at,
    )


@router.get("/", response_model=List[FactoryResponse])
async def list_factories(db: Session = Depends(get_db)):
    """List all factories"""
    return [_to_response(factory) for factory in FactoryService(db).list_factories()]


@router.post("/", response_model=FactoryResponse)
async def create_factory(factory_data: FactoryCreate, db: Session = Depends(get_db)):
    """Create a new factory"""
    try:
        factory = FactoryService(db).create_factory(
            factory_id=factory_data.id,
            label=factory_data.label,
            description=factory_data.description,
            customer_id=factory_data.customer_id,
            public_key=factory_data.public_key,
            test_mode=factory_data.test_mode,
        )
    except ResourceConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return _to_response(factory)


@router.get("/{factory_id}", response_model=FactoryResponse)
async def get_factory(factory_id: str, db: Session = Depends(get_db)):
    """Get factory by ID"""
    factory = FactoryService(db).get_factory(factory_id)
    if not factory:
        raise HTTPException(status_code=404, detail="Factory not found")
    return _to_response(factory)


@router.patch("/{factory_id}", response_model=FactoryResponse)
async def update_factory(factory_id: str, factory_data: FactoryUpdate, db: Session = Depends(get_db)):
    """Update factory"""
    try:
        factory = FactoryService(db).update_factory(
            factory_id, factory_data.model_dump(exclude_unset=True)
        )
    except ResourceNotFoundError:
        raise HTTPException(status_code=404, detail="Factory not found")
    return _to_response(factory)


@router.delete("/{factory_id}", status_code=204)
async def delete_factory(factory_id: str, db: Session = Depends(get_db)):
    """Delete factory"""
    try:
        FactoryService(db).delete(factory_id)
    except ResourceNotFoundError:
        raise HTTPException(status_code=404, detail="Factory not found")
    logger.info("Factory deleted via API", extra={"resource_id": factory_id})
    return Response(status_code=204)
