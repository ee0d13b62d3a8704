"""
Page routes for payment gateway factories web interface
"""
from app.components.confirm_delete import ConfirmDeleteWorkflow
from app.core.database import get_db
from app.core.exceptions import ResourceNotFoundError
from app.core.messages import CookieNotifier, clear_messages, get_messages
from app.core.routing import RequestRouter
from app.core.templates import render_template
from app.models.payment_gateway_factory import PaymentGatewayFactory
from app.services.factory_service import FactoryService
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

router = APIRouter(tags=["factories_pages"])


def _workflow(request: Request, db: Session, notifier: CookieNotifier) -> ConfirmDeleteWorkflow:
    return ConfirmDeleteWorkflow(
        store=FactoryService(db),
        notifier=notifier,
        router=RequestRouter(request),
        resource_type=PaymentGatewayFactory.__tablename__,
    )


def _load_or_404(db: Session, factory_id: str) -> PaymentGatewayFactory:
    try:
        return FactoryService(db).load(factory_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/factories", response_class=HTMLResponse, name="factories_list")
async def factories_list(request: Request, db: Session = Depends(get_db)):
    """List all payment gateway factories"""
    factories = FactoryService(db).list_factories()
    response = render_template(
        "factories/list.html",
        {
            "factories": factories,
            "messages": get_messages(request),
        },
        request,
    )
    return clear_messages(request, response)


@router.get("/factories/{factory_id}/delete", response_class=HTMLResponse, name="factory_delete_form")
async def factory_delete_form(request: Request, factory_id: str, db: Session = Depends(get_db)):
    """Delete confirmation page"""
    factory = _load_or_404(db, factory_id)
    prompt = _workflow(request, db, CookieNotifier(request)).render_prompt(factory)
    return render_template(
        "factories/delete_confirm.html",
        {
            "factory": factory,
            "prompt": prompt,
        },
        request,
    )


@router.post("/factories/{factory_id}/delete", name="factory_delete_submit")
async def factory_delete_submit(request: Request, factory_id: str, db: Session = Depends(get_db)):
    """Confirmed delete: remove the factory and go back to the list"""
    factory = _load_or_404(db, factory_id)
    notifier = CookieNotifier(request)
    try:
        target = _workflow(request, db, notifier).confirm_delete(factory)
    except ResourceNotFoundError as e:
        # Deleted by someone else between load and delete
        raise HTTPException(status_code=404, detail=e.message)

    response = RedirectResponse(url=target.url, status_code=target.status_code)
    return notifier.apply(response)
