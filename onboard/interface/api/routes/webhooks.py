"""Identity provider webhook route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from onboard.adapter.error import AdapterError
from onboard.application.usecase.webhook import (
    HandleIdentityEventRequest,
    HandleIdentityEventUseCase,
)
from onboard.domain.error import DomainError
from onboard.interface.error import http_error

router = APIRouter(prefix="/webhooks", tags=["webhooks"], route_class=DishkaRoute)


class WebhookAck(BaseModel):
    success: bool = True


@router.post("/identity", response_model=WebhookAck)
async def identity_webhook(
    request: Request,
    handle_event_use_case: FromDishka[HandleIdentityEventUseCase],
):
    """Receive a signed event from the identity provider.

    Returns 400 for deliveries that fail verification; the failure is
    recorded in the audit log, so it is answered without raising.
    """
    body = await request.body()

    try:
        result = await handle_event_use_case.execute(
            HandleIdentityEventRequest(body=body, headers=dict(request.headers))
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)

    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": result.error},
        )
    return WebhookAck()
