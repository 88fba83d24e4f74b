"""FastAPI routes for the Ordering domain: customer orders, staff review and the inbox.

The authentication layer in front of this service resolves the session and
forwards the user id in the ``X-User-Id`` header.
"""

import base64
import binascii

from accounts.store import get_user_store
from fastapi import APIRouter, Header, Request, Response
from payments.proof import ProofBlob
from protean.exceptions import ValidationError
from shared.exceptions import Forbidden

from ordering.api.schemas import (
    CreateOrderRequest,
    NotificationSchema,
    OrderListResponse,
    OrderResponse,
    RejectPaymentRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.order.lifecycle import OrderLifecycle


def _decode_proof(encoded: str | None, content_type: str | None) -> ProofBlob | None:
    if not encoded:
        return None
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError({"payment_proof": ["Payment proof must be base64 encoded"]}) from None
    return ProofBlob(data=data, content_type=content_type or "application/octet-stream")


# ---------------------------------------------------------------------------
# Customer Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_my_orders(x_user_id: str = Header()) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in OrderLifecycle().orders_for(x_user_id)]


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, x_user_id: str = Header()) -> OrderResponse:
    basket_items = [item.model_dump() for item in body.items] if body.items is not None else None
    order = OrderLifecycle().create_order(
        user_id=x_user_id,
        basket_items=basket_items,
        total=body.total,
        customer_name=body.customer_name,
        order_date=body.date,
        delivery_address=body.address.model_dump() if body.address else None,
        proof=_decode_proof(body.payment_proof, body.payment_proof_content_type),
    )
    return OrderResponse.from_order(order)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_my_order(order_id: str, x_user_id: str = Header()) -> OrderResponse:
    order = OrderLifecycle().get_order(order_id)
    if not order.is_owned_by(x_user_id):
        raise Forbidden()
    return OrderResponse.from_order(order)


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, x_user_id: str = Header()) -> OrderResponse:
    order = OrderLifecycle().cancel_order(order_id, requester_id=x_user_id)
    return OrderResponse.from_order(order)


@order_router.put("/{order_id}/proof", response_model=OrderResponse)
async def resubmit_proof(order_id: str, request: Request, x_user_id: str = Header()) -> OrderResponse:
    """Upload a payment proof as the raw request body (image bytes)."""
    blob = ProofBlob(
        data=await request.body(),
        content_type=request.headers.get("content-type", "application/octet-stream"),
    )
    order = OrderLifecycle().resubmit_proof(order_id, requester_id=x_user_id, blob=blob)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Staff Order Router
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_order_router.get("", response_model=OrderListResponse)
async def list_all_orders() -> OrderListResponse:
    return OrderListResponse(orders=[OrderResponse.from_order(order) for order in OrderLifecycle().all_orders()])


@admin_order_router.get("/proof/{order_id}")
async def download_proof(order_id: str) -> Response:
    blob = OrderLifecycle().get_proof(order_id)
    return Response(content=blob.data, media_type=blob.content_type)


@admin_order_router.put("/{order_id}/reject", response_model=StatusResponse)
async def reject_payment(order_id: str, body: RejectPaymentRequest) -> StatusResponse:
    OrderLifecycle().reject_payment(order_id, reason=body.reason)
    return StatusResponse()


@admin_order_router.post("/{order_id}/release", response_model=OrderResponse)
async def release_listings(order_id: str) -> OrderResponse:
    """Finish releasing a cancelled order's listings after a storage fault."""
    order = OrderLifecycle().release_listings(order_id)
    return OrderResponse.from_order(order)


@admin_order_router.put("/{order_id}", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    order = OrderLifecycle().set_order_status(order_id, body.status)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Notification Inbox Router
# ---------------------------------------------------------------------------
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@notification_router.get("", response_model=list[NotificationSchema])
async def list_notifications(x_user_id: str = Header()) -> list[NotificationSchema]:
    records = get_user_store().list_notifications(x_user_id)
    return [NotificationSchema(**record.to_dict()) for record in records]
