"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    name: str
    phone: str
    line1: str
    line2: str | None = None
    city: str
    state: str
    pincode: str


class BasketItemSchema(BaseModel):
    listing_id: str
    name: str
    price: float = Field(ge=0)
    category: str | None = None
    breed: str | None = None
    weight: str | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    items: list[BasketItemSchema] | None = None  # None: use the stored basket
    total: float | None = Field(default=None, ge=0)
    date: str | None = None
    customer_name: str | None = None
    address: AddressSchema | None = None
    payment_proof: str | None = None  # base64-encoded image
    payment_proof_content_type: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "listing_id": "goat-017",
                            "name": "Boer Buck",
                            "price": 250.0,
                            "category": "Goat",
                            "breed": "Boer",
                            "weight": "45 kg",
                        }
                    ],
                    "total": 250.0,
                    "date": "2026-10-16",
                    "address": {
                        "name": "Asha Rao",
                        "phone": "9800000000",
                        "line1": "12 Farm Road",
                        "city": "Mysuru",
                        "state": "KA",
                        "pincode": "570001",
                    },
                }
            ]
        }
    }


class RejectPaymentRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ListingSnapshotSchema(BaseModel):
    listing_id: str
    name: str
    price: float
    category: str | None = None
    breed: str | None = None
    weight: str | None = None


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    customer_name: str | None = None
    items: list[ListingSnapshotSchema]
    total: float
    date: str | None = None
    status: str
    rejection_reason: str = ""
    address: AddressSchema | None = None
    has_payment_proof: bool = False
    created_at: str | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        address = None
        if order.delivery_address and order.delivery_address.name:
            address = AddressSchema(
                name=order.delivery_address.name,
                phone=order.delivery_address.phone or "",
                line1=order.delivery_address.line1 or "",
                line2=order.delivery_address.line2,
                city=order.delivery_address.city or "",
                state=order.delivery_address.state or "",
                pincode=order.delivery_address.pincode or "",
            )

        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            customer_name=order.customer_name,
            items=[
                ListingSnapshotSchema(
                    listing_id=str(item.listing_id),
                    name=item.name,
                    price=item.price,
                    category=item.category,
                    breed=item.breed,
                    weight=item.weight,
                )
                for item in order.items
            ],
            total=order.total,
            date=order.order_date,
            status=order.status,
            rejection_reason=order.rejection_reason or "",
            address=address,
            has_payment_proof=bool(order.payment_proof_ref),
            created_at=order.created_at.isoformat() if order.created_at else None,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class NotificationSchema(BaseModel):
    id: str
    title: str
    message: str
    icon: str | None = None
    color: str | None = None
    timestamp: int
    seen: bool = False


class StatusResponse(BaseModel):
    status: str = "ok"
