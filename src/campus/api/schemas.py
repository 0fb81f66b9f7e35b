"""Pydantic request/response schemas for the campus API.

These are the external contracts; they are kept apart from the internal
Protean commands they are translated into.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class IdResponse(BaseModel):
    id: str


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------
class EnsureProfileRequest(BaseModel):
    user_id: str
    email: str
    name: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "idp-user-001",
                    "email": "student@campus.edu",
                    "name": "Sam Student",
                }
            ]
        }
    }


class UpdateProfileRequest(BaseModel):
    name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None


class UpdatePreferencesRequest(BaseModel):
    email_notifications: bool | None = None
    order_updates: bool | None = None
    promotions: bool | None = None
    dietary_type: str | None = None
    spice_level: str | None = None
    favourite_categories: list[str] | None = None
    favourite_cafeterias: list[str] | None = None


class ProfileResponse(BaseModel):
    user_id: str
    email: str
    name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    role: str
    email_notifications: bool
    order_updates: bool
    promotions: bool
    dietary_type: str | None = None
    spice_level: str | None = None
    favourite_categories: list[str] = []
    favourite_cafeterias: list[str] = []


# ---------------------------------------------------------------------------
# Registrations
# ---------------------------------------------------------------------------
class SubmitRegistrationRequest(BaseModel):
    business_name: str
    business_address: str
    contact_number: str
    email: str | None = None
    doc_url: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "business_name": "Taco Corner",
                    "business_address": "Student Union, Level 1",
                    "contact_number": "+1 555 0101",
                }
            ]
        }
    }


class DecisionRequest(BaseModel):
    outcome: str
    rejection_reason: str | None = None


class RegistrationResponse(BaseModel):
    id: str
    user_id: str
    email: str | None = None
    business_name: str
    business_address: str
    contact_number: str
    doc_url: str | None = None
    status: str
    rejection_reason: str | None = None
    created_at: datetime | None = None
    reviewed_at: datetime | None = None


# ---------------------------------------------------------------------------
# Cafeterias
# ---------------------------------------------------------------------------
class ProvisionCafeteriaRequest(BaseModel):
    owner_id: str
    name: str
    location: str | None = None
    description: str | None = None
    category: str | None = None
    image_url: str | None = None


class SetOpenRequest(BaseModel):
    is_open: bool


class UpdateCafeteriaRequest(BaseModel):
    name: str | None = None
    location: str | None = None
    description: str | None = None
    category: str | None = None
    image_url: str | None = None
    estimated_time: str | None = None
    owner_identification_url: str | None = None


class AddMenuItemRequest(BaseModel):
    name: str
    price: float = Field(ge=0)
    description: str | None = None
    category: str | None = None
    is_available: bool = True


class UpdateMenuItemRequest(BaseModel):
    name: str | None = None
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    is_available: bool | None = None


class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    category: str | None = None
    price: float
    is_available: bool


class CafeteriaResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    location: str | None = None
    description: str | None = None
    category: str | None = None
    image_url: str | None = None
    estimated_time: str | None = None
    is_open: bool
    menu: list[MenuItemResponse] = []


class OrderBoardEntryResponse(BaseModel):
    order_id: str
    student_id: str
    queue_number: str | None = None
    status: str
    item_count: int
    total_amount: float
    pickup_time: datetime | None = None
    created_at: datetime | None = None


class OrderBoardResponse(BaseModel):
    orders: list[OrderBoardEntryResponse]
    counts: dict[str, int]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutLineSchema(BaseModel):
    menu_item_id: str
    quantity: int = Field(ge=1)


class CheckoutRequest(BaseModel):
    cafeteria_id: str
    items: list[CheckoutLineSchema]
    pickup_time: datetime | None = None


class AdvanceOrderRequest(BaseModel):
    next_status: str
    reason: str | None = None


class OrderItemResponse(BaseModel):
    menu_item_id: str
    name: str
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    student_id: str
    cafeteria_id: str
    cafeteria_name: str | None = None
    status: str
    progress: int
    queue_number: str | None = None
    pickup_time: datetime
    subtotal: float
    total_amount: float
    cancellation_reason: str | None = None
    items: list[OrderItemResponse]
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------
class SubmitFeedbackRequest(BaseModel):
    rating: int
    comment: str | None = None
    order_id: str | None = None
    photo_url: str | None = None


class ReplyToFeedbackRequest(BaseModel):
    reply_text: str


class FeedbackReplyResponse(BaseModel):
    text: str
    date: datetime | None = None


class FeedbackResponse(BaseModel):
    id: str
    student_id: str
    customer_name: str | None = None
    customer_email: str | None = None
    rating: int
    comment: str | None = None
    photo_url: str | None = None
    order_id: str | None = None
    order_items: list[str] = []
    has_reply: bool
    reply: FeedbackReplyResponse | None = None
    created_at: datetime | None = None


class FeedbackListResponse(BaseModel):
    average_rating: float
    count: int
    distribution: dict[str, int]
    feedback: list[FeedbackResponse]
