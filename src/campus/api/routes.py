"""FastAPI routes for the campus domain: profiles, registrations, cafeterias, orders, feedback.

The acting user is identified by the ``X-User-Id`` header and resolved into
an actor variant once per request.
"""

from itertools import islice

from fastapi import APIRouter, Depends, Header
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from campus.api.schemas import (
    AddMenuItemRequest,
    AdvanceOrderRequest,
    CafeteriaResponse,
    CheckoutRequest,
    DecisionRequest,
    EnsureProfileRequest,
    FeedbackListResponse,
    FeedbackReplyResponse,
    FeedbackResponse,
    IdResponse,
    MenuItemResponse,
    OrderBoardEntryResponse,
    OrderBoardResponse,
    OrderItemResponse,
    OrderResponse,
    ProfileResponse,
    ProvisionCafeteriaRequest,
    RegistrationResponse,
    ReplyToFeedbackRequest,
    SetOpenRequest,
    StatusResponse,
    SubmitFeedbackRequest,
    SubmitRegistrationRequest,
    UpdateCafeteriaRequest,
    UpdateMenuItemRequest,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
)
from campus.cafeteria.cafeteria import Cafeteria
from campus.cafeteria.management import (
    AddMenuItem,
    RemoveMenuItem,
    SetCafeteriaOpen,
    UpdateCafeteriaInformation,
    UpdateMenuItem,
    list_cafeterias,
)
from campus.cafeteria.provisioning import ProvisionCafeteria
from campus.cart.session import CartSession, MenuSelection
from campus.checkout.orchestrator import checkout
from campus.exceptions import PermissionDenied
from campus.feedback.queries import feedback_for_cafeteria, period_start, rating_summary
from campus.feedback.reply import ReplyToFeedback
from campus.feedback.submission import SubmitFeedback
from campus.order.order import Order
from campus.order.queries import list_for_student
from campus.order.tracking import AdvanceOrder
from campus.profile.actor import (
    Actor,
    AdminActor,
    OwnerActor,
    require_admin,
    require_owner,
    require_student,
    resolve_actor,
)
from campus.profile.management import EnsureProfile, UpdatePreferences, UpdateProfile
from campus.profile.profile import Profile
from campus.projections.order_board import orders_for_cafeteria, status_counts
from campus.registration.decision import DecideRegistration
from campus.registration.queries import pending_registrations
from campus.registration.submission import SubmitRegistration
from campus.utils.store import store_guard


async def current_actor(x_user_id: str = Header(...)) -> Actor:
    return resolve_actor(x_user_id)


def _dispatch(command):
    with store_guard(command.__class__.__name__):
        return current_domain.process(command, asynchronous=False)


def _assert_self_or_admin(actor: Actor, user_id: str):
    if actor.user_id != user_id and not isinstance(actor, AdminActor):
        raise PermissionDenied({"user_id": ["You can only access your own profile"]})


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _profile_response(profile) -> ProfileResponse:
    return ProfileResponse(
        user_id=str(profile.user_id),
        email=profile.email.address,
        name=profile.name,
        phone=profile.phone.number if profile.phone else None,
        avatar_url=profile.avatar_url,
        role=profile.role,
        email_notifications=profile.email_notifications,
        order_updates=profile.order_updates,
        promotions=profile.promotions,
        dietary_type=profile.dietary_type,
        spice_level=profile.spice_level,
        favourite_categories=list(profile.favourite_categories or []),
        favourite_cafeterias=list(profile.favourite_cafeterias or []),
    )


def _registration_response(request) -> RegistrationResponse:
    return RegistrationResponse(
        id=str(request.id),
        user_id=str(request.user_id),
        email=request.email,
        business_name=request.business_name,
        business_address=request.business_address,
        contact_number=request.contact_number.number,
        doc_url=request.doc_url,
        status=request.status,
        rejection_reason=request.rejection_reason,
        created_at=request.created_at,
        reviewed_at=request.reviewed_at,
    )


def _cafeteria_response(cafeteria) -> CafeteriaResponse:
    return CafeteriaResponse(
        id=str(cafeteria.id),
        owner_id=str(cafeteria.owner_id),
        name=cafeteria.name,
        location=cafeteria.location,
        description=cafeteria.description,
        category=cafeteria.category,
        image_url=cafeteria.image_url,
        estimated_time=cafeteria.estimated_time,
        is_open=cafeteria.is_open,
        menu=[
            MenuItemResponse(
                id=str(item.id),
                name=item.name,
                description=item.description,
                category=item.category,
                price=item.price,
                is_available=item.is_available,
            )
            for item in cafeteria.menu_items
        ],
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        student_id=str(order.student_id),
        cafeteria_id=str(order.cafeteria_id),
        cafeteria_name=order.cafeteria_name,
        status=order.status,
        progress=order.progress,
        queue_number=order.queue_number,
        pickup_time=order.pickup_time,
        subtotal=order.subtotal,
        total_amount=order.total_amount,
        cancellation_reason=order.cancellation_reason,
        items=[
            OrderItemResponse(
                menu_item_id=str(item.menu_item_id),
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in order.items
        ],
        created_at=order.created_at,
    )


def _feedback_response(feedback) -> FeedbackResponse:
    return FeedbackResponse(
        id=str(feedback.id),
        student_id=str(feedback.student_id),
        customer_name=feedback.customer_name,
        customer_email=feedback.customer_email,
        rating=feedback.rating,
        comment=feedback.comment,
        photo_url=feedback.photo_url,
        order_id=str(feedback.order_id) if feedback.order_id else None,
        order_items=list(feedback.order_items or []),
        has_reply=feedback.has_reply,
        reply=(
            FeedbackReplyResponse(text=feedback.reply_text, date=feedback.reply_date) if feedback.has_reply else None
        ),
        created_at=feedback.created_at,
    )


# ---------------------------------------------------------------------------
# Profile Router
# ---------------------------------------------------------------------------
profile_router = APIRouter(prefix="/profiles", tags=["profiles"])


@profile_router.post("", status_code=201, response_model=IdResponse)
async def ensure_profile(body: EnsureProfileRequest) -> IdResponse:
    result = _dispatch(EnsureProfile(user_id=body.user_id, email=body.email, name=body.name))
    return IdResponse(id=result)


@profile_router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(user_id: str, actor: Actor = Depends(current_actor)) -> ProfileResponse:
    _assert_self_or_admin(actor, user_id)
    return _profile_response(current_domain.repository_for(Profile).get(user_id))


@profile_router.put("/{user_id}", response_model=StatusResponse)
async def update_profile(
    user_id: str, body: UpdateProfileRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    _assert_self_or_admin(actor, user_id)
    _dispatch(UpdateProfile(user_id=user_id, name=body.name, phone=body.phone, avatar_url=body.avatar_url))
    return StatusResponse()


@profile_router.put("/{user_id}/preferences", response_model=StatusResponse)
async def update_preferences(
    user_id: str, body: UpdatePreferencesRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    _assert_self_or_admin(actor, user_id)
    _dispatch(UpdatePreferences(user_id=user_id, **body.model_dump(exclude_none=True)))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Registration Router
# ---------------------------------------------------------------------------
registration_router = APIRouter(prefix="/registrations", tags=["registrations"])


@registration_router.post("", status_code=201, response_model=IdResponse)
async def submit_registration(
    body: SubmitRegistrationRequest, actor: Actor = Depends(current_actor)
) -> IdResponse:
    result = _dispatch(
        SubmitRegistration(
            user_id=actor.user_id,
            business_name=body.business_name,
            business_address=body.business_address,
            contact_number=body.contact_number,
            email=body.email,
            doc_url=body.doc_url,
        )
    )
    return IdResponse(id=result)


@registration_router.get("/pending", response_model=list[RegistrationResponse])
async def list_pending_registrations(actor: Actor = Depends(current_actor)) -> list[RegistrationResponse]:
    require_admin(actor)
    return [_registration_response(request) for request in pending_registrations()]


@registration_router.put("/{request_id}/decision", response_model=StatusResponse)
async def decide_registration(
    request_id: str, body: DecisionRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    require_admin(actor)
    outcome = _dispatch(
        DecideRegistration(
            request_id=request_id,
            outcome=body.outcome,
            rejection_reason=body.rejection_reason,
        )
    )
    return StatusResponse(status=outcome)


# ---------------------------------------------------------------------------
# Cafeteria Router
# ---------------------------------------------------------------------------
cafeteria_router = APIRouter(prefix="/cafeterias", tags=["cafeterias"])


@cafeteria_router.get("", response_model=list[CafeteriaResponse])
async def browse_cafeterias(open_only: bool = False) -> list[CafeteriaResponse]:
    return [_cafeteria_response(cafeteria) for cafeteria in list_cafeterias(open_only=open_only)]


@cafeteria_router.post("/provision", status_code=201, response_model=IdResponse)
async def provision_cafeteria(
    body: ProvisionCafeteriaRequest, actor: Actor = Depends(current_actor)
) -> IdResponse:
    require_admin(actor)
    result = _dispatch(ProvisionCafeteria(**body.model_dump(exclude_none=True)))
    return IdResponse(id=result)


@cafeteria_router.get("/{cafeteria_id}", response_model=CafeteriaResponse)
async def get_cafeteria(cafeteria_id: str) -> CafeteriaResponse:
    return _cafeteria_response(current_domain.repository_for(Cafeteria).get(cafeteria_id))


@cafeteria_router.put("/{cafeteria_id}/open", response_model=StatusResponse)
async def set_cafeteria_open(
    cafeteria_id: str, body: SetOpenRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    require_owner(actor)
    _dispatch(SetCafeteriaOpen(cafeteria_id=cafeteria_id, actor_id=actor.user_id, is_open=body.is_open))
    return StatusResponse()


@cafeteria_router.put("/{cafeteria_id}", response_model=StatusResponse)
async def update_cafeteria(
    cafeteria_id: str, body: UpdateCafeteriaRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    require_owner(actor)
    _dispatch(
        UpdateCafeteriaInformation(
            cafeteria_id=cafeteria_id,
            actor_id=actor.user_id,
            **body.model_dump(exclude_none=True),
        )
    )
    return StatusResponse()


@cafeteria_router.post("/{cafeteria_id}/menu", status_code=201, response_model=IdResponse)
async def add_menu_item(
    cafeteria_id: str, body: AddMenuItemRequest, actor: Actor = Depends(current_actor)
) -> IdResponse:
    require_owner(actor)
    result = _dispatch(
        AddMenuItem(
            cafeteria_id=cafeteria_id,
            actor_id=actor.user_id,
            **body.model_dump(exclude_none=True),
        )
    )
    return IdResponse(id=result)


@cafeteria_router.put("/{cafeteria_id}/menu/{item_id}", response_model=StatusResponse)
async def update_menu_item(
    cafeteria_id: str, item_id: str, body: UpdateMenuItemRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    require_owner(actor)
    _dispatch(
        UpdateMenuItem(
            cafeteria_id=cafeteria_id,
            actor_id=actor.user_id,
            menu_item_id=item_id,
            **body.model_dump(exclude_none=True),
        )
    )
    return StatusResponse()


@cafeteria_router.delete("/{cafeteria_id}/menu/{item_id}", response_model=StatusResponse)
async def remove_menu_item(
    cafeteria_id: str, item_id: str, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    require_owner(actor)
    _dispatch(RemoveMenuItem(cafeteria_id=cafeteria_id, actor_id=actor.user_id, menu_item_id=item_id))
    return StatusResponse()


@cafeteria_router.get("/{cafeteria_id}/orders", response_model=OrderBoardResponse)
async def cafeteria_orders(
    cafeteria_id: str, status: str | None = None, actor: Actor = Depends(current_actor)
) -> OrderBoardResponse:
    if not isinstance(actor, AdminActor) and not (
        isinstance(actor, OwnerActor) and actor.cafeteria_id == cafeteria_id
    ):
        raise PermissionDenied({"cafeteria_id": ["Only the cafeteria's owner can view its orders"]})

    return OrderBoardResponse(
        orders=[
            OrderBoardEntryResponse(
                order_id=str(entry.order_id),
                student_id=str(entry.student_id),
                queue_number=entry.queue_number,
                status=entry.status,
                item_count=entry.item_count,
                total_amount=entry.total_amount,
                pickup_time=entry.pickup_time,
                created_at=entry.created_at,
            )
            for entry in orders_for_cafeteria(cafeteria_id, status=status)
        ],
        counts=status_counts(cafeteria_id),
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout_cart(body: CheckoutRequest, actor: Actor = Depends(current_actor)) -> OrderResponse:
    """Rebuild the client's cart against the menu and check it out.

    1. Load the cafeteria and resolve each line to a menu item
    2. Accumulate the lines in a CartSession
    3. Hand the snapshot to checkout
    """
    student = require_student(actor)
    cafeteria = current_domain.repository_for(Cafeteria).get(body.cafeteria_id)

    cart = CartSession(cafeteria.id)
    for line in body.items:
        item = cafeteria.find_menu_item(line.menu_item_id)
        if item is None or not item.is_available:
            raise ValidationError({"menu_item_id": [f"Menu item {line.menu_item_id} is not available"]})
        cart.add_item(MenuSelection.from_menu(cafeteria, item), line.quantity)
    cart.set_pickup_time(body.pickup_time)

    with store_guard("PlaceOrder"):
        order = checkout(student.user_id, cart.snapshot())
    return _order_response(order)


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(limit: int = 50, actor: Actor = Depends(current_actor)) -> list[OrderResponse]:
    return [_order_response(order) for order in islice(list_for_student(actor.user_id), limit)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    allowed = (
        isinstance(actor, AdminActor)
        or actor.user_id == str(order.student_id)
        or (isinstance(actor, OwnerActor) and actor.cafeteria_id == str(order.cafeteria_id))
    )
    if not allowed:
        raise PermissionDenied({"order_id": ["You cannot view this order"]})
    return _order_response(order)


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def advance_order(
    order_id: str, body: AdvanceOrderRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    new_status = _dispatch(
        AdvanceOrder(
            order_id=order_id,
            next_status=body.next_status,
            actor_id=actor.user_id,
            reason=body.reason,
        )
    )
    return StatusResponse(status=new_status)


# ---------------------------------------------------------------------------
# Feedback Router
# ---------------------------------------------------------------------------
feedback_router = APIRouter(prefix="/feedback", tags=["feedback"])


@cafeteria_router.post("/{cafeteria_id}/feedback", status_code=201, response_model=IdResponse)
async def submit_feedback(
    cafeteria_id: str, body: SubmitFeedbackRequest, actor: Actor = Depends(current_actor)
) -> IdResponse:
    student = require_student(actor)
    result = _dispatch(
        SubmitFeedback(
            student_id=student.user_id,
            cafeteria_id=cafeteria_id,
            **body.model_dump(exclude_none=True),
        )
    )
    return IdResponse(id=result)


@cafeteria_router.get("/{cafeteria_id}/feedback", response_model=FeedbackListResponse)
async def list_feedback(cafeteria_id: str, rating: int | None = None, period: str = "all") -> FeedbackListResponse:
    current_domain.repository_for(Cafeteria).get(cafeteria_id)
    summary = rating_summary(cafeteria_id)
    entries = feedback_for_cafeteria(cafeteria_id, rating=rating, since=period_start(period))
    return FeedbackListResponse(
        average_rating=summary["average"],
        count=summary["count"],
        distribution=summary["distribution"],
        feedback=[_feedback_response(feedback) for feedback in entries],
    )


@feedback_router.put("/{feedback_id}/reply", response_model=StatusResponse)
async def reply_to_feedback(
    feedback_id: str, body: ReplyToFeedbackRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    _dispatch(ReplyToFeedback(feedback_id=feedback_id, actor_id=actor.user_id, reply_text=body.reply_text))
    return StatusResponse()
