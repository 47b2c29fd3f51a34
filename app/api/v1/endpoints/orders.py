"""
Order endpoints.
Orders created directly or from accepted quotations.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.models.order import OrderStatus
from app.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse,
    OrderItemCreate,
    OrderItemResponse,
)
from app.schemas.base import MessageResponse
from app.services.order import OrderService


router = APIRouter()


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an order",
)
async def create_order(
    data: OrderCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.create(current_user, data)
    return OrderResponse.model_validate(order)


@router.get("", response_model=OrderListResponse, summary="List orders")
async def list_orders(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    order_status: OrderStatus | None = Query(None, alias="status", description="Filter by status"),
    company_id: int | None = Query(None, description="Filter by company"),
    search: str | None = Query(None, description="Search by title or number"),
) -> OrderListResponse:
    """List orders with pagination, newest first."""
    service = OrderService(db)
    skip = (page - 1) * per_page

    orders, total = await service.list(
        skip=skip,
        limit=per_page,
        status=order_status,
        company_id=company_id,
        search=search,
    )

    return OrderListResponse.create(
        items=[OrderResponse.model_validate(o) for o in orders],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{order_id}", response_model=OrderResponse, summary="Get an order")
async def get_order(
    order_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    return OrderResponse.model_validate(order)


@router.patch("/{order_id}", response_model=OrderResponse, summary="Update an order")
async def update_order(
    order_id: int,
    data: OrderUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    order = await service.update(order, data)
    return OrderResponse.model_validate(order)


@router.delete("/{order_id}", response_model=MessageResponse, summary="Delete an order")
async def delete_order(
    order_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    await service.delete(order)
    return MessageResponse(message="Order deleted")


@router.get(
    "/{order_id}/items",
    response_model=list[OrderItemResponse],
    summary="List order items",
)
async def list_items(
    order_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[OrderItemResponse]:
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    return [OrderItemResponse.model_validate(i) for i in await service.list_items(order)]


@router.post(
    "/{order_id}/items",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an item",
)
async def add_item(
    order_id: int,
    data: OrderItemCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    order = await service.add_item(order, data)
    return OrderResponse.model_validate(order)


@router.delete(
    "/{order_id}/items/{item_id}",
    response_model=OrderResponse,
    summary="Remove an item",
)
async def remove_item(
    order_id: int,
    item_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    order = await service.remove_item(order, item_id)
    return OrderResponse.model_validate(order)
