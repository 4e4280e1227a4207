from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Query, Request, Response, WebSocket
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from returns.result import Success

from bakery_pos.adapters.inbound.web.schemas import (
    CreateOrderRequest,
    DashboardStatsOut,
    DeletedOut,
    ErrorResponse,
    OrderOut,
    UpdateOrderRequest,
)
from bakery_pos.adapters.inbound.web.websocket import serve_terminal
from bakery_pos.core.domain.model.errors import (
    OrderError,
    OrderNotFound,
    PersistenceError,
    ValidationError,
)
from bakery_pos.core.ports.outbound.snapshots import order_view_snapshot
from bakery_pos.core.ports.inbound.create_order import OrderDraft, OrderLineDraft
from bakery_pos.core.ports.inbound.delete_order import DeleteOrderCommand
from bakery_pos.core.ports.inbound.get_order import GetOrderQuery, OrderView
from bakery_pos.core.ports.inbound.list_orders import ListOrdersQuery
from bakery_pos.core.ports.inbound.update_order import OrderPatch, UpdateOrderCommand

if TYPE_CHECKING:
    from bakery_pos.bootstrap import UseCases

logger = logging.getLogger(__name__)

RECENT_ORDERS_LIMIT = 5

# camelCase request field -> OrderPatch field
_PATCH_FIELDS = {
    "status": "status",
    "paymentMethod": "payment_method",
    "paymentStatus": "payment_status",
    "notes": "notes",
    "customerId": "customer_id",
    "customerName": "customer_name",
}


def _map_error_to_http(err: OrderError) -> tuple[int, ErrorResponse]:
    if isinstance(err, ValidationError):
        return 400, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, OrderNotFound):
        return 404, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, PersistenceError):
        return 500, ErrorResponse(type=type(err).__name__, message=str(err))

    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


def _to_out(view: OrderView) -> OrderOut:
    return OrderOut.model_validate(order_view_snapshot(view))


def _to_draft(req: CreateOrderRequest) -> OrderDraft:
    return OrderDraft(
        created_by=req.createdBy,
        customer_id=req.customerId,
        customer_name=req.customerName,
        status=req.status,
        subtotal=req.subtotal,
        tax_amount=req.taxAmount,
        total=req.total,
        payment_method=req.paymentMethod,
        payment_status=req.paymentStatus,
        notes=req.notes,
        lines=tuple(
            OrderLineDraft(
                product_id=it.productId,
                product_name=it.productName,
                unit_price=it.unitPrice,
                quantity=it.quantity,
                line_total=it.totalPrice,
            )
            for it in req.items
        ),
    )


def _to_patch(req: UpdateOrderRequest) -> OrderPatch:
    sent = req.model_dump(exclude_unset=True)
    return OrderPatch(**{_PATCH_FIELDS[k]: v for k, v in sent.items()})


def _aware(ts: datetime | None) -> datetime | None:
    # naive query timestamps are store-local time
    if ts is None or ts.tzinfo is not None:
        return ts
    return ts.astimezone()


def create_app(usecases: UseCases, cors_origins: list[str] | None = None) -> FastAPI:
    app = FastAPI(title="bakery_pos")

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # --- exception handlers --------------------------------------------------

    @app.exception_handler(OrderError)
    async def handle_domain_error(_: Request, exc: OrderError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=jsonable_encoder(exc.errors()),
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error: %s", exc)
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "terminals": usecases.notifier.connection_count()}

    @app.get(
        "/api/orders",
        response_model=list[OrderOut],
        responses={400: {"model": ErrorResponse}},
    )
    def list_orders(
        status: str | None = Query(None, min_length=1),
        created_from: datetime | None = Query(None, alias="createdFrom"),
        created_to: datetime | None = Query(None, alias="createdTo"),
    ) -> Any:
        result = usecases.list_orders.list_orders(
            ListOrdersQuery(
                status=status,
                created_from=_aware(created_from),
                created_to=_aware(created_to),
            )
        )
        if isinstance(result, Success):
            return [_to_out(v) for v in result.unwrap()]
        raise result.failure()

    @app.get(
        "/api/orders/by-number/{order_number}",
        response_model=OrderOut,
        responses={404: {"model": ErrorResponse}},
    )
    def get_order_by_number(order_number: str) -> Any:
        result = usecases.get_order.get_order(GetOrderQuery(order_number=order_number))
        if isinstance(result, Success):
            return _to_out(result.unwrap())
        raise result.failure()

    @app.get(
        "/api/orders/{order_id}",
        response_model=OrderOut,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def get_order(order_id: int) -> Any:
        result = usecases.get_order.get_order(GetOrderQuery(order_id=order_id))
        if isinstance(result, Success):
            return _to_out(result.unwrap())
        raise result.failure()

    @app.post(
        "/api/orders",
        response_model=OrderOut,
        status_code=201,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def create_order(req: CreateOrderRequest, response: Response) -> Any:
        result = usecases.create_order.create_order(_to_draft(req))
        if isinstance(result, Success):
            view = result.unwrap()
            response.headers["Location"] = f"/api/orders/{view.order.order_id.value}"
            return _to_out(view)
        raise result.failure()

    @app.patch(
        "/api/orders/{order_id}",
        response_model=OrderOut,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def update_order(order_id: int, req: UpdateOrderRequest) -> Any:
        result = usecases.update_order.update_order(
            UpdateOrderCommand(order_id=order_id, patch=_to_patch(req))
        )
        if isinstance(result, Success):
            return _to_out(result.unwrap())
        raise result.failure()

    @app.delete(
        "/api/orders/{order_id}",
        response_model=DeletedOut,
        responses={404: {"model": ErrorResponse}},
    )
    def delete_order(order_id: int) -> Any:
        result = usecases.delete_order.delete_order(DeleteOrderCommand(order_id=order_id))
        if isinstance(result, Success):
            return DeletedOut(id=result.unwrap().value, message="Order deleted successfully")
        raise result.failure()

    @app.get("/api/dashboard/stats", response_model=DashboardStatsOut)
    def dashboard_stats() -> Any:
        result = usecases.dashboard.dashboard_stats()
        if isinstance(result, Success):
            stats = result.unwrap()
            return DashboardStatsOut(
                todayOrders=stats.today_orders,
                revenue=str(stats.revenue.amount),
                pendingOrders=stats.pending_orders,
                activeProducts=stats.active_products,
            )
        raise result.failure()

    @app.get("/api/dashboard/recent-orders", response_model=list[OrderOut])
    def recent_orders() -> Any:
        result = usecases.list_orders.list_orders(
            ListOrdersQuery(newest_first=True, limit=RECENT_ORDERS_LIMIT)
        )
        if isinstance(result, Success):
            return [_to_out(v) for v in result.unwrap()]
        raise result.failure()

    @app.websocket("/ws")
    async def terminal_socket(websocket: WebSocket) -> None:
        await serve_terminal(websocket, usecases.notifier)

    return app
