"""
Admin / back-office endpoints
=============================

GET  /api/v1/admin/health                    -- simple health check
GET  /api/v1/admin/stats                     -- dashboard counters
CRUD /api/v1/admin/customers|products|drivers
POST /api/v1/admin/orders                    -- create an unassigned order
PUT  /api/v1/admin/orders/{id}               -- edit an order
PATCH /api/v1/admin/orders/{id}/driver       -- assign a driver
DELETE /api/v1/admin/orders/{id}
POST /api/v1/admin/assignments               -- create an order for a driver
POST /api/v1/admin/maintenance/fix-deliveries
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import (
    AssignmentCreateRequest,
    CustomerRequest,
    CustomerResponse,
    DriverAssignRequest,
    DriverCreateRequest,
    DriverResponse,
    DriverUpdateRequest,
    ErrorResponse,
    FixDeliveriesResponse,
    HealthResponse,
    OrderCreateRequest,
    OrderResponse,
    OrderUpdateRequest,
    ProductRequest,
    ProductResponse,
    StatsResponse,
)
from src.config import settings
from src.services.admin import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()


@router.get("/stats", response_model=StatsResponse, summary="Dashboard counters")
@limiter.limit(settings.rate_limit)
async def get_stats(request: Request, db: AsyncSession = Depends(get_db)):
    return await AdminService(db).get_stats()


# ── Customers ─────────────────────────────────────────────────────────


@router.get("/customers", response_model=list[CustomerResponse])
@limiter.limit(settings.rate_limit)
async def list_customers(request: Request, db: AsyncSession = Depends(get_db)):
    return await AdminService(db).list_customers()


@router.post("/customers", status_code=201, response_model=CustomerResponse)
@limiter.limit(settings.rate_limit)
async def create_customer(
    request: Request, body: CustomerRequest, db: AsyncSession = Depends(get_db)
):
    return await AdminService(db).create_customer(**body.model_dump())


@router.put(
    "/customers/{customer_id}", response_model=CustomerResponse, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def update_customer(
    request: Request,
    customer_id: str,
    body: CustomerRequest,
    db: AsyncSession = Depends(get_db),
):
    return await AdminService(db).update_customer(customer_id, **body.model_dump())


@router.delete(
    "/customers/{customer_id}", status_code=204, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def delete_customer(
    request: Request, customer_id: str, db: AsyncSession = Depends(get_db)
):
    await AdminService(db).delete_customer(customer_id)
    return Response(status_code=204)


# ── Products ──────────────────────────────────────────────────────────


@router.get("/products", response_model=list[ProductResponse])
@limiter.limit(settings.rate_limit)
async def list_products(request: Request, db: AsyncSession = Depends(get_db)):
    return await AdminService(db).list_products()


@router.post("/products", status_code=201, response_model=ProductResponse)
@limiter.limit(settings.rate_limit)
async def create_product(
    request: Request, body: ProductRequest, db: AsyncSession = Depends(get_db)
):
    return await AdminService(db).create_product(**body.model_dump())


@router.put(
    "/products/{product_id}", response_model=ProductResponse, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def update_product(
    request: Request,
    product_id: str,
    body: ProductRequest,
    db: AsyncSession = Depends(get_db),
):
    return await AdminService(db).update_product(product_id, **body.model_dump())


@router.delete(
    "/products/{product_id}", status_code=204, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def delete_product(
    request: Request, product_id: str, db: AsyncSession = Depends(get_db)
):
    await AdminService(db).delete_product(product_id)
    return Response(status_code=204)


# ── Drivers ───────────────────────────────────────────────────────────


@router.get("/drivers", response_model=list[DriverResponse])
@limiter.limit(settings.rate_limit)
async def list_drivers(request: Request, db: AsyncSession = Depends(get_db)):
    return await AdminService(db).list_drivers()


@router.post("/drivers", status_code=201, response_model=DriverResponse)
@limiter.limit(settings.rate_limit)
async def create_driver(
    request: Request, body: DriverCreateRequest, db: AsyncSession = Depends(get_db)
):
    return await AdminService(db).create_driver(**body.model_dump())


@router.put(
    "/drivers/{driver_id}", response_model=DriverResponse, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def update_driver(
    request: Request,
    driver_id: str,
    body: DriverUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    fields = body.model_dump()
    if fields["rating"] is None:
        del fields["rating"]
    return await AdminService(db).update_driver(driver_id, **fields)


@router.delete(
    "/drivers/{driver_id}", status_code=204, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def delete_driver(
    request: Request, driver_id: str, db: AsyncSession = Depends(get_db)
):
    await AdminService(db).delete_driver(driver_id)
    return Response(status_code=204)


# ── Orders ────────────────────────────────────────────────────────────


@router.post(
    "/orders",
    status_code=201,
    response_model=OrderResponse,
    responses=NOT_FOUND,
    summary="Create an order for a customer",
    description=(
        "Copies the customer's contact details onto the order and prices "
        "it from the product.  Coordinates default to the customer's."
    ),
)
@limiter.limit(settings.rate_limit)
async def create_order(
    request: Request, body: OrderCreateRequest, db: AsyncSession = Depends(get_db)
):
    return await AdminService(db).create_order(**body.model_dump())


@router.put(
    "/orders/{order_id}", response_model=OrderResponse, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def update_order(
    request: Request,
    order_id: str,
    body: OrderUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await AdminService(db).update_order(order_id, **body.model_dump())


@router.patch(
    "/orders/{order_id}/driver", response_model=OrderResponse, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def assign_driver(
    request: Request,
    order_id: str,
    body: DriverAssignRequest,
    db: AsyncSession = Depends(get_db),
):
    return await AdminService(db).assign_driver_to_order(
        order_id, body.driver_id, body.priority, body.notes
    )


@router.delete(
    "/orders/{order_id}", status_code=204, responses=NOT_FOUND
)
@limiter.limit(settings.rate_limit)
async def delete_order(
    request: Request, order_id: str, db: AsyncSession = Depends(get_db)
):
    await AdminService(db).delete_order(order_id)
    return Response(status_code=204)


@router.post(
    "/assignments",
    status_code=201,
    response_model=OrderResponse,
    responses=NOT_FOUND,
    summary="Create an order already assigned to a driver",
)
@limiter.limit(settings.rate_limit)
async def create_assignment(
    request: Request,
    body: AssignmentCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await AdminService(db).create_delivery_with_assignment(
        **body.model_dump()
    )


@router.post(
    "/maintenance/fix-deliveries",
    response_model=FixDeliveriesResponse,
    summary="Back-fill missing customer / product links on deliveries",
)
@limiter.limit(settings.rate_limit)
async def fix_deliveries(request: Request, db: AsyncSession = Depends(get_db)):
    return await AdminService(db).fix_deliveries_schema()
