from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core import policy
from ...db.session import get_db
from ...db import models, schemas
from ...services import restaurant_service
from ...services.errors import BookingError
from ...services.pagination import clamp, total_pages

router = APIRouter(prefix="/restaurant", tags=["restaurant"])


@router.get("/menu-items", response_model=schemas.Envelope[list[schemas.MenuItem]])
def list_menu_items(
    category: str | None = None,
    search: str | None = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.READ)),
):
    return {"data": restaurant_service.list_menu_items(db, category, search, active_only)}


@router.get("/menu-items/{item_id}", response_model=schemas.Envelope[schemas.MenuItem])
def get_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.READ)),
):
    try:
        item = restaurant_service.get_menu_item(db, item_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": item}


@router.post(
    "/menu-items",
    response_model=schemas.Envelope[schemas.MenuItem],
    status_code=status.HTTP_201_CREATED,
)
def create_menu_item(
    payload: schemas.MenuItemCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.CONFIGURE)),
):
    try:
        item = restaurant_service.create_menu_item(db, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Menu item created successfully", "data": item}


@router.patch("/menu-items/{item_id}", response_model=schemas.Envelope[schemas.MenuItem])
def update_menu_item(
    item_id: int,
    payload: schemas.MenuItemUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.CONFIGURE)),
):
    try:
        item = restaurant_service.update_menu_item(db, item_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Menu item updated successfully", "data": item}


@router.delete("/menu-items/{item_id}", response_model=schemas.Envelope[None])
def delete_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.DELETE)),
):
    try:
        restaurant_service.delete_menu_item(db, item_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Menu item deleted successfully"}


@router.post("/menu-items/initialize", response_model=schemas.Envelope[dict])
def initialize_menu_items(
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.CONFIGURE)),
):
    created = restaurant_service.initialize_menu_items(db, actor_id=user.id)
    return {"message": "Default menu items initialized", "data": {"created": created}}


@router.get("/categories", response_model=schemas.Envelope[list[schemas.MenuCategory]])
def list_categories(
    is_active: bool | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.READ)),
):
    return {"data": restaurant_service.list_categories(db, is_active, search)}


@router.get("/categories/{category_id}", response_model=schemas.Envelope[schemas.MenuCategory])
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.READ)),
):
    try:
        category = restaurant_service.get_category(db, category_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": category}


@router.post(
    "/categories",
    response_model=schemas.Envelope[schemas.MenuCategory],
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    payload: schemas.MenuCategoryCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.CONFIGURE)),
):
    try:
        category = restaurant_service.create_category(db, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Category created successfully", "data": category}


@router.patch("/categories/{category_id}", response_model=schemas.Envelope[schemas.MenuCategory])
def update_category(
    category_id: int,
    payload: schemas.MenuCategoryUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.CONFIGURE)),
):
    try:
        category = restaurant_service.update_category(db, category_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Category updated successfully", "data": category}


@router.delete("/categories/{category_id}", response_model=schemas.Envelope[None])
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.DELETE)),
):
    try:
        restaurant_service.delete_category(db, category_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Category deleted successfully"}


@router.post("/categories/initialize", response_model=schemas.Envelope[dict])
def initialize_categories(
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.CONFIGURE)),
):
    created = restaurant_service.initialize_categories(db, actor_id=user.id)
    return {"message": "Default categories initialized", "data": {"created": created}}


@router.get("/sales", response_model=schemas.Page[schemas.Sale])
def list_sales(
    payment_status: models.SalePaymentStatus | None = None,
    order_status: models.OrderStatus | None = None,
    day: date | None = Query(None, alias="date"),
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str | None = None,
    sort_order: str | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.READ)),
):
    page, limit = clamp(page, limit)
    items, total = restaurant_service.list_sales(
        db, payment_status, order_status, day, search, page, limit, sort_by, sort_order
    )
    return {"data": items, "total": total, "page": page, "total_pages": total_pages(total, limit)}


@router.get("/sales/{sale_id}", response_model=schemas.Envelope[schemas.Sale])
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.READ)),
):
    try:
        sale = restaurant_service.get_sale(db, sale_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": sale}


@router.post("/sales", response_model=schemas.Envelope[schemas.Sale], status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: schemas.SaleCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.WRITE)),
):
    try:
        sale = restaurant_service.create_sale(db, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Sale created successfully", "data": sale}


@router.patch("/sales/{sale_id}", response_model=schemas.Envelope[schemas.Sale])
def update_sale(
    sale_id: int,
    payload: schemas.SaleUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.WRITE)),
):
    try:
        sale = restaurant_service.update_sale(db, sale_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Sale updated successfully", "data": sale}


@router.patch("/sales/{sale_id}/payment-status", response_model=schemas.Envelope[schemas.Sale])
def update_payment_status(
    sale_id: int,
    payload: schemas.SalePaymentStatusUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.WRITE)),
):
    try:
        sale = restaurant_service.update_payment_status(
            db, sale_id, payload.payment_status, actor_id=user.id
        )
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Payment status updated successfully", "data": sale}


@router.patch("/sales/{sale_id}/order-status", response_model=schemas.Envelope[schemas.Sale])
def update_order_status(
    sale_id: int,
    payload: schemas.SaleOrderStatusUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.WRITE)),
):
    try:
        sale = restaurant_service.update_order_status(
            db, sale_id, payload.order_status, actor_id=user.id
        )
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Order status updated successfully", "data": sale}


@router.delete("/sales/{sale_id}", response_model=schemas.Envelope[None])
def delete_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("restaurant", policy.DELETE)),
):
    try:
        restaurant_service.delete_sale(db, sale_id, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Sale deleted successfully"}


@router.get("/dashboard", response_model=schemas.Envelope[dict])
def dashboard(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("restaurant", policy.REPORT)),
):
    return {"data": restaurant_service.dashboard(db)}
