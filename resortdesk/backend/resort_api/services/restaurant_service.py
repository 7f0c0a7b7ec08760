"""Restaurant menu and sales.

A tracked menu item's ``stock_quantity`` is a real inventory level: sales
draw it down under a row lock and cancelled or deleted orders put it back.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..core.constants import SALE_INACTIVE_ORDER_STATUS, SALE_UNDELETABLE
from ..db import models, schemas
from ..db.models import CategoryIcon, OrderStatus, SalePaymentStatus, TaxType
from .availability import admit, atomic, lock_row, log_rejection, record_audit, sale_number, utc_now
from .errors import CapacityError, ConflictError, NotFoundError, ValidationError
from .pagination import order_by, paginate
from .pricing import line_tax, to_money

logger = logging.getLogger(__name__)

SORTABLE = {"created_at", "total_amount", "customer_name"}
OPEN_ORDER_STATUSES = frozenset({OrderStatus.pending, OrderStatus.preparing, OrderStatus.ready})

DEFAULT_CATEGORIES = [
    ("cold_drink", "Cold Drinks", CategoryIcon.coffee, 10),
    ("soft_drink", "Soft Drinks", CategoryIcon.coffee, 20),
    ("beer", "Beer", CategoryIcon.beer, 30),
    ("wine", "Wine", CategoryIcon.wine, 40),
    ("spirits", "Spirits", CategoryIcon.cocktail, 50),
    ("cocktails", "Cocktails", CategoryIcon.cocktail, 60),
    ("snacks", "Snacks", CategoryIcon.utensils, 70),
    ("meals", "Meals", CategoryIcon.utensils, 80),
    ("desserts", "Desserts", CategoryIcon.cake, 90),
    ("pizza", "Pizza", CategoryIcon.pizza, 100),
    ("burger", "Burgers", CategoryIcon.burger, 110),
    ("salad", "Salads", CategoryIcon.salad, 120),
    ("ice_cream", "Ice Cream", CategoryIcon.ice_cream, 130),
]

# name, category, price, cost, tax, description, unit, popular
DEFAULT_MENU_ITEMS = [
    ("Coca Cola", "cold_drink", 2.99, 1.50, 5, "Chilled Coca Cola 330ml", "piece", True),
    ("Sprite", "cold_drink", 2.99, 1.50, 5, "Chilled Sprite 330ml", "piece", True),
    ("Mineral Water", "cold_drink", 1.99, 0.80, 5, "1L Mineral Water", "piece", True),
    ("Fresh Lime Soda", "soft_drink", 3.99, 2.00, 5, "Fresh lime with soda", "glass", True),
    ("Mango Shake", "soft_drink", 5.99, 3.50, 5, "Fresh mango milkshake", "glass", False),
    ("Kingfisher", "beer", 4.99, 3.00, 18, "Kingfisher Premium 650ml", "bottle", True),
    ("Bira 91", "beer", 5.99, 3.50, 18, "Bira 91 White 650ml", "bottle", True),
    ("Heineken", "beer", 6.99, 4.00, 18, "Heineken 650ml", "bottle", False),
    ("Red Wine", "wine", 24.99, 15.00, 18, "Premium Red Wine (750ml)", "bottle", False),
    ("French Fries", "snacks", 4.99, 2.00, 5, "Crispy french fries with dip", "plate", True),
    ("Chicken Wings", "snacks", 8.99, 4.50, 5, "Spicy chicken wings (6 pcs)", "plate", True),
]


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    """UTC bounds of a calendar day; sale timestamps are stored in UTC."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def category_key(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def _item_counts(db: Session) -> dict[str, int]:
    rows = db.execute(
        select(models.MenuItem.category, func.count(models.MenuItem.id))
        .where(models.MenuItem.is_active.is_(True))
        .group_by(models.MenuItem.category)
    ).all()
    return {name: int(count) for name, count in rows}


def list_categories(
    db: Session, is_active: bool | None = None, search: str | None = None
) -> list[models.MenuCategory]:
    stmt = select(models.MenuCategory)
    if is_active is not None:
        stmt = stmt.where(models.MenuCategory.is_active.is_(is_active))
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                models.MenuCategory.name.ilike(pattern),
                models.MenuCategory.display_name.ilike(pattern),
            )
        )
    stmt = stmt.order_by(models.MenuCategory.sort_order, models.MenuCategory.display_name)
    categories = list(db.execute(stmt).scalars().all())
    counts = _item_counts(db)
    for category in categories:
        setattr(category, "item_count", counts.get(category.name, 0))
    return categories


def get_category(db: Session, category_id: int) -> models.MenuCategory:
    category = db.get(models.MenuCategory, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    setattr(category, "item_count", _item_counts(db).get(category.name, 0))
    return category


def create_category(
    db: Session, payload: schemas.MenuCategoryCreate, actor_id: int | None = None
) -> models.MenuCategory:
    name = category_key(payload.name)
    with atomic(db):
        taken = db.scalar(select(models.MenuCategory.id).where(models.MenuCategory.name == name))
        if taken is not None:
            raise ConflictError("Category with this name already exists")
        category = models.MenuCategory(
            **payload.model_dump(exclude={"name"}),
            name=name,
            created_by=actor_id,
            updated_by=actor_id,
        )
        db.add(category)
    setattr(category, "item_count", 0)
    logger.info("Menu category created", extra={"category": name})
    return category


def update_category(
    db: Session, category_id: int, payload: schemas.MenuCategoryUpdate, actor_id: int | None = None
) -> models.MenuCategory:
    with atomic(db):
        category = lock_row(db, models.MenuCategory, models.MenuCategory.id == category_id)
        if category is None:
            raise NotFoundError("Category not found")
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        for key, value in changes.items():
            setattr(category, key, value)
        category.updated_by = actor_id
    setattr(category, "item_count", _item_counts(db).get(category.name, 0))
    logger.info("Menu category updated", extra={"category": category.name})
    return category


def delete_category(db: Session, category_id: int) -> None:
    with atomic(db):
        category = lock_row(db, models.MenuCategory, models.MenuCategory.id == category_id)
        if category is None:
            raise NotFoundError("Category not found")
        in_use = db.scalar(
            select(func.count(models.MenuItem.id)).where(models.MenuItem.category == category.name)
        ) or 0
        if in_use:
            raise ConflictError(
                f"Cannot delete category that has {in_use} menu items. "
                "Please reassign or delete the items first."
            )
        db.delete(category)
    logger.info("Menu category deleted", extra={"category_id": category_id})


def initialize_categories(db: Session, actor_id: int | None = None) -> int:
    created = 0
    with atomic(db):
        existing = set(db.execute(select(models.MenuCategory.name)).scalars().all())
        for name, display_name, icon, sort_order in DEFAULT_CATEGORIES:
            if name in existing:
                continue
            db.add(
                models.MenuCategory(
                    name=name,
                    display_name=display_name,
                    icon=icon,
                    sort_order=sort_order,
                    created_by=actor_id,
                    updated_by=actor_id,
                )
            )
            created += 1
    logger.info("Menu categories initialized", extra={"created_count": created})
    return created


def _require_category(db: Session, name: str) -> str:
    key = category_key(name)
    category = db.scalar(select(models.MenuCategory).where(models.MenuCategory.name == key))
    if category is None or not category.is_active:
        raise ValidationError(f"Category {name} is not available")
    return key


def list_menu_items(
    db: Session,
    category: str | None = None,
    search: str | None = None,
    active_only: bool = False,
) -> list[models.MenuItem]:
    stmt = select(models.MenuItem)
    if category:
        stmt = stmt.where(models.MenuItem.category == category_key(category))
    if search:
        stmt = stmt.where(models.MenuItem.name.ilike(f"%{search.strip()}%"))
    if active_only:
        stmt = stmt.where(models.MenuItem.is_active.is_(True))
    return list(db.execute(stmt.order_by(models.MenuItem.category, models.MenuItem.name)).scalars().all())


def get_menu_item(db: Session, item_id: int) -> models.MenuItem:
    item = db.get(models.MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item not found")
    return item


def _money_fields(data: dict) -> dict:
    for key in ("price", "cost", "tax"):
        if data.get(key) is not None:
            data[key] = to_money(data[key])
    return data


def create_menu_item(
    db: Session, payload: schemas.MenuItemCreate, actor_id: int | None = None
) -> models.MenuItem:
    with atomic(db):
        data = _money_fields(payload.model_dump())
        data["category"] = _require_category(db, payload.category)
        item = models.MenuItem(**data, created_by=actor_id)
        db.add(item)
    logger.info("Menu item created", extra={"menu_item_id": item.id, "item_name": item.name})
    return item


def update_menu_item(db: Session, item_id: int, payload: schemas.MenuItemUpdate) -> models.MenuItem:
    with atomic(db):
        item = lock_row(db, models.MenuItem, models.MenuItem.id == item_id)
        if item is None:
            raise NotFoundError("Menu item not found")
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if "category" in changes:
            changes["category"] = _require_category(db, changes["category"])
        for key, value in _money_fields(changes).items():
            setattr(item, key, value)
    logger.info("Menu item updated", extra={"menu_item_id": item.id})
    return item


def delete_menu_item(db: Session, item_id: int) -> None:
    with atomic(db):
        item = get_menu_item(db, item_id)
        db.delete(item)
    logger.info("Menu item deleted", extra={"menu_item_id": item_id})


def initialize_menu_items(db: Session, actor_id: int | None = None) -> int:
    """Add the starter menu, leaving items that already exist untouched."""
    initialize_categories(db, actor_id)
    created = 0
    with atomic(db):
        existing = set(db.execute(select(models.MenuItem.name, models.MenuItem.category)).all())
        for name, category, price, cost, tax, description, unit, popular in DEFAULT_MENU_ITEMS:
            if (name, category) in existing:
                continue
            db.add(
                models.MenuItem(
                    name=name,
                    category=category,
                    price=to_money(price),
                    cost=to_money(cost),
                    tax=to_money(tax),
                    tax_type=TaxType.percentage,
                    description=description,
                    unit=unit,
                    is_popular=popular,
                    created_by=actor_id,
                )
            )
            created += 1
    logger.info("Menu items initialized", extra={"created_count": created})
    return created


def _lock_menu_items(db: Session, item_ids) -> dict[int, models.MenuItem]:
    items = {}
    for item_id in sorted(set(item_ids)):
        item = lock_row(db, models.MenuItem, models.MenuItem.id == item_id)
        if item is None:
            raise ValidationError(f"Menu item {item_id} not found")
        items[item_id] = item
    return items


def _take_stock(items: dict[int, models.MenuItem], demand: dict[int, int]) -> None:
    """Validate every line first, then decrement, so a rejection changes nothing."""
    for item_id, quantity in demand.items():
        item = items[item_id]
        if not item.track_inventory:
            continue
        admission = admit(item.stock_quantity, 0, quantity)
        if not admission.admitted:
            log_rejection(f"restaurant:{item.id}", admission)
            raise CapacityError(
                f"Only {admission.remaining} left in stock for {item.name}", admission.remaining
            )
    for item_id, quantity in demand.items():
        item = items[item_id]
        if item.track_inventory:
            item.stock_quantity = item.stock_quantity - quantity


def _line_demand(lines) -> dict[int, int]:
    demand: dict[int, int] = defaultdict(int)
    for line in lines:
        if line.menu_item_id is not None:
            demand[line.menu_item_id] += line.quantity
    return dict(demand)


def _restore_stock(db: Session, sale: models.Sale) -> None:
    demand = _line_demand(sale.items)
    for item_id, quantity in sorted(demand.items()):
        item = lock_row(db, models.MenuItem, models.MenuItem.id == item_id)
        if item is not None and item.track_inventory:
            item.stock_quantity = item.stock_quantity + quantity


def _reserve_stock(db: Session, sale: models.Sale) -> None:
    demand = _line_demand(sale.items)
    items = _lock_menu_items(db, demand.keys())
    _take_stock(items, demand)


def build_line(item: models.MenuItem, quantity: int, discount=0, notes: str | None = None) -> models.SaleItem:
    subtotal = to_money(to_money(item.price) * quantity)
    tax = line_tax(subtotal, item.tax, item.tax_type, quantity)
    return models.SaleItem(
        menu_item_id=item.id,
        name=item.name,
        category=item.category,
        quantity=quantity,
        unit_price=to_money(item.price),
        tax=tax,
        tax_type=item.tax_type,
        discount=to_money(discount),
        subtotal=subtotal,
        total=to_money(subtotal + tax - to_money(discount)),
        notes=notes,
    )


def list_sales(
    db: Session,
    payment_status: SalePaymentStatus | None = None,
    order_status: OrderStatus | None = None,
    day: date | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> tuple[list[models.Sale], int]:
    stmt = select(models.Sale)
    if payment_status:
        stmt = stmt.where(models.Sale.payment_status == payment_status)
    if order_status:
        stmt = stmt.where(models.Sale.order_status == order_status)
    if day:
        start, end = _day_bounds(day)
        stmt = stmt.where(models.Sale.created_at >= start, models.Sale.created_at < end)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                models.Sale.sale_number.ilike(pattern),
                models.Sale.customer_name.ilike(pattern),
                models.Sale.customer_phone.ilike(pattern),
                models.Sale.table_number.ilike(pattern),
            )
        )
    stmt = order_by(stmt, models.Sale, sort_by, sort_order, SORTABLE)
    return paginate(db, stmt, page, limit)


def get_sale(db: Session, sale_id: int) -> models.Sale:
    sale = db.get(models.Sale, sale_id)
    if sale is None:
        raise NotFoundError("Sale not found")
    return sale


def create_sale(db: Session, payload: schemas.SaleCreate, actor_id: int | None = None) -> models.Sale:
    with atomic(db):
        items = _lock_menu_items(db, [line.menu_item_id for line in payload.items])
        for item in items.values():
            if not item.is_active:
                raise ValidationError(f"{item.name} is not available")
        if payload.order_status != SALE_INACTIVE_ORDER_STATUS:
            _take_stock(items, _line_demand(payload.items))

        lines = [
            build_line(items[line.menu_item_id], line.quantity, line.discount, line.notes)
            for line in payload.items
        ]
        subtotal = to_money(sum((line.subtotal for line in lines), to_money(0)))
        tax_total = to_money(sum((line.tax for line in lines), to_money(0)))
        discount_total = to_money(payload.discount_total)
        header = payload.model_dump(exclude={"items", "discount_total"})
        sale = models.Sale(
            **header,
            sale_number=sale_number(db, utc_now().date()),
            subtotal=subtotal,
            tax_total=tax_total,
            discount_total=discount_total,
            total_amount=max(subtotal + tax_total - discount_total, to_money(0)),
            created_by=actor_id,
            items=lines,
        )
        db.add(sale)
        db.flush()
        record_audit(db, actor_id, "sale.create", {"sale_id": sale.id})
    logger.info("Sale created", extra={"sale_id": sale.id, "sale_number": sale.sale_number})
    return sale


def update_sale(
    db: Session, sale_id: int, payload: schemas.SaleUpdate, actor_id: int | None = None
) -> models.Sale:
    with atomic(db):
        sale = get_sale(db, sale_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(sale, key, value)
        record_audit(db, actor_id, "sale.update", {"sale_id": sale.id})
    logger.info("Sale updated", extra={"sale_id": sale.id})
    return sale


def update_order_status(
    db: Session, sale_id: int, order_status: OrderStatus, actor_id: int | None = None
) -> models.Sale:
    with atomic(db):
        sale = get_sale(db, sale_id)
        previous = sale.order_status
        if previous == order_status:
            return sale
        if order_status == SALE_INACTIVE_ORDER_STATUS:
            _restore_stock(db, sale)
        elif previous == SALE_INACTIVE_ORDER_STATUS:
            _reserve_stock(db, sale)
        sale.order_status = order_status
        record_audit(
            db,
            actor_id,
            "sale.order_status",
            {"sale_id": sale.id, "from": previous.value, "to": order_status.value},
        )
    logger.info(
        "Sale order status changed",
        extra={"sale_id": sale.id, "from": previous.value, "to": order_status.value},
    )
    return sale


def update_payment_status(
    db: Session, sale_id: int, payment_status: SalePaymentStatus, actor_id: int | None = None
) -> models.Sale:
    with atomic(db):
        sale = get_sale(db, sale_id)
        previous = sale.payment_status
        sale.payment_status = payment_status
        record_audit(
            db,
            actor_id,
            "sale.payment_status",
            {"sale_id": sale.id, "from": previous.value, "to": payment_status.value},
        )
    logger.info(
        "Sale payment status changed",
        extra={"sale_id": sale.id, "from": previous.value, "to": payment_status.value},
    )
    return sale


def delete_sale(db: Session, sale_id: int, actor_id: int | None = None) -> None:
    with atomic(db):
        sale = get_sale(db, sale_id)
        if sale.payment_status in SALE_UNDELETABLE:
            raise ConflictError("Cannot delete sales with confirmed payment")
        if sale.order_status != SALE_INACTIVE_ORDER_STATUS:
            _restore_stock(db, sale)
        db.delete(sale)
        record_audit(db, actor_id, "sale.delete", {"sale_id": sale_id})
    logger.info("Sale deleted", extra={"sale_id": sale_id})


def dashboard(db: Session, today: date | None = None) -> dict:
    today = today or utc_now().date()
    start, end = _day_bounds(today)
    in_today = (models.Sale.created_at >= start, models.Sale.created_at < end)
    today_sales = db.scalar(
        select(func.count(models.Sale.id)).where(
            *in_today, models.Sale.order_status != SALE_INACTIVE_ORDER_STATUS
        )
    ) or 0
    today_revenue = db.scalar(
        select(func.coalesce(func.sum(models.Sale.total_amount), 0)).where(
            *in_today, models.Sale.payment_status == SalePaymentStatus.confirmed
        )
    )
    pending_orders = db.scalar(
        select(func.count(models.Sale.id)).where(models.Sale.order_status.in_(OPEN_ORDER_STATUSES))
    ) or 0
    top_items = db.execute(
        select(
            models.SaleItem.name,
            func.sum(models.SaleItem.quantity).label("quantity"),
            func.sum(models.SaleItem.total).label("revenue"),
        )
        .join(models.Sale, models.Sale.id == models.SaleItem.sale_id)
        .where(models.Sale.order_status != SALE_INACTIVE_ORDER_STATUS)
        .group_by(models.SaleItem.name)
        .order_by(func.sum(models.SaleItem.quantity).desc())
        .limit(5)
    ).all()
    return {
        "today_sales": int(today_sales),
        "today_revenue": float(today_revenue or 0),
        "pending_orders": int(pending_orders),
        "top_items": [
            {"name": name, "quantity": int(quantity or 0), "revenue": float(revenue or 0)}
            for name, quantity, revenue in top_items
        ],
    }
