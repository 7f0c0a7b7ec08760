from datetime import datetime
from pydantic import BaseModel, Field
from ..models.menu_category import CategoryIcon
from ..models.menu_item import TaxType
from ..models.sale import OrderStatus, OrderType, PaymentMethod, SalePaymentStatus


class MenuCategoryBase(BaseModel):
    display_name: str = Field(min_length=1, max_length=128)
    icon: CategoryIcon = CategoryIcon.coffee
    description: str | None = None
    is_active: bool = True
    sort_order: int = 0


class MenuCategoryCreate(MenuCategoryBase):
    name: str = Field(min_length=1, max_length=64)


class MenuCategoryUpdate(BaseModel):
    display_name: str | None = Field(default=None, min_length=1, max_length=128)
    icon: CategoryIcon | None = None
    description: str | None = None
    is_active: bool | None = None
    sort_order: int | None = None


class MenuCategory(MenuCategoryBase):
    id: int
    name: str
    item_count: int = 0

    class Config:
        from_attributes = True


class MenuItemBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    category: str = Field(min_length=1, max_length=64)
    price: float = Field(ge=0)
    cost: float = Field(default=0, ge=0)
    tax: float = Field(default=0, ge=0)
    tax_type: TaxType = TaxType.percentage
    description: str | None = None
    unit: str = "piece"
    stock_quantity: int = Field(default=0, ge=0)
    track_inventory: bool = False
    is_active: bool = True
    is_popular: bool = False


class MenuItemCreate(MenuItemBase):
    pass


class MenuItemUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    tax: float | None = Field(default=None, ge=0)
    tax_type: TaxType | None = None
    description: str | None = None
    unit: str | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    track_inventory: bool | None = None
    is_active: bool | None = None
    is_popular: bool | None = None


class MenuItem(MenuItemBase):
    id: int

    class Config:
        from_attributes = True


class SaleItemCreate(BaseModel):
    menu_item_id: int
    quantity: int = Field(ge=1)
    discount: float = Field(default=0, ge=0)
    notes: str | None = None


class SaleItem(BaseModel):
    id: int
    menu_item_id: int | None = None
    name: str
    category: str
    quantity: int
    unit_price: float
    tax: float
    tax_type: TaxType
    discount: float
    subtotal: float
    total: float
    notes: str | None = None

    class Config:
        from_attributes = True


class SaleBase(BaseModel):
    customer_name: str = "Guest"
    customer_phone: str | None = None
    customer_email: str | None = None
    table_number: str | None = None
    payment_method: PaymentMethod = PaymentMethod.cash
    order_type: OrderType = OrderType.dine_in
    notes: str | None = None
    staff_notes: str | None = None


class SaleCreate(SaleBase):
    items: list[SaleItemCreate] = Field(min_length=1)
    discount_total: float = Field(default=0, ge=0)
    payment_status: SalePaymentStatus = SalePaymentStatus.pending
    order_status: OrderStatus = OrderStatus.pending


class SaleUpdate(BaseModel):
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    table_number: str | None = None
    payment_method: PaymentMethod | None = None
    order_type: OrderType | None = None
    notes: str | None = None
    staff_notes: str | None = None
    served_by: int | None = None


class SalePaymentStatusUpdate(BaseModel):
    payment_status: SalePaymentStatus


class SaleOrderStatusUpdate(BaseModel):
    order_status: OrderStatus


class Sale(SaleBase):
    id: int
    sale_number: str
    subtotal: float
    tax_total: float
    discount_total: float
    total_amount: float
    payment_status: SalePaymentStatus
    order_status: OrderStatus
    served_by: int | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    items: list[SaleItem] = []

    class Config:
        from_attributes = True
