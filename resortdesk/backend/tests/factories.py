from datetime import date, timedelta
from decimal import Decimal

from resort_api.core import security
from resort_api.db import models


def tomorrow() -> date:
    return date.today() + timedelta(days=1)


def create_slot(session, value="06:00-09:00", capacity=50, is_active=True):
    start, end = value.split("-")
    slot = models.TimeSlot(
        slot_code=value,
        label=value,
        value=value,
        start_time=start,
        end_time=end,
        max_capacity=capacity,
        is_active=is_active,
    )
    session.add(slot)
    session.commit()
    return slot


def create_ticket(session, pass_type=models.PassType.daily, price=25, max_persons=10, is_active=True):
    ticket = models.TicketPrice(
        pass_type=pass_type,
        price=Decimal(str(price)),
        description=f"{pass_type.value} pass",
        max_persons=max_persons,
        is_active=is_active,
    )
    session.add(ticket)
    session.commit()
    return ticket


def add_pool_booking(session, slot, day, persons, status=models.PoolPaymentStatus.pending, number=None):
    booking = models.PoolBooking(
        booking_number=number or f"PB-SEED-{session.query(models.PoolBooking).count() + 1}",
        customer_name="Seed Guest",
        email="seed@resort.test",
        phone="555-0100",
        date=day,
        time_slot=slot.value,
        pass_type=models.PassType.daily,
        persons=persons,
        amount=Decimal("25.00") * persons,
        payment_status=status,
    )
    session.add(booking)
    session.commit()
    return booking


def create_hall(session, value="hall_a", capacity=100, is_active=True):
    hall = models.ConferenceHall(
        hall_code=value.upper(),
        name=value.replace("_", " ").title(),
        value=value,
        capacity=capacity,
        hourly_rate=Decimal("50.00"),
        daily_rate=Decimal("400.00"),
        description="Test hall",
        amenities=[],
        is_active=is_active,
        max_daily_bookings=3,
    )
    session.add(hall)
    session.commit()
    return hall


def create_room(session, number="101", type_name="Standard Room", base_price=100, max_occupancy=2, status=None):
    room_type = session.query(models.RoomType).filter_by(name=type_name).first()
    if room_type is None:
        room_type = models.RoomType(
            name=type_name,
            description="Test room type",
            base_price=Decimal(str(base_price)),
            max_occupancy=max_occupancy,
            amenities=["WiFi"],
            is_active=True,
        )
        session.add(room_type)
        session.flush()
    room = models.Room(
        room_number=number,
        room_type=room_type.name,
        floor=int(number[0]),
        price=Decimal(str(base_price)),
        status=status or models.RoomStatus.available,
        features=[],
        is_active=True,
    )
    session.add(room)
    session.commit()
    return room


def create_category(session, name="soft_drink", display_name="Soft Drinks", is_active=True):
    category = session.query(models.MenuCategory).filter_by(name=name).first()
    if category is None:
        category = models.MenuCategory(name=name, display_name=display_name, is_active=is_active)
        session.add(category)
        session.commit()
    return category


def create_menu_item(
    session,
    name="Lemonade",
    price=4,
    tax=10,
    tax_type=models.TaxType.percentage,
    stock=5,
    track_inventory=True,
    category="soft_drink",
):
    create_category(session, category)
    item = models.MenuItem(
        name=name,
        category=category,
        price=Decimal(str(price)),
        cost=Decimal("1.00"),
        tax=Decimal(str(tax)),
        tax_type=tax_type,
        unit="glass",
        stock_quantity=stock,
        track_inventory=track_inventory,
        is_active=True,
    )
    session.add(item)
    session.commit()
    return item


def create_user(session, username="admin", role=models.UserRole.admin, password="secret123", is_active=True):
    user = models.User(
        name=username.title(),
        username=username,
        email=f"{username}@resort.test",
        password_hash=security.get_password_hash(password),
        role=role,
        is_active=is_active,
    )
    session.add(user)
    session.commit()
    return user


def auth_headers(user) -> dict[str, str]:
    token = security.create_access_token({"sub": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


def create_equipment(session, name="Projector", quantity=2, rate=25, is_active=True):
    equipment = models.Equipment(
        name=name,
        category=models.EquipmentCategory.video,
        quantity=quantity,
        rental_rate=Decimal(str(rate)),
        unit=models.RentalUnit.day,
        is_active=is_active,
    )
    session.add(equipment)
    session.commit()
    return equipment


def create_service(session, name="Airport Transfer", price=40, is_available=True):
    service = models.HotelService(
        name=name,
        description="Test service",
        price=Decimal(str(price)),
        category=models.ServiceCategory.transport,
        is_available=is_available,
    )
    session.add(service)
    session.commit()
    return service
