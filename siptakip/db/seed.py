"""Demo tenant seeding for development databases."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from siptakip.core.config import settings
from siptakip.models.menu import Category, Product
from siptakip.models.restaurant import Restaurant
from siptakip.models.table import DiningTable, Waiter
from siptakip.models.user import User
from siptakip.services.table_service import table_id_for
from siptakip.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)

DEMO_RESTAURANT_ID = "rest-001"
DEMO_SLUG = "kofteci-ramiz"

DEMO_MENU: list[tuple[str, str, str, int, list[tuple[str, str, str, str]]]] = [
    ("cat-001", "İçecekler", "☕", 1, [
        ("prod-001", "Türk Kahvesi", "Geleneksel Türk kahvesi", "45.00"),
        ("prod-002", "Çay", "Demli çay", "15.00"),
        ("prod-003", "Ayran", "Ev yapımı ayran", "20.00"),
    ]),
    ("cat-002", "Kahvaltı", "🍳", 2, [
        ("prod-004", "Serpme Kahvaltı", "2 kişilik serpme kahvaltı", "350.00"),
        ("prod-005", "Menemen", "Domatesli, biberli yumurta", "90.00"),
    ]),
    ("cat-003", "Ana Yemek", "🍽️", 3, [
        ("prod-006", "Izgara Köfte", "Közlenmiş biber ve domates ile", "220.00"),
        ("prod-007", "Adana Kebap", "Acılı el yapımı kebap", "320.00"),
        ("prod-008", "Lahmacun", "İnce hamur, kıymalı harç", "85.00"),
    ]),
    ("cat-004", "Tatlılar", "🍰", 4, [
        ("prod-009", "Künefe", "Kaymak ve antep fıstığı ile", "120.00"),
        ("prod-010", "Sütlaç", "Fırında sütlaç", "75.00"),
    ]),
]

DEMO_STAFF: list[tuple[str, str, str, str | None, str]] = [
    ("admin-user-id", "admin@kofteci.com", "admin", DEMO_RESTAURANT_ID, "Admin Kullanıcı"),
    ("kitchen-user-id", "mutfak@kofteci.com", "kitchen", DEMO_RESTAURANT_ID, "Mutfak"),
    ("waiter-user-id", "garson@kofteci.com", "waiter", DEMO_RESTAURANT_ID, "Garson"),
    ("platform-user-id", "platform@siptakip.local", "super_admin", None, "Platform Yöneticisi"),
]


def ensure_demo_data(session: Session) -> bool:
    """Create the Köfteci Ramiz demo tenant once; return whether it was created."""
    if session.get(Restaurant, DEMO_RESTAURANT_ID) is not None:
        return False

    session.add(
        Restaurant(
            id=DEMO_RESTAURANT_ID,
            name="Köfteci Ramiz",
            slug=DEMO_SLUG,
            phone="+90 555 123 4567",
            address="Kadıköy, İstanbul",
            is_active=True,
            subscription_plan="pro",
            contract_status="active",
            contract_months=12,
            monthly_fee=Decimal("1500.00"),
        )
    )
    for number in range(1, 11):
        session.add(
            DiningTable(
                id=table_id_for(DEMO_RESTAURANT_ID, number),
                restaurant_id=DEMO_RESTAURANT_ID,
                table_number=number,
            )
        )
    for category_id, name, icon, sort_order, products in DEMO_MENU:
        category = Category(
            id=category_id,
            restaurant_id=DEMO_RESTAURANT_ID,
            name=name,
            icon=icon,
            sort_order=sort_order,
        )
        category.products = [
            Product(
                id=product_id,
                restaurant_id=DEMO_RESTAURANT_ID,
                name=product_name,
                description=description,
                price=Decimal(price),
            )
            for product_id, product_name, description, price in products
        ]
        session.add(category)
    session.add_all(
        [
            Waiter(id="waiter-001", restaurant_id=DEMO_RESTAURANT_ID, full_name="Ahmet Yılmaz", phone="+90 555 000 0001"),
            Waiter(id="waiter-002", restaurant_id=DEMO_RESTAURANT_ID, full_name="Ayşe Demir", phone=None),
        ]
    )
    session.commit()

    for user_id, email, role, restaurant_id, full_name in DEMO_STAFF:
        if get_user_by_email(db=session, email=email) is not None:
            continue
        user: User = create_user(
            session,
            user_id=user_id,
            email=email,
            password=settings.admin_password,
            role=role,
            restaurant_id=restaurant_id,
            full_name=full_name,
        )
        logger.info("[BOOTSTRAP] demo account %s (%s)", user.email, user.role)

    logger.info("[BOOTSTRAP] demo restaurant %s seeded", DEMO_SLUG)
    return True
