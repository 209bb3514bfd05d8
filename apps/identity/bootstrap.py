"""First-run seeding: the admin account, its default sections and optional demo orders."""

from typing import Optional
from loguru import logger
from framework.config import settings
from framework.repository.unit_of_work import UnitOfWork
from apps.orders.models import OrderCreate
from apps.orders.service import OrderService
from apps.workspace.service import WorkspaceService
from .models import Role, User, UserCreate
from .service import IdentityService

# (order_number, part_number) pairs shown on a fresh demo install
SAMPLE_ORDERS = (
    ("251024435", "87-2"),
    ("25100006", "87-1"),
    ("241167299", "1322"),
    ("251016443", "152"),
    ("251016435", "1541-2"),
    ("251016376", "1441"),
    ("251016362", "59"),
    ("251016352", "1439"),
    ("251016312", "154"),
    ("251047395", "151"),
    ("251047386", "153"),
)


async def bootstrap_admin(uow: UnitOfWork, seed_sample_orders: Optional[bool] = None) -> Optional[User]:
    """Create the admin user on an empty store. Returns the new admin, or None if one exists."""
    identity = IdentityService(uow)
    if await identity.get_user_by_username(settings.ADMIN_USERNAME):
        return None

    admin = await identity.create_user(
        UserCreate(
            username=settings.ADMIN_USERNAME,
            password=settings.ADMIN_PASSWORD,
            role=Role.ADMIN,
        )
    )
    # Exactly once per new user
    await WorkspaceService(uow).init_user_defaults(admin.id)

    if seed_sample_orders is None:
        seed_sample_orders = settings.SEED_SAMPLE_ORDERS
    if seed_sample_orders:
        orders = OrderService(uow)
        for order_number, part_number in SAMPLE_ORDERS:
            await orders.create_order(
                OrderCreate(order_number=order_number, part_number=part_number, last_inquiry=""),
                admin.id,
            )
        logger.info(f"Seeded {len(SAMPLE_ORDERS)} sample orders")

    logger.info(f"Bootstrap admin '{admin.username}' created")
    return admin
