"""
Create the schema and seed an empty database with demo accounts and products.

Usage:
    python -m bilibay.database.init_database
"""

import asyncio
import logging
import os
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.config.settings import get_settings
from bilibay.core.shared import configure_logging
from bilibay.database.async_db import dispose_engine, get_async_db_context, get_async_engine
from bilibay.domains.ecommerce.domain.entities.category import slugify
from bilibay.models.db import Base, Category, Product, UserDB
from bilibay.services.token_service import TokenService

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = os.getenv("SEED_PASSWORD", "ChangeMe123!")

USERS_DATA = [
    {"first_name": "Admin", "last_name": "BiliBay", "email": "admin@bilibay.ph", "role": "admin"},
    {"first_name": "Maria", "last_name": "Santos", "email": "seller@bilibay.ph", "role": "seller"},
    {
        "first_name": "Juan",
        "last_name": "Dela Cruz",
        "email": "buyer@bilibay.ph",
        "role": "buyer",
        "default_shipping_address": {
            "street": "123 Rizal Avenue",
            "city": "Manila",
            "province": "Metro Manila",
            "zip_code": "1000",
            "country": "Philippines",
        },
    },
]

CATEGORIES_DATA = [
    {"name": "Beverages", "description": "Local drinks and spirits"},
    {"name": "Clothing", "description": "Traditional and everyday wear"},
    {"name": "Toys & Collectibles", "description": "Handcrafted toys and collector pieces"},
    {"name": "Food", "description": "Pantry staples and spice mixes"},
    {"name": "Home & Living", "description": "Handwoven and home goods"},
]

PRODUCTS_DATA = [
    {
        "title": "Tanduay Rhum 500ml",
        "description": "Premium Filipino rum, smooth taste, perfect for celebrations.",
        "price": "350.00",
        "stock": 40,
        "category": "Beverages",
    },
    {
        "title": "San Miguel Beer Pack",
        "description": "24-pack San Miguel Pale Pilsen, classic Filipino beer.",
        "price": "1200.00",
        "stock": 15,
        "category": "Beverages",
    },
    {
        "title": "Barong Tagalog",
        "description": "Elegant traditional Filipino shirt, perfect for formal events.",
        "price": "1500.00",
        "stock": 8,
        "category": "Clothing",
        "variants": ["S", "M", "L", "XL"],
    },
    {
        "title": "Jeepney Model Toy",
        "description": "Miniature handcrafted Jeepney toy, perfect for collectors.",
        "price": "450.00",
        "stock": 25,
        "category": "Toys & Collectibles",
    },
    {
        "title": "Adobo Spice Mix",
        "description": "Authentic Filipino Adobo spice mix for home cooking.",
        "price": "120.00",
        "stock": 100,
        "category": "Food",
    },
    {
        "title": "Banig Handwoven Mat",
        "description": "Traditional Filipino handwoven mat made from palm leaves.",
        "price": "600.00",
        "stock": 5,
        "category": "Home & Living",
    },
]


async def create_tables() -> None:
    """Create every table known to the ORM metadata."""
    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def is_empty(session: AsyncSession) -> bool:
    result = await session.execute(select(func.count()).select_from(UserDB))
    return result.scalar_one() == 0


async def create_users(session: AsyncSession) -> dict[str, UserDB]:
    """Create one account per role"""
    token_service = TokenService()
    users = {}
    for user_data in USERS_DATA:
        user = UserDB(
            password_hash=token_service.get_password_hash(DEFAULT_PASSWORD),
            email_verified=True,
            is_active=True,
            **user_data,
        )
        session.add(user)
        users[user_data["role"]] = user
    await session.flush()
    logger.info(f"Created {len(users)} users")
    return users


async def create_categories(session: AsyncSession) -> dict[str, Category]:
    categories = {}
    for category_data in CATEGORIES_DATA:
        category = Category(slug=slugify(category_data["name"]), **category_data)
        session.add(category)
        categories[category_data["name"]] = category
    await session.flush()
    logger.info(f"Created {len(categories)} categories")
    return categories


async def create_products(session: AsyncSession, seller: UserDB, categories: dict[str, Category]) -> int:
    for product_data in PRODUCTS_DATA:
        data = dict(product_data)
        category = categories[data.pop("category")]
        session.add(
            Product(
                seller_id=seller.id,
                category_id=category.id,
                price=Decimal(data.pop("price")),
                status="available",
                images=[],
                variants=data.pop("variants", []),
                **data,
            )
        )
    await session.flush()
    logger.info(f"Created {len(PRODUCTS_DATA)} products")
    return len(PRODUCTS_DATA)


async def init_database() -> None:
    """Create the schema and seed it when no account exists yet."""
    await create_tables()
    async with get_async_db_context() as session:
        if not await is_empty(session):
            logger.info("Database already contains users, skipping seed data")
            return
        users = await create_users(session)
        categories = await create_categories(session)
        await create_products(session, users["seller"], categories)
    logger.info("Seed complete, demo accounts use the SEED_PASSWORD password")


async def main() -> None:
    try:
        await init_database()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    asyncio.run(main())
