# homehelp/modules/services/service.py

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from homehelp.shared import cache
from homehelp.shared.models.service_models import Service, ServiceCategory
from .schemas import ServicePublic

logger = logging.getLogger(__name__)

# catalog created on first start
DEFAULT_SERVICES = [
    ("Plumbing Repair", "Fix leaks, clogs, and other plumbing issues", ServiceCategory.plumbing),
    ("Pipe Installation", "Install new pipes and plumbing systems", ServiceCategory.plumbing),
    ("Fixture Installation", "Install faucets, showers, and other fixtures", ServiceCategory.plumbing),
    ("Electrical Repair", "Fix electrical issues and wiring problems", ServiceCategory.electrical),
    ("Lighting Installation", "Install new lighting fixtures and systems", ServiceCategory.electrical),
    ("Outlet and Switch Installation", "Install or replace electrical outlets and switches", ServiceCategory.electrical),
    ("Lawn Maintenance", "Regular lawn care and maintenance", ServiceCategory.landscaping),
    ("Garden Design", "Design and implement garden layouts", ServiceCategory.landscaping),
    ("Tree Trimming", "Trim and maintain trees on your property", ServiceCategory.landscaping),
]


async def seed_default_services(db: AsyncSession) -> int:
    """
    Insert the default catalog when the services table is empty.
    Returns the number of rows created.
    """
    existing = (await db.execute(select(func.count(Service.uid)))).scalar_one()
    if existing:
        return 0

    for name, description, category in DEFAULT_SERVICES:
        db.add(Service(name=name, description=description, category=category))
    await db.commit()
    cache.clear_cache(cache.SERVICES_PREFIX)

    logger.info("Seeded %d default services", len(DEFAULT_SERVICES))
    return len(DEFAULT_SERVICES)


async def list_services(db: AsyncSession, category: Optional[ServiceCategory] = None) -> list[dict]:
    """
    Catalog ordered by name, read through the Redis cache.
    """
    cache_key = cache.build_cache_key(cache.SERVICES_PREFIX, "list", category.value if category else "all")
    cached = cache.get_cache_value(cache_key)
    if cached is not None:
        return cached

    query = select(Service).order_by(Service.name)
    if category:
        query = query.where(Service.category == category)
    services = (await db.execute(query)).scalars().all()

    payload = [ServicePublic.model_validate(s).model_dump(mode="json") for s in services]
    cache.set_cache_value(cache_key, payload)
    return payload


async def get_service(db: AsyncSession, service_uid: str) -> Service | None:
    return (await db.execute(
        select(Service).where(Service.uid == service_uid)
    )).scalars().first()


async def get_service_by_name(db: AsyncSession, name: str) -> Service | None:
    return (await db.execute(
        select(Service).where(Service.name == name)
    )).scalars().first()
