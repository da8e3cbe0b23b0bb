"""Seed database from CSV files.

Usage:
    python -m delivery.tools.seed_db
    python -m delivery.tools.seed_db --data-dir data
    python -m delivery.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.adapters.csv_loader.loader import load_orders, load_partners
from delivery.adapters.persistence.database import async_session_factory
from delivery.adapters.persistence.models import (
    AssignmentModel,
    OrderModel,
    PartnerModel,
)
from delivery.config import settings
from delivery.domain.value_objects.enums import PartnerStatus

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in FK-safe order."""
    for model in [AssignmentModel, OrderModel, PartnerModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


def _clamp_load(raw: int, max_load: int) -> int:
    return min(max(raw, 0), max_load)


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Insert partners and orders found in ``data_dir``. Returns counts of seeded records.

    Existing partners (by email) and orders (by order number) are skipped, so
    running the seeder twice is harmless. Seeded orders always start pending.
    """
    counts = {"partners": 0, "orders": 0}

    partner_csv = _find_csv(data_dir, ["partners", "couriers", "riders"])
    order_csv = _find_csv(data_dir, ["orders"])

    if not partner_csv:
        raise FileNotFoundError(
            f"No partners CSV found in {data_dir}. Expected something like partners.csv"
        )

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        # 1. Partners
        for pd in load_partners(partner_csv):
            if not pd["email"]:
                logger.warning("Partner '%s' has no email, skipping", pd["name"])
                continue

            existing = await session.execute(
                select(PartnerModel).where(PartnerModel.email == pd["email"])
            )
            if existing.scalar_one_or_none():
                logger.debug("Partner '%s' already exists, skipping", pd["email"])
                continue

            status = pd["status"]
            if status not in {s.value for s in PartnerStatus}:
                logger.warning("Partner '%s': unknown status '%s', using active", pd["email"], status)
                status = PartnerStatus.ACTIVE.value

            load = _clamp_load(pd["current_load"], settings.max_partner_load)
            if load != pd["current_load"]:
                logger.warning(
                    "Partner '%s': load %d out of range, clamped to %d",
                    pd["email"], pd["current_load"], load,
                )

            session.add(PartnerModel(
                name=pd["name"],
                email=pd["email"],
                phone=pd["phone"],
                status=status,
                current_load=load,
                areas=pd["areas"],
                shift_start=pd["shift_start"],
                shift_end=pd["shift_end"],
                rating=pd["rating"] if pd["rating"] is not None else 5.0,
            ))
            counts["partners"] += 1

        await session.commit()

        # 2. Orders (if CSV exists)
        if order_csv:
            for od in load_orders(order_csv):
                if not od["order_number"] or not od["area"]:
                    logger.warning("Order row without number or area, skipping: %s", od)
                    continue

                existing = await session.execute(
                    select(OrderModel).where(OrderModel.order_number == od["order_number"])
                )
                if existing.scalar_one_or_none():
                    logger.debug("Order '%s' already exists, skipping", od["order_number"])
                    continue

                total = od["total_amount"]
                if total is None:
                    total = round(sum(i["quantity"] * i["price"] for i in od["items"]), 2)

                session.add(OrderModel(
                    order_number=od["order_number"],
                    customer_name=od["customer_name"],
                    customer_phone=od["customer_phone"],
                    customer_address=od["customer_address"],
                    area=od["area"],
                    items=od["items"],
                    status="pending",
                    scheduled_for=od["scheduled_for"],
                    total_amount=total,
                ))
                counts["orders"] += 1

            await session.commit()
        else:
            logger.info("No orders CSV found, skipping order import")

    logger.info(
        "Seed complete: %d partners, %d orders", counts["partners"], counts["orders"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        partners = (await session.execute(select(PartnerModel))).scalars().all()
        status_rows = (
            await session.execute(
                select(OrderModel.status, func.count(OrderModel.id)).group_by(OrderModel.status)
            )
        ).all()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Partners: {len(partners)}")
        active = sum(1 for p in partners if p.status == PartnerStatus.ACTIVE.value)
        print(f"Active partners: {active}/{len(partners)}")
        areas = sorted({a for p in partners for a in (p.areas or [])})
        print(f"Areas covered: {areas}")
        print(f"Orders by status: {dict(status_rows)}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the delivery database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory containing CSV files (default: CSV_DATA_PATH or 'data')",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
