"""Storefront management CLI.

Creates and drops database schemas for every domain and seeds a demo store.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py drop-db --domain ordering # Drop one domain's tables
    python src/manage.py seed-demo                 # Categories, products, offers, shifts, staff
"""

import argparse
import importlib
import json
import sys

import structlog
from shared.db import drop_db, setup_db

logger = structlog.get_logger(__name__)

DOMAIN_NAMES = ["identity", "catalogue", "ordering", "reviews", "notifications"]

DEMO_CATEGORIES = [
    ("Bottled Water", "Still water in every size"),
    ("Sparkling", "Carbonated mineral water"),
    ("Gallons", "Refillable home and office gallons"),
]

DEMO_PRODUCTS = [
    # name, price, compare_at_price, category slug, size
    ("Spring Water 330ml x 40", 18.0, 22.0, "bottled-water", "330ml"),
    ("Spring Water 600ml x 30", 21.0, None, "bottled-water", "600ml"),
    ("Sparkling Water 250ml x 24", 32.5, 36.0, "sparkling", "250ml"),
    ("Home Gallon 18.9L", 12.0, None, "gallons", "18.9L"),
]

DEMO_SHIFTS = [("Morning", "08:00", "12:00"), ("Afternoon", "13:00", "17:00"), ("Evening", "18:00", "22:00")]

DEMO_STAFF = [
    # role, name, phone, extra
    ("Admin", "Store Admin", "0500000001", {}),
    ("Marketer", "Lina Marketer", "0500000002", {"marketer_level": "Senior", "commission_rate": 5.0}),
    ("Driver", "Khalid Driver", "0500000003", {"vehicle_type": "Van", "plate_number": "ABC 123", "max_orders": 4}),
    ("Driver", "Omar Driver", "0500000004", {"vehicle_type": "Car", "plate_number": "XYZ 789", "max_orders": 3}),
]

DEMO_PASSWORD = "demo-password"


def _load_domain(name):
    domain = getattr(importlib.import_module(f"{name}.domain"), name)
    domain.init()
    return domain


def _targets(domains):
    return domains or DOMAIN_NAMES


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name in _targets(domains):
        domain = _load_domain(name)
        providers = setup_db(domain)
        print(f"  {name} schema ready ({', '.join(providers) or 'no SQL providers'}).")
        logger.info("Schema created", domain=name, providers=providers)


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name in _targets(domains):
        domain = _load_domain(name)
        providers = drop_db(domain)
        print(f"  {name} schema dropped ({', '.join(providers) or 'no SQL providers'}).")
        logger.info("Schema dropped", domain=name, providers=providers)


def _seed_catalogue():
    from catalogue.category.management import CreateCategory
    from catalogue.offer.management import CreateOffer
    from catalogue.product.management import CreateProduct

    catalogue = _load_domain("catalogue")
    product_ids = []
    with catalogue.domain_context():
        for order, (name, description) in enumerate(DEMO_CATEGORIES):
            catalogue.process(
                CreateCategory(name=name, description=description, display_order=order), asynchronous=False
            )

        for name, price, compare_at_price, category_slug, size in DEMO_PRODUCTS:
            product_ids.append(
                catalogue.process(
                    CreateProduct(
                        name=name,
                        price=price,
                        compare_at_price=compare_at_price,
                        category_slug=category_slug,
                        size=size,
                        is_published=True,
                    ),
                    asynchronous=False,
                )
            )

        catalogue.process(
            CreateOffer(
                title="Weekend deal",
                description="Save on bottled water all weekend",
                discount_percentage=10.0,
                product_ids=json.dumps(product_ids[:2]),
            ),
            asynchronous=False,
        )
    return len(product_ids)


def _seed_shifts():
    from ordering.shift.management import CreateShift

    ordering = _load_domain("ordering")
    with ordering.domain_context():
        for name, start_time, end_time in DEMO_SHIFTS:
            ordering.process(CreateShift(name=name, start_time=start_time, end_time=end_time), asynchronous=False)
    return len(DEMO_SHIFTS)


def _seed_staff():
    from identity.user.staff import CreateStaffUser

    identity = _load_domain("identity")
    with identity.domain_context():
        for role, name, phone, extra in DEMO_STAFF:
            identity.process(
                CreateStaffUser(role=role, name=name, phone=phone, password=DEMO_PASSWORD, **extra),
                asynchronous=False,
            )
    return len(DEMO_STAFF)


def seed_demo():
    """Populate a fresh store with demo data."""
    counts = {
        "products": _seed_catalogue(),
        "shifts": _seed_shifts(),
        "staff": _seed_staff(),
    }

    print("Demo data:")
    for kind, count in counts.items():
        print(f"  {kind}: {count}")
    logger.info("Demo data seeded", **counts)


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    subparsers.add_parser("seed-demo", help="Populate demo categories, products, offers, shifts and staff")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-demo":
        seed_demo()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
