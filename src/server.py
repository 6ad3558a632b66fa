"""Protean Engine runner for the storefront domains.

Starts Engine workers that process events asynchronously:
- OutboxProcessor: polls outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes projectors and event handlers

Usage:
    python src/server.py                       # Run every domain engine
    python src/server.py --domain ordering     # Run only the ordering engine
"""

import argparse
import asyncio
import importlib

import structlog
from protean.server.engine import Engine

logger = structlog.get_logger(__name__)

DOMAIN_NAMES = ["identity", "catalogue", "ordering", "reviews", "notifications"]


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name not in DOMAIN_NAMES:
        raise ValueError(f"Unknown domain: {name}")

    domain = getattr(importlib.import_module(f"{name}.domain"), name)
    domain.init()
    return domain


async def run(domain_names):
    engines = []
    for name in domain_names:
        domain = _get_domain(name)
        engines.append(Engine(domain))
        logger.info("Engine starting", domain=name)

    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    domain_names = [args.domain] if args.domain else DOMAIN_NAMES

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
