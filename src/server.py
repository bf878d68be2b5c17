"""Protean Engine runner for the marketplace domains.

In production, events leave the unit of work through the outbox and are
processed here: projectors (order summaries, seller dashboard, chat
summaries) and the message feed handler.

Usage:
    python src/server.py                       # Run every domain engine
    python src/server.py --domain marketplace  # Run only the marketplace engine
"""

import argparse
import asyncio

from protean.server.engine import Engine

from marketplace.utils.logging import configure_logging, get_logger

DOMAIN_NAMES = ("identity", "marketplace", "messaging")

logger = get_logger(__name__)


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name == "identity":
        from identity.domain import identity as domain
    elif name == "marketplace":
        from marketplace.domain import marketplace as domain
    elif name == "messaging":
        from messaging.domain import messaging as domain
    else:
        raise ValueError(f"Unknown domain: {name}")

    domain.init()
    return domain


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    logger.info("engines_starting", domains=list(domain_names))
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="EcoPure engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    configure_logging()
    asyncio.run(run([args.domain] if args.domain else list(DOMAIN_NAMES)))


if __name__ == "__main__":
    main()
