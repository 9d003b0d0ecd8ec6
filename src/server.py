"""Protean Engine runner for OrderFlow.

Processes domain events asynchronously when PROTEAN_ENV selects the
production overlay (order notifications in particular):
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes event handlers

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


def _get_domain():
    from orderflow.domain import orderflow

    orderflow.init()
    return orderflow


async def run():
    engine = Engine(_get_domain())
    await engine.run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
