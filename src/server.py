"""Protean Engine runner for the campus domain.

Only needed when event processing is asynchronous (the production overlay):
the Engine publishes outbox events and drives the projector and the event
handlers.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from campus.domain import campus

    campus.init()
    await Engine(campus).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
