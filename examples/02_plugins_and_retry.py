"""
Plugins and Retry Examples

Demonstrates global/per-request plugins, retries with history and
exponential backoff.
"""

import asyncio
import logging
import time

from http_transport import (
    ExponentialBackoff,
    HttpStatusError,
    Plugin,
    RetryConfig,
    TransportConfig,
    create_client,
    log,
    to_error,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


async def timing(ctx, next_):
    """Plain function plugin: measures the whole inner chain."""
    start = time.perf_counter()
    await next_()
    print(f"  inner chain took {(time.perf_counter() - start) * 1000:.0f} ms")


class ApiKeyPlugin(Plugin):
    """Hook-based plugin: adds a header before the call."""

    def __init__(self, api_key):
        self.api_key = api_key

    async def before(self, ctx):
        ctx.headers["X-Api-Key"] = self.api_key


async def plugins_example():
    print("\n=== Global and per-request plugins ===")

    client = (
        create_client()
        .use_global(log(logging.getLogger("api")))
        .use_global(ApiKeyPlugin("demo-key"))
    )

    # timing runs only for this request, inside the global plugins
    body = await client.use(timing).get("https://httpbin.org/headers").as_body()
    print(body)


async def retry_example():
    print("\n=== Retry with history ===")

    delay = ExponentialBackoff(RetryConfig(backoff_base=0.2, backoff_max=2.0))
    client = create_client(
        TransportConfig.create(fail_on_status=None),
        delay=delay,
    ).use_global(to_error())

    try:
        await client.get("https://httpbin.org/status/503").retry(2)
    except HttpStatusError as e:
        print(f"Failed: {e}")
        for record in e.retries:
            print(f"  attempt {record.index}: {record.status_code} {record.reason}")


async def main():
    await plugins_example()
    await retry_example()


if __name__ == "__main__":
    asyncio.run(main())
