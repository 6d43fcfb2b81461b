"""
Environment Configuration Examples.

Demonstrates loading client defaults from .env files and environment variables.
"""

import asyncio
import os
import tempfile

from http_transport import create_client, load_from_env


async def example_load_from_env_file():
    """Load from a .env file."""
    print("\n" + "=" * 60)
    print("Load from .env")
    print("=" * 60 + "\n")

    with tempfile.NamedTemporaryFile("w", suffix=".env", delete=False) as f:
        f.write("HTTP_TRANSPORT_TIMEOUT_MS=3000\n")
        f.write("HTTP_TRANSPORT_RETRIES=2\n")
        f.write("HTTP_TRANSPORT_LOG_ENABLED=true\n")
        f.write("HTTP_TRANSPORT_LOG_FORMAT=json\n")
        env_file = f.name

    try:
        config = load_from_env(env_file=env_file)
    finally:
        os.remove(env_file)

    print(f"timeout_ms={config.timeout_ms} retries={config.retries}")

    client = create_client(config)
    try:
        response = await client.get("https://httpbin.org/get")
        print(f"Response status: {response.status_code}\n")
    except Exception as e:
        print(f"Request failed (expected in some environments): {type(e).__name__}\n")


def example_overrides():
    """Explicit overrides beat environment variables."""
    os.environ["HTTP_TRANSPORT_RETRIES"] = "5"
    try:
        config = load_from_env(retries=1, user_agent="my-service/1.0")
    finally:
        del os.environ["HTTP_TRANSPORT_RETRIES"]

    print(f"retries={config.retries} user_agent={config.user_agent}")


if __name__ == "__main__":
    asyncio.run(example_load_from_env_file())
    example_overrides()
