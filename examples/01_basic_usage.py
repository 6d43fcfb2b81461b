"""
Basic HTTP Transport Usage Examples

Demonstrates simple GET, POST, PUT, DELETE requests.
"""

import asyncio

from http_transport import HttpStatusError, as_json, create_client, to_error

BASE_URL = "https://jsonplaceholder.typicode.com"


async def basic_get_request():
    """Simple GET request."""
    print("\n=== Basic GET Request ===")

    client = create_client()
    response = await client.get(f"{BASE_URL}/posts/1").as_response()

    print(f"Status: {response.status_code}")
    print(f"Took: {response.elapsed_time_ms:.0f} ms")
    print(f"Body: {response.body[:80]}...")


async def post_with_json():
    """POST request with JSON body, parsed JSON response."""
    print("\n=== POST with JSON ===")

    client = create_client()
    data = {
        "title": "My Post",
        "body": "This is the content",
        "userId": 1
    }

    created = await client.post(f"{BASE_URL}/posts", data).use(as_json()).as_body()
    print(f"Created: {created}")


async def put_and_delete():
    """PUT then DELETE."""
    print("\n=== PUT / DELETE ===")

    client = create_client().use_global(as_json())

    updated = await client.put(f"{BASE_URL}/posts/1", {"id": 1, "title": "Updated"}).as_body()
    print(f"Updated: {updated}")

    response = await client.delete(f"{BASE_URL}/posts/1")
    print(f"Deleted, status: {response.status_code}")


async def query_and_headers():
    """Query strings and custom headers."""
    print("\n=== Query + Headers ===")

    client = create_client()
    posts = await (
        client.get(f"{BASE_URL}/posts")
        .query("userId", 1)
        .headers({"Accept": "application/json"})
        .use(as_json())
        .as_body()
    )
    print(f"User 1 has {len(posts)} posts")


async def error_handling():
    """5xx fail in the transport, to_error() also turns 4xx into HttpStatusError."""
    print("\n=== Error Handling ===")

    client = create_client().use_global(to_error())
    try:
        await client.get(f"{BASE_URL}/posts/999999").as_body()
    except HttpStatusError as e:
        print(f"{e} (status {e.status_code})")


async def main():
    await basic_get_request()
    await post_with_json()
    await put_and_delete()
    await query_and_headers()
    await error_handling()


if __name__ == "__main__":
    asyncio.run(main())
