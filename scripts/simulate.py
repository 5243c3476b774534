"""
Chaos Simulation Script

Fires many concurrent drink orders at a running torc server to exercise
the storage and popularity-count guarantees under load.
Run from project root: python scripts/simulate.py --orders 100

Afterwards compare the popularity view with what was sent:
    python scripts/verify.py

Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from collections import Counter
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8080"
ADMIN_BASE_URL = "http://localhost:9090"
TOTAL_ORDERS = 50

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
INSTRUCTIONS = ["", "", "oat milk", "extra hot", "no sugar", "half sweet", "to go"]


def generate_order_payload(menu: list[str]) -> dict[str, str]:
    """Generate a random order against the live menu."""
    return {
        "drink": random.choice(menu),
        "customerName": random.choice(FIRST_NAMES),
        "instructions": random.choice(INSTRUCTIONS),
    }


async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    menu: list[str],
) -> dict[str, Any]:
    """Submit one order and time it."""
    payload = generate_order_payload(menu)
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/order", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            data = response.json()
            return {
                "order_num": order_num,
                "success": True,
                "order_id": data.get("orderId"),
                "drink": data.get("drink"),
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def popularity_counts(client: httpx.AsyncClient) -> Counter:
    response = await client.get(f"{API_BASE_URL}/popular")
    response.raise_for_status()
    return Counter({item["drink"]: item["count"] for item in response.json()["items"]})


async def run_simulation(session_name: str, num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Create ``session_name``, fire ``num_orders`` orders concurrently and
    check the session listing and popularity deltas against what succeeded.
    """
    print("=" * 70)
    print("CHAOS SIMULATION - CONCURRENT ORDERS")
    print("=" * 70)
    print(f"Total Orders: {num_orders}")
    print(f"Target: {API_BASE_URL}")
    print(f"Session: {session_name}")
    print(f"Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        response = await client.post(
            f"{API_BASE_URL}/session/create", json={"sessionName": session_name}
        )
        response.raise_for_status()

        menu = (await client.get(f"{API_BASE_URL}/menu")).json()["menu"]
        if not menu:
            print("\nMenu is empty - add drinks to menu.txt first.")
            sys.exit(1)

        before = await popularity_counts(client)

        start_time = time.time()
        tasks = [send_order(client, i + 1, menu) for i in range(num_orders)]
        results = await asyncio.gather(*tasks)
        total_time = round(time.time() - start_time, 2)

        after = await popularity_counts(client)
        listing = await client.get(
            f"{ADMIN_BASE_URL}/api/orders", params={"sessionName": session_name}
        )
        stored = len(listing.json()["orders"]) if listing.status_code == 200 else None

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    sent = Counter(r["drink"] for r in successful)
    delta = after - before

    print("\n" + "=" * 70)
    print("SIMULATION RESULTS")
    print("=" * 70)
    print(f"\nSuccessful Orders: {len(successful)}/{num_orders}")
    print(f"Failed Orders: {len(failed)}/{num_orders}")
    print(f"Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print("\nPerformance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")

    print("\nConsistency Checks:")
    if stored is None:
        print("   Admin API unreachable - session listing not checked")
    else:
        mark = "OK " if stored >= len(successful) else "BAD"
        print(f"   [{mark}] Orders in session: {stored} (>= {len(successful)} expected)")
    mark = "OK " if delta == sent else "BAD"
    print(f"   [{mark}] Popularity delta matches submitted drinks")

    if failed:
        print("\nFailed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "popularity_consistent": delta == sent,
        "results": results,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Chaos Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument(
        "--session",
        default=f"sim-{datetime.now().strftime('%Y%m%d-%H%M%S')}",
        help="Session to create and fill",
    )
    args = parser.parse_args()

    summary = asyncio.run(run_simulation(args.session, args.orders))
    sys.exit(0 if summary["popularity_consistent"] else 1)
