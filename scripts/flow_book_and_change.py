#!/usr/bin/env python3
"""
Reserve a room and then move the reservation to another room.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/flow_book_and_change.py --token <JWT> --room-id 1 --new-room-id 2

Flow:
    1. Create booking
    2. Read booking
    3. Move booking to another room
    4. Read booking again
"""

import argparse
import json
import sys

import httpx

BASE_URL = "http://localhost:8000"


def api_request(token: str, method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make authenticated API request."""
    headers = {"Authorization": f"Bearer {token}"}
    url = f"{BASE_URL}{endpoint}"

    if method == "GET":
        response = httpx.get(url, headers=headers, timeout=10.0)
    elif method == "POST":
        response = httpx.post(url, headers=headers, json=data or {}, timeout=10.0)
    elif method == "PUT":
        response = httpx.put(url, headers=headers, json=data or {}, timeout=10.0)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict) -> bool:
    """Print result, returning False on an error status."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    print(json.dumps(result["data"], indent=2))
    return True


def main():
    parser = argparse.ArgumentParser(description="Book a room and move the booking")
    parser.add_argument("--token", required=True, help="Bearer token of an eligible participant")
    parser.add_argument("--room-id", type=int, required=True, help="Room to book first")
    parser.add_argument("--new-room-id", type=int, required=True, help="Room to move to")
    args = parser.parse_args()

    print_step(1, "Create booking")
    created = api_request(args.token, "POST", "/booking", {"roomId": args.room_id})
    if not print_result(created):
        sys.exit(1)
    booking_id = created["data"]["bookingId"]

    print_step(2, "Read booking")
    if not print_result(api_request(args.token, "GET", "/booking")):
        sys.exit(1)

    print_step(3, "Move booking")
    moved = api_request(args.token, "PUT", f"/booking/{booking_id}", {"roomId": args.new_room_id})
    if not print_result(moved):
        sys.exit(1)

    print_step(4, "Read booking again")
    current = api_request(args.token, "GET", "/booking")
    if not print_result(current):
        sys.exit(1)

    print("\n" + "="*60)
    print("FLOW COMPLETE")
    print("="*60)
    print(f"Booking {booking_id} now in room {current['data']['Room']['id']}")


if __name__ == "__main__":
    main()
