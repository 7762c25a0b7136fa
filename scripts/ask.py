#!/usr/bin/env python3
"""
Send one question to a running support agent backend and print the reply.

Run from project root (after `uvicorn app.main:app`):

    python scripts/ask.py
    python scripts/ask.py "Can I book a haircut for next Tuesday?"
    python scripts/ask.py --api-base http://localhost:8000 "What are your support hours?"
"""

import argparse
import json
import os
import sys

import requests

DEFAULT_QUERY = "I want to check order ABC-123"


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a question to POST /chat.")
    parser.add_argument("query", nargs="?", default=DEFAULT_QUERY, help="Customer question.")
    parser.add_argument(
        "--api-base",
        default=os.environ.get("API_BASE", "http://localhost:8000"),
        help="Backend base URL (default: $API_BASE or http://localhost:8000).",
    )
    parser.add_argument("--timeout", type=float, default=90.0, help="Request timeout in seconds.")
    args = parser.parse_args()

    try:
        r = requests.post(f"{args.api_base}/chat", json={"user_query": args.query}, timeout=args.timeout)
    except requests.RequestException as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    print(f"HTTP {r.status_code}")
    try:
        print(json.dumps(r.json(), indent=2, ensure_ascii=False))
    except ValueError:
        print(r.text)
    return 0 if r.ok else 1


if __name__ == "__main__":
    sys.exit(main())
