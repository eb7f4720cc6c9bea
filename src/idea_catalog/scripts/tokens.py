# src/idea_catalog/scripts/tokens.py
"""Mint a development bearer token for an existing user id."""

from __future__ import annotations

import argparse
import uuid

from idea_catalog.core.security import create_access_token


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a bearer token for a user id.")
    parser.add_argument("user_id", type=uuid.UUID, help="ID of the user the token identifies")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = parser.parse_args(argv)

    print(create_access_token(args.user_id, expires_minutes=args.minutes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
