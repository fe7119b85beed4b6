"""Mint an owner token for local development.

Usage:
    python create_token.py owner-42 --days 30
"""
import argparse

from hotel_booking_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a bearer token for a hotel owner.")
    ap.add_argument("owner_id", help="Identifier of the owner (becomes the token subject)")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days")
    args = ap.parse_args()
    print(create_access_token({"sub": args.owner_id}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
