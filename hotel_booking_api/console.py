"""Terminal console for hotel owners.

Lists the owner's hotels, adds new ones, shows and edits a single
hotel and deletes hotels after an explicit confirmation.  Results of
mutations are reported as one-line notifications.  The console only
talks to the HTTP API through
:class:`hotel_booking_api.client.MyHotelsClient`.

Configuration comes from command line options or environment
variables:

``HOTEL_API_BASE_URL``
    Base URL of the API.  Defaults to ``http://localhost:8000``.

``HOTEL_API_TOKEN``
    Bearer token of the owner.  Required.

Usage::

    python -m hotel_booking_api.console list
    python -m hotel_booking_api.console add --set name="Lotus Inn" --set city=Pokhara ... --image front.jpg
    python -m hotel_booking_api.console show <hotel_id>
    python -m hotel_booking_api.console edit <hotel_id> --set name="Lotus Inn" --image lobby.jpg
    python -m hotel_booking_api.console delete <hotel_id>
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence

from hotel_booking_api.client import MyHotelsClient


ADD_HINT = "Add a hotel with: add --set name=... --set facilities=wifi,parking --image photo.jpg"
DELETE_PROMPT = "Are you sure you want to delete this hotel? This action cannot be undone."


class OwnerConsole:
    """Interactive front end over :class:`MyHotelsClient`."""

    def __init__(
        self,
        client: MyHotelsClient,
        *,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self.client = client
        self._input = input_func
        self._output = output

    def notify(self, message: str, kind: str = "SUCCESS") -> None:
        marker = "[+]" if kind == "SUCCESS" else "[!]"
        self._output(f"{marker} {message}")

    @staticmethod
    def format_hotel(hotel: Dict[str, Any]) -> str:
        stars = hotel.get("star_rating")
        lines = [
            f"{hotel['name']}  (id: {hotel['id']})",
            f"  {hotel.get('description', '')}",
            f"  Location: {hotel.get('city')}, {hotel.get('country')}",
            f"  Type: {hotel.get('type')}",
            f"  Price: {hotel.get('price_per_night')} per night",
            f"  Guests: {hotel.get('adult_count', 0)} adults, {hotel.get('child_count', 0)} children",
            f"  Rating: {stars} stars" if stars else "  Rating: unrated",
        ]
        if hotel.get("facilities"):
            lines.append(f"  Facilities: {', '.join(hotel['facilities'])}")
        return "\n".join(lines)

    def render_hotels(self, hotels: List[Dict[str, Any]]) -> str:
        if not hotels:
            return f"No hotels found\n{ADD_HINT}"
        blocks = [self.format_hotel(hotel) for hotel in hotels]
        return "My Hotels\n\n" + "\n\n".join(blocks) + f"\n\n{ADD_HINT}"

    def show_list(self) -> bool:
        hotels, error = self.client.list_hotels()
        if error:
            self.notify(error["message"] or "Failed to fetch hotels", "ERROR")
            return False
        self._output(self.render_hotels(hotels or []))
        return True

    def show_hotel(self, hotel_id: str) -> bool:
        hotel, error = self.client.get_hotel(hotel_id)
        if error:
            self.notify(error["message"] or "Failed to fetch hotel", "ERROR")
            return False
        self._output(self.format_hotel(hotel))
        for url in hotel.get("image_urls", []):
            self._output(f"  Image: {url}")
        return True

    def create_hotel(self, fields: Dict[str, Any], image_paths: Sequence[str] = ()) -> bool:
        hotel, error = self.client.create_hotel(fields, image_paths)
        if error:
            self.notify(error["message"] or "Failed to add hotel", "ERROR")
            return False
        self.notify(f"Hotel added! (id: {hotel['id']})")
        return True

    def edit_hotel(
        self,
        hotel_id: str,
        changes: Dict[str, Any],
        image_paths: Sequence[str] = (),
    ) -> bool:
        """Apply ``changes`` to a hotel, keeping its current images.

        New images from ``image_paths`` are added in front of the
        existing ones.
        """
        hotel, error = self.client.get_hotel(hotel_id)
        if error:
            self.notify(error["message"] or "Failed to fetch hotel", "ERROR")
            return False
        fields = dict(changes)
        fields.setdefault("image_urls", hotel.get("image_urls", []))
        _, error = self.client.update_hotel(hotel_id, fields, image_paths)
        if error:
            self.notify(error["message"] or "Failed to update hotel", "ERROR")
            return False
        self.notify("Hotel saved!")
        return True

    def confirm(self, message: str) -> bool:
        answer = self._input(f"{message} [y/N] ")
        return answer.strip().lower() in {"y", "yes"}

    def delete_hotel(self, hotel_id: str) -> bool:
        """Delete a hotel once the owner confirms.

        Returns ``True`` only if the hotel was deleted.
        """
        if not self.confirm(DELETE_PROMPT):
            self._output("Cancelled.")
            return False
        _, error = self.client.delete_hotel(hotel_id)
        if error:
            self.notify(error["message"] or "Failed to delete hotel", "ERROR")
            return False
        self.notify("Hotel deleted successfully!")
        return True


def _add_field_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--set",
        dest="changes",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Hotel field; facilities take a comma-separated list",
    )
    parser.add_argument("--image", dest="images", action="append", default=[], help="Image file to upload")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage your hotels.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("HOTEL_API_BASE_URL", "http://localhost:8000"),
        help="Base URL of the hotel API",
    )
    ap.add_argument("--token", default=os.getenv("HOTEL_API_TOKEN"), help="Owner bearer token")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List your hotels")
    add = sub.add_parser("add", help="Add a hotel")
    _add_field_options(add)
    show = sub.add_parser("show", help="Show one hotel")
    show.add_argument("hotel_id")
    edit = sub.add_parser("edit", help="Change fields of one hotel")
    edit.add_argument("hotel_id")
    _add_field_options(edit)
    delete = sub.add_parser("delete", help="Delete one hotel")
    delete.add_argument("hotel_id")
    return ap


def parse_changes(items: Sequence[str]) -> Dict[str, Any]:
    """Turn ``FIELD=VALUE`` arguments into update fields."""
    changes: Dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected FIELD=VALUE, got '{item}'")
        key = key.strip()
        if key == "facilities":
            changes[key] = [part.strip() for part in value.split(",") if part.strip()]
        else:
            changes[key] = value
    return changes


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.token:
        print("[!] An owner token is required (--token or HOTEL_API_TOKEN).", file=sys.stderr)
        return 1
    logging.basicConfig(level=logging.WARNING)
    console = OwnerConsole(MyHotelsClient(base_url=args.base_url, token=args.token))
    if args.command == "list":
        ok = console.show_list()
    elif args.command == "show":
        ok = console.show_hotel(args.hotel_id)
    elif args.command in {"add", "edit"}:
        try:
            changes = parse_changes(args.changes)
        except ValueError as exc:
            print(f"[!] {exc}", file=sys.stderr)
            return 1
        if args.command == "add":
            ok = console.create_hotel(changes, args.images)
        else:
            ok = console.edit_hotel(args.hotel_id, changes, args.images)
    else:
        ok = console.delete_hotel(args.hotel_id)
    return 0 if ok else 2


if __name__ == "__main__":
    sys.exit(main())
