"""Command-line interface for Tablebook - HTTP client for server API."""

import logging
import sys
from collections.abc import Callable
from typing import Any

import httpx

from tablebook.config import get_config, setup_logging
from tablebook.models import Reservation
from tablebook.services.reservation_view import (
    format_reservation,
    short_reference,
)

logger = logging.getLogger(__name__)

BOOKING_PROMPTS = [
    ("customerName", "Full name"),
    ("phone", "Phone number, e.g. (555) 123-4567"),
    ("email", "Email address"),
    ("date", "Date (YYYY-MM-DD)"),
    ("time", "Time (HH:MM, 11:00-22:00 every 30 minutes)"),
    ("partySize", "Party size (1-12)"),
    ("tablePreference", "Table preference (window, patio, indoor, no_preference)"),
    ("specialRequests", "Special requests (optional)"),
]


class TablebookCLI:
    """Command-line interface for the reservation service - HTTP client."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        input_func: Callable[[str], str] = input,
    ) -> None:
        """Initialize the CLI.

        Args:
            client: HTTP client bound to the API (created from config if omitted)
            input_func: Function used to read user input
        """
        self.config = get_config()
        self.client = client or httpx.Client(
            base_url=self.config.server_url, timeout=30.0
        )
        self.input = input_func
        logger.info(f"Tablebook CLI using {self.config.server_url}")

    def run(self) -> None:
        """Run the CLI application."""
        print("\n" + "=" * 60)
        print(f"{self.config.restaurant_name.upper()} - Reservations")
        print("=" * 60)
        print("Commands:")
        print("  book                 Make a reservation")
        print("  list                 Show all reservations")
        print("  active               Show confirmed reservations")
        print("  search <term>        Search by name, phone, email or date")
        print("  cancel <reference>   Cancel by id or reference number")
        print("Type 'quit' or 'exit' to end the session.\n")

        while True:
            try:
                command = self.input("\n> ").strip()

                if not command:
                    continue

                if command.lower() in ["quit", "exit", "q"]:
                    print("\nGoodbye!")
                    break

                self.handle_command(command)

            except (KeyboardInterrupt, EOFError):
                print("\n\nGoodbye!")
                break
            except httpx.TimeoutException:
                logger.exception("Request timed out")
                print("\n⚠ Request timed out. Please try again.")
            except httpx.ConnectError:
                logger.exception("Cannot connect to server")
                print(f"\n⚠ Cannot connect to server at {self.config.server_url}")
                print("Make sure the server is running:")
                print("  tablebook-server")

    def handle_command(self, command: str) -> None:
        """Dispatch one command line."""
        name, _, argument = command.partition(" ")
        name = name.lower()
        argument = argument.strip()

        if name == "book":
            self.book()
        elif name == "list":
            self.show_reservations()
        elif name == "active":
            self.show_reservations(active_only=True)
        elif name == "search":
            self.show_reservations(search=argument)
        elif name == "cancel" and argument:
            self.cancel(argument)
        else:
            print(f"Unknown command: {command}")

    def book(self) -> Reservation | None:
        """Prompt for booking details and submit them."""
        form: dict[str, Any] = {}
        for field, prompt in BOOKING_PROMPTS:
            form[field] = self.input(f"{prompt}: ").strip()
        return self.submit(form)

    def submit(self, form: dict[str, Any]) -> Reservation | None:
        """Send a booking form to the server and report the outcome."""
        response = self.client.post("/reservations", json=form)
        data = self._json(response)

        if response.status_code == 201:
            print(f"\n✓ Reservation Confirmed! {data['message']}")
            return Reservation.model_validate(data["reservation"])

        if response.status_code == 422 and "errors" in data:
            print("\n⚠ Please correct the following:")
            for field, message in data["errors"].items():
                print(f"  {field}: {message}")
            return None

        self._print_error(response, data)
        return None

    def show_reservations(
        self, search: str | None = None, active_only: bool = False
    ) -> list[Reservation]:
        """Fetch and print reservations in chronological order."""
        params: dict[str, Any] = {"active_only": active_only}
        if search:
            params["search"] = search

        response = self.client.get("/reservations", params=params)
        data = self._json(response)
        if response.status_code != 200:
            self._print_error(response, data)
            return []

        reservations = [Reservation.model_validate(r) for r in data["reservations"]]
        print(f"\nTotal: {data['total']} • Active: {data['active']}")

        if not reservations:
            print("No matching reservations" if search else "No reservations yet")
        for reservation in reservations:
            print("\n" + format_reservation(reservation))
        return reservations

    def cancel(self, reference: str) -> Reservation | None:
        """Cancel a reservation by full id or by its short reference."""
        matches = self._resolve_reference(reference)
        if not matches:
            print(f"\n⚠ No reservation matches '{reference}'")
            return None
        if len(matches) > 1:
            print(
                f"\n⚠ '{reference}' matches {len(matches)} reservations"
                " - use the full id"
            )
            return None
        reservation_id = matches[0]

        response = self.client.post(f"/reservations/{reservation_id}/cancel")
        data = self._json(response)
        if response.status_code != 200:
            self._print_error(response, data)
            return None

        print(f"\n✓ {data['message']}")
        return Reservation.model_validate(data["reservation"])

    def _resolve_reference(self, reference: str) -> list[str]:
        """Ids equal to the reference or whose short reference equals it."""
        response = self.client.get("/reservations")
        if response.status_code != 200:
            return []
        return [
            item["id"]
            for item in response.json()["reservations"]
            if reference in (item["id"], short_reference(item["id"]))
        ]

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        if response.headers.get("content-type", "").startswith("application/json"):
            return response.json()
        return {}

    @staticmethod
    def _print_error(response: httpx.Response, data: dict[str, Any]) -> None:
        error_msg = data.get("error") or data.get("detail") or response.text
        print(f"\n⚠ Server error (status {response.status_code}): {error_msg}")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        config = get_config()
    except Exception as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(config)
    cli = TablebookCLI()
    cli.run()


if __name__ == "__main__":
    main()
