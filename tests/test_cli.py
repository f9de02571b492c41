"""Tests for the command-line client."""

import httpx
import pytest
from fastapi.testclient import TestClient

from tablebook.cli import BOOKING_PROMPTS, TablebookCLI
from tablebook.config import Config
from tablebook.models import ReservationStatus
from tablebook.server import create_app
from tablebook.services import ReservationStore


def scripted_input(answers):
    """Input function returning prepared answers in order."""
    replies = iter(answers)
    return lambda _prompt: next(replies)


@pytest.fixture
def api_client():
    app = create_app(Config(storage_backend="memory"))
    with TestClient(app) as test_client:
        yield test_client


class TestTablebookCLI:
    """Tests for TablebookCLI against the API."""

    def test_book_prompts_every_field(self, api_client, jane_form, capsys):
        answers = [str(jane_form.get(field, "")) for field, _prompt in BOOKING_PROMPTS]
        cli = TablebookCLI(client=api_client, input_func=scripted_input(answers))

        reservation = cli.book()

        assert reservation is not None
        assert reservation.customer_name == "Jane Doe"
        assert reservation.party_size == 4
        assert "Reservation Confirmed!" in capsys.readouterr().out

    def test_submit_reports_field_errors(self, api_client, jane_form, capsys):
        cli = TablebookCLI(client=api_client)

        result = cli.submit({**jane_form, "phone": "12345"})

        assert result is None
        out = capsys.readouterr().out
        assert "phone: Please enter a valid 10-digit phone number" in out

    def test_show_and_search(self, api_client, jane_form, capsys):
        cli = TablebookCLI(client=api_client)
        cli.submit(jane_form)
        cli.submit({**jane_form, "customerName": "Ann Lee"})
        capsys.readouterr()

        everything = cli.show_reservations()
        matches = cli.show_reservations(search="ann")

        assert len(everything) == 2
        assert [r.customer_name for r in matches] == ["Ann Lee"]
        assert "Total: 2" in capsys.readouterr().out

    def test_cancel_by_short_reference(self, api_client, jane_form, capsys):
        cli = TablebookCLI(client=api_client)
        reservation = cli.submit(jane_form)

        cancelled = cli.cancel(reservation.id[-8:])

        assert cancelled.status == ReservationStatus.CANCELLED
        assert "has been cancelled" in capsys.readouterr().out
        assert cli.show_reservations(active_only=True) == []

    def test_cancel_unknown_reference(self, api_client, capsys):
        cli = TablebookCLI(client=api_client)

        assert cli.cancel("zzzzzzzz") is None
        assert "No reservation matches" in capsys.readouterr().out

    def test_cancel_by_full_id(self, api_client, jane_form):
        cli = TablebookCLI(client=api_client)
        reservation = cli.submit(jane_form)

        cancelled = cli.cancel(reservation.id)

        assert cancelled.id == reservation.id

    def test_cancel_rejects_partial_reference(self, api_client, jane_form, capsys):
        """Test that a fragment of a reference never cancels anything."""
        cli = TablebookCLI(client=api_client)
        reservation = cli.submit(jane_form)

        assert cli.cancel(reservation.id[-1]) is None
        assert cli.cancel(reservation.id[-7:]) is None

        assert "No reservation matches" in capsys.readouterr().out
        assert [r.id for r in cli.show_reservations(active_only=True)] == [
            reservation.id
        ]

    def test_cancel_ambiguous_reference(
        self, api_client, jane_form, monkeypatch, capsys
    ):
        ids = iter(["res_1_aabbccdd1", "res_2_aabbccdd1"])
        monkeypatch.setattr(
            ReservationStore, "generate_reservation_id", staticmethod(lambda: next(ids))
        )
        cli = TablebookCLI(client=api_client)
        cli.submit(jane_form)
        cli.submit({**jane_form, "customerName": "Ann Lee"})

        assert cli.cancel("abbccdd1") is None

        assert "matches 2 reservations" in capsys.readouterr().out
        assert len(cli.show_reservations(active_only=True)) == 2

    def test_run_loop(self, api_client, capsys):
        cli = TablebookCLI(
            client=api_client,
            input_func=scripted_input(["", "list", "dance", "quit"]),
        )

        cli.run()

        out = capsys.readouterr().out
        assert "No reservations yet" in out
        assert "Unknown command: dance" in out
        assert "Goodbye!" in out

    def test_run_handles_connection_error(self, capsys):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        client = httpx.Client(
            base_url="http://tablebook.test", transport=httpx.MockTransport(refuse)
        )
        cli = TablebookCLI(
            client=client, input_func=scripted_input(["list", "exit"])
        )

        cli.run()

        assert "Cannot connect to server" in capsys.readouterr().out
