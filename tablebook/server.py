"""FastAPI server exposing the booking intake and reservation store."""

import logging
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tablebook.config import Config, get_config, setup_logging
from tablebook.errors import (
    InvalidStatusTransitionError,
    ReservationCancelledError,
    ReservationNotFoundError,
    StorageError,
)
from tablebook.models import TIME_SLOTS, TablePreference
from tablebook.services import BookingIntake, ReservationStore, booking_window
from tablebook.services.reservation_view import (
    search_reservations,
    sort_chronologically,
    summarize,
)
from tablebook.storage import create_storage

logger = logging.getLogger(__name__)


def create_app(cfg: Config | None = None) -> FastAPI:
    """Build the API application.

    Args:
        cfg: Configuration to use (defaults to the global config)

    Returns:
        FastAPI application whose lifespan loads the reservation store
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Application lifespan manager."""
        config = cfg or get_config()
        logger.info(
            f"Starting Tablebook API for {config.restaurant_name} "
            f"(storage: {config.storage_backend})"
        )

        store = ReservationStore(create_storage(config))
        store.load()

        # Store services in app state for dependency injection
        _app.state.config = config
        _app.state.store = store
        _app.state.intake = BookingIntake(store)

        yield

        logger.info("Shutting down Tablebook API")

    app = FastAPI(
        title="Tablebook API",
        description="Restaurant reservation API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    _register_routes(app)
    return app


def get_store(request: Request) -> ReservationStore:
    """Dependency to get the reservation store from app state."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Store not initialized yet")
    return store


def get_intake(request: Request) -> BookingIntake:
    """Dependency to get the booking intake from app state."""
    intake = getattr(request.app.state, "intake", None)
    if intake is None:
        raise HTTPException(status_code=503, detail="Store not initialized yet")
    return intake


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ReservationNotFoundError)
    async def not_found_handler(_request: Request, exc: ReservationNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(InvalidStatusTransitionError)
    async def transition_handler(_request: Request, exc: InvalidStatusTransitionError):
        return JSONResponse(status_code=409, content={"error": str(exc)})

    @app.exception_handler(ReservationCancelledError)
    async def cancelled_handler(_request: Request, exc: ReservationCancelledError):
        return JSONResponse(status_code=409, content={"error": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_handler(_request: Request, exc: StorageError):
        logger.error(f"Storage failure: {exc}")
        return JSONResponse(
            status_code=500, content={"error": "Reservations could not be saved"}
        )


def _outcome_response(outcome, success_status: int = 200) -> JSONResponse:
    content: dict[str, Any] = {"success": outcome.success, "message": outcome.message}
    if outcome.success:
        content["reservation"] = outcome.reservation.to_json_dict()
        return JSONResponse(status_code=success_status, content=content)

    content["errors"] = outcome.errors
    return JSONResponse(status_code=422, content=content)


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "service": "tablebook-api"}

    @app.get("/slots")
    def list_slots():
        """Bookable time slots with their display labels."""
        return [slot.model_dump() for slot in TIME_SLOTS]

    @app.get("/table-preferences")
    def list_table_preferences():
        return [{"value": p.value, "label": p.label} for p in TablePreference]

    @app.get("/booking-window")
    def get_booking_window(request: Request):
        """Range of dates guests may pick."""
        start, end = booking_window(request.app.state.config.booking_window_days)
        return {"start": start.isoformat(), "end": end.isoformat()}

    @app.post("/reservations")
    def create_reservation(
        raw: dict[str, Any] = Body(...),
        intake: BookingIntake = Depends(get_intake),
    ):
        """Validate a booking form and create the reservation.

        Request body uses the form field names, e.g.
            {
                "customerName": "Jane Doe",
                "phone": "(555) 123-4567",
                "email": "jane@example.com",
                "date": "2025-03-01",
                "time": "18:00",
                "partySize": 4,
                "tablePreference": "patio"
            }

        Returns 201 with the reservation, or 422 with field errors.
        """
        outcome = intake.submit(raw)
        return _outcome_response(outcome, success_status=201)

    @app.get("/reservations")
    def list_reservations(
        search: str | None = Query(None, description="Name, phone, email or date"),
        active_only: bool = Query(False, description="Only confirmed reservations"),
        store: ReservationStore = Depends(get_store),
    ):
        """List reservations in chronological order with totals."""
        reservations = store.list_active() if active_only else store.list()
        matches = sort_chronologically(search_reservations(reservations, search))
        return {
            "reservations": [r.to_json_dict() for r in matches],
            **summarize(store.list()),
        }

    @app.get("/reservations/{reservation_id}")
    def get_reservation(
        reservation_id: str, store: ReservationStore = Depends(get_store)
    ):
        return store.get(reservation_id).to_json_dict()

    @app.put("/reservations/{reservation_id}")
    def amend_reservation(
        reservation_id: str,
        raw: dict[str, Any] = Body(...),
        intake: BookingIntake = Depends(get_intake),
    ):
        """Replace the booking details of a confirmed reservation."""
        outcome = intake.amend(reservation_id, raw)
        return _outcome_response(outcome)

    @app.post("/reservations/{reservation_id}/cancel")
    def cancel_reservation(
        reservation_id: str, intake: BookingIntake = Depends(get_intake)
    ):
        """Cancel a reservation. Cancelling twice is harmless."""
        outcome = intake.cancel(reservation_id)
        return _outcome_response(outcome)


app = create_app()


def run_server():
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server.
    """
    setup_logging()
    config = get_config()

    uvicorn.run(
        "tablebook.server:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run_server()
