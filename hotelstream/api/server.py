"""HTTP surface: stream polling, stats queries, webhook intake, and inventory."""
from __future__ import annotations

import base64
import binascii
import logging
import secrets
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from hotelstream.core.config import Settings
from hotelstream.ingestion.classifier import BALANCES_BUCKET, RAW_BUCKET, STATS_BUCKET
from hotelstream.processing.client import AccessDeniedError, StreamClient, StreamError
from hotelstream.processing.inventory import STATUS_DISABLED, load_inventory, summarize_rooms
from hotelstream.processing.pollers import (
    EVENTS_CATEGORY,
    ReservationPoller,
    StatsPoller,
    ingest_webhook,
    reservation_store,
    stats_store,
    webhook_store,
)
from hotelstream.processing.scheduler import PeriodicTask
from hotelstream.storage.snapshots import SnapshotStore

logger = logging.getLogger(__name__)


class Runtime:
    """Owns the clients, stores, pollers, and background tasks of one process."""

    def __init__(
        self,
        settings: Settings,
        stream_client: Optional[StreamClient] = None,
        stats_client: Optional[StreamClient] = None,
    ) -> None:
        self.settings = settings
        self.stream_client = stream_client or StreamClient(
            settings.host_url, settings.app_id, settings.api_password
        )
        self.stats_client = stats_client or StreamClient(
            settings.host_url, settings.stats_app_id, settings.stats_api_password
        )
        self.snapshots = SnapshotStore(settings.data_dir) if settings.data_dir else None

        self.reservations = reservation_store()
        self.stats = stats_store()
        self.webhook = webhook_store()

        self.reservation_poller = ReservationPoller(self.stream_client, self.reservations, self.snapshots)
        self.stats_poller = StatsPoller(
            self.stats_client, self.stats, self.snapshots, num_messages=settings.stats_num_messages
        )
        self.tasks: List[PeriodicTask] = []

    def start_polling(self) -> None:
        if self.tasks:
            return
        if self.settings.stream_configured:
            self.tasks.append(
                PeriodicTask("stream-poll", self.settings.stream_poll_interval, self.reservation_poller.poll)
            )
        else:
            logger.warning("Primary stream polling disabled: HOST_URL or APP_ID missing")
        if self.settings.stats_configured:
            self.tasks.append(
                PeriodicTask("stats-poll", self.settings.stats_poll_interval, self.stats_poller.poll)
            )
        else:
            logger.warning("Stats stream polling disabled: HOST_URL or STATS_APP_ID missing")
        for task in self.tasks:
            task.start()

    def stop_polling(self) -> None:
        for task in self.tasks:
            task.stop()
        self.tasks = []

    def stats_summary(self, limit: int = 10) -> Dict[str, Any]:
        summary = self.stats.summary(limit)
        counts, latest = summary["counts"], summary["latest"]
        return {
            "stats_count": counts[STATS_BUCKET],
            "balances_count": counts[BALANCES_BUCKET],
            "raw_count": counts[RAW_BUCKET],
            "latest_stats": _dicts(latest[STATS_BUCKET]),
            "latest_balances": _dicts(latest[BALANCES_BUCKET]),
            "last_updated": summary["generated_at"],
        }


def _dicts(records: List[Any]) -> List[Dict[str, Any]]:
    return [record.to_dict() for record in records]


def _listing(records: List[Any]) -> Dict[str, Any]:
    return {"count": len(records), "data": _dicts(records)}


def _access_denied(stream: str, exc: AccessDeniedError) -> JSONResponse:
    logger.warning("%s access denied (HTTP %s)", stream, exc.status_code)
    return JSONResponse(
        status_code=403,
        content={"success": False, "status": STATUS_DISABLED, "error": "Access Denied", "message": str(exc)},
    )


def _parse_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def create_app(runtime: Runtime) -> FastAPI:
    """Build the API around an existing :class:`Runtime`."""

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if runtime.settings.polling_enabled:
            runtime.start_polling()
        yield
        runtime.stop_polling()

    app = FastAPI(title="Hotel Stream Backend", lifespan=lifespan)
    app.state.runtime = runtime
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def authenticate_webhook(authorization: Optional[str] = Header(default=None)) -> None:
        if not authorization:
            raise HTTPException(status_code=401, detail="Missing Authorization Header")

        settings = runtime.settings
        if not (settings.webhook_username or settings.webhook_password):
            return

        scheme, _, encoded = authorization.partition(" ")
        try:
            decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            decoded = ""
        username, _, password = decoded.partition(":")
        valid = (
            scheme.lower() == "basic"
            and secrets.compare_digest(username.encode("utf-8"), settings.webhook_username.encode("utf-8"))
            and secrets.compare_digest(password.encode("utf-8"), settings.webhook_password.encode("utf-8"))
        )
        if not valid:
            raise HTTPException(status_code=401, detail="Invalid webhook credentials")

    # ---------- Health ----------
    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        return "Hotel stream backend is running"

    # ---------- Primary stream ----------
    @app.get("/api/stream/poll")
    def poll_stream() -> Any:
        try:
            records = runtime.reservation_poller.poll()
        except AccessDeniedError as exc:
            return _access_denied("Primary stream", exc)
        except StreamError as exc:
            logger.error("Polling error: %s", exc)
            return JSONResponse(status_code=500, content={"success": False, "error": "Failed to poll data"})
        return {"success": True, "count": len(records), "data": _dicts(records)}

    @app.get("/api/stream/latest")
    def stream_latest() -> List[Dict[str, Any]]:
        return _dicts(runtime.reservations.read_all(EVENTS_CATEGORY))

    # ---------- Stats and balances ----------
    @app.get("/api/stats/poll")
    def poll_stats(num: Optional[str] = None) -> Any:
        try:
            batch = runtime.stats_poller.poll(_parse_int(num, runtime.settings.stats_num_messages))
        except AccessDeniedError as exc:
            return _access_denied("Stats stream", exc)
        except StreamError as exc:
            logger.error("Stats stream polling error: %s", exc)
            return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})
        return {"success": True, "message": "Polled stats stream", "data": batch.to_dict()}

    @app.get("/api/stats")
    def list_stats() -> Dict[str, Any]:
        return _listing(runtime.stats.read_all(STATS_BUCKET))

    @app.get("/api/stats/balances")
    def list_balances() -> Dict[str, Any]:
        return _listing(runtime.stats.read_all(BALANCES_BUCKET))

    @app.get("/api/stats/summary")
    def stats_summary() -> Dict[str, Any]:
        return runtime.stats_summary()

    @app.get("/api/stats/latest")
    def stats_latest(limit: Optional[str] = None) -> Dict[str, Any]:
        size = _parse_int(limit, 10)
        return {
            "stats": _listing(runtime.stats.latest(STATS_BUCKET, size)),
            "balances": _listing(runtime.stats.latest(BALANCES_BUCKET, size)),
        }

    # ---------- Webhook ----------
    @app.post("/api/webhook", dependencies=[Depends(authenticate_webhook)])
    async def receive_webhook(request: Request) -> Any:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
        await run_in_threadpool(ingest_webhook, body, runtime.webhook, runtime.snapshots)
        return {"success": True, "message": "Events received"}

    @app.get("/api/webhook/latest")
    def webhook_latest() -> List[Dict[str, Any]]:
        return _dicts(runtime.webhook.read_all(EVENTS_CATEGORY))

    # ---------- Inventory ----------
    def _inventory_response(payload: Dict[str, Any], status: str) -> JSONResponse:
        if status == STATUS_DISABLED:
            return JSONResponse(status_code=403, content=payload)
        return JSONResponse(status_code=502, content=payload)

    @app.get("/api/inventory/rooms")
    def inventory_rooms() -> Any:
        result = load_inventory(runtime.stream_client, runtime.settings.property_id)
        if not result.ok:
            return _inventory_response(result.to_dict(), result.status)
        return result.rooms

    @app.get("/api/inventory/summary")
    def inventory_summary() -> Any:
        result = load_inventory(runtime.stream_client, runtime.settings.property_id)
        if not result.ok:
            return _inventory_response(result.to_dict(), result.status)
        return summarize_rooms(result.rooms)

    return app
