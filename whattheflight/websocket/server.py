"""
WebSocket server for the point-at-a-plane client.

Each connection gets its own TrackingSession. Once the client sends its
location the server polls the aircraft providers for it every
POLLING_INTERVAL seconds; orientation messages are folded into the session
as they arrive and answered with the current match.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Awaitable, Dict, Optional, Set

import websockets

from whattheflight.api.aerodatabox_client import AeroDataBoxClient
from whattheflight.api.airlabs_client import AirLabsClient
from whattheflight.api.api_pool import APIConnectionPool
from whattheflight.api.opensky_client import OpenSkyClient
from whattheflight.core.aircraft_service import AircraftService
from whattheflight.core.airport_resolver import AirportResolver
from whattheflight.core.exceptions import SessionError, ValidationError
from whattheflight.core.orientation import OrientationSmoother, sample_from_event
from whattheflight.core.route_service import RouteService
from whattheflight.core.tracking_session import TrackingSession
from whattheflight.utils.config import Config
from whattheflight.websocket.message_validator import MessageType, MessageValidator

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Log to a rotating file and to the console."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            RotatingFileHandler(Config.LOG_FILE, maxBytes=Config.LOG_MAX_SIZE,
                                backupCount=Config.LOG_BACKUP_COUNT),
            logging.StreamHandler()
        ]
    )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ClientConnection:
    """State kept for one connected client."""

    def __init__(self, websocket, session: TrackingSession):
        self.websocket = websocket
        self.session = session
        self.radius_km = Config.SESSION_RADIUS_KM
        self.polling_task: Optional[asyncio.Task] = None
        # One-shot lookups run beside the message loop so orientation keeps flowing
        self.lookup_tasks: Set[asyncio.Task] = set()
        try:
            self.address = websocket.remote_address
        except AttributeError:
            self.address = 'unknown'

    async def send(self, message: Dict[str, Any]) -> None:
        await self.websocket.send(json.dumps(message))

    def start_lookup(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self.lookup_tasks.add(task)
        task.add_done_callback(self.lookup_tasks.discard)
        return task

    async def stop_tasks(self) -> None:
        """Cancel the poll loop and any lookups still in flight."""
        tasks = list(self.lookup_tasks)
        if self.polling_task is not None:
            tasks.append(self.polling_task)
            self.polling_task = None

        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.lookup_tasks.clear()


class FlightTracker:
    """Main WebSocket server class."""

    def __init__(self, aircraft_service: Optional[AircraftService] = None,
                 route_service: Optional[RouteService] = None,
                 airport_resolver: Optional[AirportResolver] = None,
                 polling_interval: float = Config.POLLING_INTERVAL):
        self.pool: Optional[APIConnectionPool] = None
        if aircraft_service is None or route_service is None or airport_resolver is None:
            self.pool = APIConnectionPool(timeout=Config.FETCH_TIMEOUT)

        airlabs = AirLabsClient(self.pool) if self.pool else None
        self.aircraft_service = aircraft_service or AircraftService(
            [airlabs, OpenSkyClient(self.pool)]
        )
        self.route_service = route_service or RouteService(AeroDataBoxClient(self.pool))
        self.airport_resolver = airport_resolver or AirportResolver(airlabs)
        self.polling_interval = polling_interval
        self.connected_clients: Set[ClientConnection] = set()

    def new_session(self) -> TrackingSession:
        """Create a tracking session with the configured tuning."""
        return TrackingSession(
            OrientationSmoother(Config.SMOOTHING_FACTOR, Config.DEAD_ZONE_DEG),
            heading_tolerance=Config.HEADING_TOLERANCE,
            elevation_tolerance=Config.ELEVATION_TOLERANCE,
        )

    async def handle_client(self, websocket) -> None:
        """Handle a new WebSocket client connection."""
        client = ClientConnection(websocket, self.new_session())
        logger.info(f"New client connected from {client.address}")
        self.connected_clients.add(client)

        try:
            await client.send({
                'type': MessageType.WELCOME.value,
                'timestamp': _now(),
                'message': 'Connected to What The Flight'
            })

            async for message in websocket:
                await self.handle_client_message(client, message)

        except websockets.exceptions.ConnectionClosed:
            logger.info(f"Client {client.address} disconnected")
        except Exception as e:
            logger.error(f"Error handling client {client.address}: {e}", exc_info=True)
        finally:
            self.connected_clients.discard(client)
            await client.stop_tasks()
            logger.info(f"Session for {client.address} closed")

    async def handle_client_message(self, client: ClientConnection, message: str) -> None:
        """Validate and dispatch one client message."""
        await self._guarded(client, self._handle(client, message))

    async def _handle(self, client: ClientConnection, message: str) -> None:
        data = MessageValidator.validate_client_message(message)
        logger.debug(f"Received from client: {data}")
        await self._dispatch(client, data)

    async def _guarded(self, client: ClientConnection, coro: Awaitable[None]) -> None:
        """Run a handler, answering any failure with an error message."""
        try:
            await coro
        except (ValidationError, SessionError) as e:
            logger.warning(f"Rejected message from {client.address}: {e}")
            await self._send_error(client, str(e))
        except websockets.exceptions.ConnectionClosed:
            raise
        except Exception as e:
            logger.error(f"Error handling message from {client.address}: {e}", exc_info=True)
            await self._send_error(client, "Internal server error")

    async def _send_error(self, client: ClientConnection, error: str) -> None:
        await client.send({
            'type': MessageType.ERROR.value,
            'timestamp': _now(),
            'error': error
        })

    async def _run_lookup(self, client: ClientConnection, coro: Awaitable[None]) -> None:
        try:
            await self._guarded(client, coro)
        except websockets.exceptions.ConnectionClosed:
            logger.debug(f"Client {client.address} left before its lookup finished")

    async def _send_flights(self, client: ClientConnection, lat: float, lon: float,
                            radius: float) -> None:
        snapshot = await asyncio.to_thread(self.aircraft_service.fetch_flights, lat, lon, radius)
        await client.send(self.aircraft_service.format_flights_message(snapshot))

    async def _send_route(self, client: ClientConnection, callsign: str) -> None:
        route = await asyncio.to_thread(self.route_service.lookup, callsign)
        await client.send({'type': MessageType.ROUTE.value, 'callsign': callsign,
                           **route.to_dict()})

    async def _send_airport(self, client: ClientConnection, code: str) -> None:
        airport = await asyncio.to_thread(self.airport_resolver.lookup, code)
        await client.send({'type': MessageType.AIRPORT.value, **airport.to_dict()})

    async def _dispatch(self, client: ClientConnection, data: Dict[str, Any]) -> None:
        msg_type = data['type']
        session = client.session

        if msg_type == MessageType.ORIENTATION.value:
            if not session.is_tracking:
                return
            sample = sample_from_event(data.get('alpha'), data.get('beta'),
                                       data.get('webkitCompassHeading'))
            matched = session.ingest_orientation(sample)
            await client.send(self.aircraft_service.format_match_message(
                session.heading, session.tilt, matched))

        elif msg_type == MessageType.SET_LOCATION.value:
            session.set_observer(data['lat'], data['lon'])
            if data.get('radius') is not None:
                client.radius_km = data['radius']
            client.polling_task = asyncio.create_task(self.polling_loop(client))

        elif msg_type == MessageType.GET_FLIGHTS.value:
            radius = data.get('radius') or Config.DEFAULT_RADIUS_KM
            client.start_lookup(self._run_lookup(
                client, self._send_flights(client, data['lat'], data['lon'], radius)))

        elif msg_type == MessageType.GET_ROUTE.value:
            callsign = data['callsign'].strip().upper()
            client.start_lookup(self._run_lookup(client, self._send_route(client, callsign)))

        elif msg_type == MessageType.GET_AIRPORT.value:
            client.start_lookup(self._run_lookup(client, self._send_airport(client, data['code'])))

        elif msg_type == MessageType.START_TRACKING.value:
            session.start_tracking()
            await client.send({'type': MessageType.TRACKING.value, 'active': True})

        elif msg_type == MessageType.STOP_TRACKING.value:
            session.stop_tracking()
            await client.send({'type': MessageType.TRACKING.value, 'active': False})

        elif msg_type == MessageType.GET_CONFIG.value:
            await client.send({
                'type': MessageType.CONFIG.value,
                'config': Config.to_dict(),
                'location': session.observer.to_dict() if session.observer else None,
            })

        elif msg_type == MessageType.CLIENT_HELLO.value:
            await client.send({
                'type': MessageType.WELCOME.value,
                'timestamp': _now(),
                'message': 'Connected to What The Flight'
            })

    async def poll_once(self, client: ClientConnection) -> None:
        """Fetch aircraft for the client's location and push the results."""
        session = client.session
        observer = session.observer
        snapshot = await asyncio.to_thread(
            self.aircraft_service.fetch_flights,
            observer.latitude, observer.longitude, client.radius_km
        )

        matched = session.apply_snapshot(snapshot)
        await client.send(self.aircraft_service.format_flights_message(snapshot))

        if session.is_tracking:
            await client.send(self.aircraft_service.format_match_message(
                session.heading, session.tilt, matched))

    async def polling_loop(self, client: ClientConnection) -> None:
        """Poll for the client's location until the connection goes away."""
        logger.info(f"Starting polling loop for {client.address} "
                    f"every {self.polling_interval}s, radius {client.radius_km:g}km")

        while True:
            try:
                await self.poll_once(client)
            except websockets.exceptions.ConnectionClosed:
                break
            except Exception as e:
                logger.error(f"Error in polling loop: {e}", exc_info=True)

            await asyncio.sleep(self.polling_interval)

    def close(self) -> None:
        """Release caches and HTTP sessions."""
        self.route_service.close()
        self.airport_resolver.close()
        if self.pool is not None:
            self.pool.close()


async def main():
    """Main server entry point."""
    configure_logging()

    for problem in Config.validate():
        logger.warning(f"Configuration problem: {problem}")

    tracker = FlightTracker()
    logger.info(f"Starting WebSocket server on {Config.WEBSOCKET_HOST}:{Config.WEBSOCKET_PORT}")
    logger.info(f"AirLabs {'enabled' if Config.AIRLABS_KEY else 'disabled'}, "
                f"route lookup {'enabled' if Config.RAPIDAPI_KEY else 'disabled'}")

    try:
        async with websockets.serve(
            tracker.handle_client,
            Config.WEBSOCKET_HOST,
            Config.WEBSOCKET_PORT,
            compression=None,
            max_size=1024 * 1024,
            ping_interval=20,
            ping_timeout=10,
            close_timeout=10,
        ):
            logger.info(f"Server running at ws://{Config.WEBSOCKET_HOST}:{Config.WEBSOCKET_PORT}")
            await asyncio.Future()  # Run forever
    finally:
        tracker.close()
