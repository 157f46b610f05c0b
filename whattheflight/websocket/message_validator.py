"""
WebSocket message validation module.

Every client message is parsed and checked here before the server acts on
it. The validator enforces:
- Message structure and type safety
- Field presence and data types
- Value ranges (coordinates, radius, orientation angles)
- Length and character limits on lookup codes
"""

import json
import math
import re
from typing import Dict, Any, Optional
from enum import Enum

from whattheflight.core.exceptions import ValidationError
from whattheflight.utils.config import Config


class MessageType(Enum):
    """
    Valid WebSocket message types, split by direction.
    """
    # Client to Server messages
    CLIENT_HELLO = "hello"
    GET_CONFIG = "get_config"
    SET_LOCATION = "set_location"
    GET_FLIGHTS = "get_flights"
    GET_ROUTE = "get_route"
    GET_AIRPORT = "get_airport"
    START_TRACKING = "start_tracking"
    STOP_TRACKING = "stop_tracking"
    ORIENTATION = "orientation"

    # Server to Client messages
    WELCOME = "welcome"
    CONFIG = "config"
    FLIGHTS = "flights"
    ROUTE = "route"
    AIRPORT = "airport"
    TRACKING = "tracking"
    MATCH = "match"
    ERROR = "error"


CLIENT_MESSAGE_TYPES = {
    MessageType.CLIENT_HELLO.value,
    MessageType.GET_CONFIG.value,
    MessageType.SET_LOCATION.value,
    MessageType.GET_FLIGHTS.value,
    MessageType.GET_ROUTE.value,
    MessageType.GET_AIRPORT.value,
    MessageType.START_TRACKING.value,
    MessageType.STOP_TRACKING.value,
    MessageType.ORIENTATION.value,
}

CODE_PATTERN = re.compile(r'^[A-Za-z0-9 ]{1,10}$')


class MessageValidator:
    """
    Validates WebSocket messages from clients.

    The validator checks:
    - JSON structure validity
    - Required fields presence
    - Data type correctness
    - Value range constraints
    - Message type validity
    """

    @staticmethod
    def validate_client_message(message: str) -> Dict[str, Any]:
        """
        Validate messages from client to server.

        Args:
            message: Raw message string from client

        Returns:
            Validated message dictionary

        Raises:
            ValidationError: If message is invalid
        """
        try:
            data = json.loads(message)
        except (json.JSONDecodeError, TypeError) as e:
            raise ValidationError(f"Invalid JSON: {e}")

        if not isinstance(data, dict):
            raise ValidationError("Message must be a JSON object")

        if "type" not in data:
            raise ValidationError("Message must have a 'type' field")

        msg_type = data["type"]
        if msg_type not in CLIENT_MESSAGE_TYPES:
            raise ValidationError(f"Unknown message type: {msg_type}")

        if msg_type in (MessageType.SET_LOCATION.value, MessageType.GET_FLIGHTS.value):
            return MessageValidator._validate_location_request(data)
        elif msg_type == MessageType.GET_ROUTE.value:
            return MessageValidator._validate_code_request(data, "callsign")
        elif msg_type == MessageType.GET_AIRPORT.value:
            return MessageValidator._validate_code_request(data, "code")
        elif msg_type == MessageType.ORIENTATION.value:
            return MessageValidator._validate_orientation(data)

        # hello, get_config, start/stop_tracking carry no fields
        return data

    @staticmethod
    def _is_number(value: Any) -> bool:
        return (isinstance(value, (int, float))
                and not isinstance(value, bool)
                and math.isfinite(value))

    @staticmethod
    def validate_coordinates(data: Dict[str, Any]) -> bool:
        """
        Validate a lat/lon pair.

        Raises:
            ValidationError: If coordinates are missing or out of range
        """
        if "lat" not in data or "lon" not in data:
            raise ValidationError("Coordinates must have 'lat' and 'lon' fields")

        lat, lon = data["lat"], data["lon"]
        if not MessageValidator._is_number(lat) or not MessageValidator._is_number(lon):
            raise ValidationError("Invalid coordinates")

        if not -90 <= lat <= 90:
            raise ValidationError("Latitude must be between -90 and 90")

        if not -180 <= lon <= 180:
            raise ValidationError("Longitude must be between -180 and 180")

        return True

    @staticmethod
    def _validate_location_request(data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate set_location / get_flights."""
        MessageValidator.validate_coordinates(data)

        if data.get("radius") is not None:
            radius = data["radius"]
            if not MessageValidator._is_number(radius) or radius <= 0:
                raise ValidationError("Radius must be a positive number")
            if radius > Config.MAX_RADIUS_KM:
                raise ValidationError(f"Radius cannot exceed {Config.MAX_RADIUS_KM:g}km")

        return data

    @staticmethod
    def _validate_code_request(data: Dict[str, Any], field: str) -> Dict[str, Any]:
        """Validate get_route / get_airport."""
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            # Empty codes are reported by the lookup itself
            data[field] = ""
            return data

        if not isinstance(value, str) or not CODE_PATTERN.match(value.strip()):
            raise ValidationError(f"Invalid {field}")

        return data

    @staticmethod
    def _validate_orientation(data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a raw deviceorientation reading."""
        ranges = {
            "alpha": (0, 360),
            "beta": (-180, 180),
            "webkitCompassHeading": (0, 360),
        }

        for field, (low, high) in ranges.items():
            value: Optional[Any] = data.get(field)
            if value is None:
                continue
            if not MessageValidator._is_number(value):
                raise ValidationError(f"{field} must be numeric")
            if not low <= value <= high:
                raise ValidationError(f"{field} must be between {low} and {high}")

        return data
