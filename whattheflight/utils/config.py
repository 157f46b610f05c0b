"""
Centralized configuration module for the backend.
All configuration values should be accessed through this module.
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv


# Load environment variables
env_path = Path(__file__).parent.parent.parent / '.env'
load_dotenv(env_path)


class Config:
    """Configuration class with all backend settings."""

    # Environment
    ENV = os.getenv('ENV', 'development')
    DEBUG = ENV == 'development'

    # Provider credentials (both optional)
    AIRLABS_KEY = os.getenv('AIRLABS_KEY', '')
    RAPIDAPI_KEY = os.getenv('RAPIDAPI_KEY', '')

    # Provider endpoints
    AIRLABS_API_URL = 'https://airlabs.co/api/v9'
    OPENSKY_API_URL = 'https://opensky-network.org/api'
    AERODATABOX_API_URL = 'https://aerodatabox.p.rapidapi.com'

    # Search parameters
    DEFAULT_RADIUS_KM = float(os.getenv('DEFAULT_RADIUS_KM', '50'))
    SESSION_RADIUS_KM = float(os.getenv('SESSION_RADIUS_KM', '150'))
    MAX_RADIUS_KM = float(os.getenv('MAX_RADIUS_KM', '500'))
    MIN_ALTITUDE_M = float(os.getenv('MIN_ALTITUDE_M', '100'))

    # Network
    FETCH_TIMEOUT = float(os.getenv('FETCH_TIMEOUT', '15'))
    POLLING_INTERVAL = int(os.getenv('POLLING_INTERVAL', '10'))

    # Pointing
    SMOOTHING_FACTOR = float(os.getenv('SMOOTHING_FACTOR', '0.3'))
    DEAD_ZONE_DEG = float(os.getenv('DEAD_ZONE_DEG', '0'))
    HEADING_TOLERANCE = float(os.getenv('HEADING_TOLERANCE', '30'))
    ELEVATION_TOLERANCE = float(os.getenv('ELEVATION_TOLERANCE', '20'))

    # Lookup caches
    ROUTE_CACHE_TTL = int(os.getenv('ROUTE_CACHE_TTL', '3600'))  # 1 hour
    AIRPORT_CACHE_TTL = int(os.getenv('AIRPORT_CACHE_TTL', '86400'))  # 24 hours

    # WebSocket configuration
    WEBSOCKET_HOST = os.getenv('WEBSOCKET_HOST', '0.0.0.0')
    WEBSOCKET_PORT = int(os.getenv('WEBSOCKET_PORT', '8000'))

    # Logging configuration
    LOG_FILE = os.getenv('LOG_FILE', 'events.log')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_MAX_SIZE = int(os.getenv('LOG_MAX_SIZE', '10485760'))  # 10MB
    LOG_BACKUP_COUNT = int(os.getenv('LOG_BACKUP_COUNT', '5'))

    @classmethod
    def validate(cls) -> List[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages, empty if valid
        """
        errors = []

        if cls.DEFAULT_RADIUS_KM <= 0 or cls.SESSION_RADIUS_KM <= 0:
            errors.append("DEFAULT_RADIUS_KM and SESSION_RADIUS_KM must be positive")

        if cls.SESSION_RADIUS_KM > cls.MAX_RADIUS_KM:
            errors.append("SESSION_RADIUS_KM cannot exceed MAX_RADIUS_KM")

        if not 0 < cls.SMOOTHING_FACTOR <= 1:
            errors.append("SMOOTHING_FACTOR must be in (0, 1]")

        if cls.DEAD_ZONE_DEG < 0:
            errors.append("DEAD_ZONE_DEG cannot be negative")

        if not 0 < cls.HEADING_TOLERANCE <= 180:
            errors.append("HEADING_TOLERANCE must be between 0 and 180")

        if not 0 < cls.ELEVATION_TOLERANCE <= 90:
            errors.append("ELEVATION_TOLERANCE must be between 0 and 90")

        if cls.FETCH_TIMEOUT <= 0:
            errors.append("FETCH_TIMEOUT must be positive")

        if cls.POLLING_INTERVAL <= 0:
            errors.append("POLLING_INTERVAL must be positive")

        return errors

    @classmethod
    def to_dict(cls) -> dict:
        """
        Export configuration as dictionary (excluding sensitive data).

        Returns:
            Configuration dictionary
        """
        return {
            'ENV': cls.ENV,
            'DEBUG': cls.DEBUG,
            'DEFAULT_RADIUS_KM': cls.DEFAULT_RADIUS_KM,
            'SESSION_RADIUS_KM': cls.SESSION_RADIUS_KM,
            'MIN_ALTITUDE_M': cls.MIN_ALTITUDE_M,
            'POLLING_INTERVAL': cls.POLLING_INTERVAL,
            'SMOOTHING_FACTOR': cls.SMOOTHING_FACTOR,
            'DEAD_ZONE_DEG': cls.DEAD_ZONE_DEG,
            'HEADING_TOLERANCE': cls.HEADING_TOLERANCE,
            'ELEVATION_TOLERANCE': cls.ELEVATION_TOLERANCE,
            'AIRLABS_ENABLED': bool(cls.AIRLABS_KEY),
            'ROUTE_LOOKUP_ENABLED': bool(cls.RAPIDAPI_KEY),
            'LOG_LEVEL': cls.LOG_LEVEL,
        }
