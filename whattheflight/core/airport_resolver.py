"""
Airport code to name/city resolution.

Order of lookup: built-in table, cache, AirLabs. If all of them come up
empty the code itself is returned as the name.
"""

import logging
from typing import Optional

from whattheflight.api.airlabs_client import AirLabsClient
from whattheflight.api.providers import ProviderError
from whattheflight.core.exceptions import ValidationError
from whattheflight.models import Airport
from whattheflight.utils.cache import TTLCache, normalize_code
from whattheflight.utils.config import Config
from whattheflight.utils.lookup_tables import get_static_airport

logger = logging.getLogger(__name__)


class AirportResolver:
    """Resolves airport codes to human-readable names."""

    def __init__(self, client: Optional[AirLabsClient] = None,
                 cache: Optional[TTLCache] = None):
        self.client = client
        self.cache = cache or TTLCache(
            max_size=1000,
            default_ttl=Config.AIRPORT_CACHE_TTL,
            name='airport cache'
        )

    def lookup(self, code: str) -> Airport:
        """
        Resolve an airport code.

        Raises:
            ValidationError: If the code is empty
        """
        code = normalize_code(code or '')
        if not code:
            raise ValidationError("Airport code required")

        static = get_static_airport(code)
        if static:
            return Airport(code=code, name=static['name'], city=static['city'])

        cached = self.cache.get(code)
        if cached is not None:
            return cached

        if self.client is not None and self.client.is_configured():
            try:
                found = self.client.lookup_airport(code)
            except ProviderError as e:
                logger.error(f"Airport lookup error for {code}: {e}")
                found = None

            if found:
                airport = Airport(code=code, name=found['name'], city=found['city'])
                self.cache.set(code, airport)
                return airport

        return Airport(code=code, name=code, city='')

    def close(self) -> None:
        """Drop cached airports."""
        self.cache.clear()
