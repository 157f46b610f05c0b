"""
Tests for the OpenSky Network client.
"""

from unittest.mock import MagicMock

import pytest
import requests

from whattheflight.api.opensky_client import OpenSkyClient, parse_state_vector
from whattheflight.api.providers import ProviderError

BBOX = (51.0, 52.0, -1.0, 1.0)


def make_state(**overrides):
    state = [
        'abc123',       # icao24
        'BAW123  ',     # callsign
        'United Kingdom',
        1700000000,     # time_position
        1700000000,     # last_contact
        -0.1,           # longitude
        51.5,           # latitude
        9000.0,         # baro_altitude
        False,          # on_ground
        230.0,          # velocity
        85.0,           # true_track
        -2.5,           # vertical_rate
        None,           # sensors
        9150.0,         # geo_altitude
        '7000',         # squawk
        False,          # spi
        0,              # position_source
    ]
    index = {'callsign': 1, 'baro_altitude': 7, 'on_ground': 8, 'geo_altitude': 13}
    for key, value in overrides.items():
        state[index[key]] = value
    return state


def make_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


class TestParseStateVector:
    """Test state vector normalization."""

    def test_parse_full_state(self):
        record = parse_state_vector(make_state())

        assert record['icao24'] == 'abc123'
        assert record['callsign'] == 'BAW123'
        assert record['latitude'] == 51.5
        assert record['longitude'] == -0.1
        assert record['altitude_m'] == 9150.0
        assert record['on_ground'] is False
        assert record['velocity'] == 230.0
        assert record['heading'] == 85.0
        assert record['squawk'] == '7000'

    def test_falls_back_to_baro_altitude(self):
        record = parse_state_vector(make_state(geo_altitude=None))
        assert record['altitude_m'] == 9000.0

    def test_no_altitude_at_all(self):
        record = parse_state_vector(make_state(geo_altitude=None, baro_altitude=None))
        assert record['altitude_m'] == 0

    def test_missing_callsign(self):
        assert parse_state_vector(make_state(callsign=None))['callsign'] == 'Unknown'
        assert parse_state_vector(make_state(callsign='   '))['callsign'] == 'Unknown'

    def test_short_state_rejected(self):
        assert parse_state_vector(['abc123', 'BAW123']) is None


class TestOpenSkyClient:
    """Test OpenSky client requests and error mapping."""

    def setup_method(self):
        self.pool = MagicMock()
        self.client = OpenSkyClient(self.pool, base_url='https://opensky.test/api', timeout=5)

    def test_fetch_aircraft_success(self):
        self.pool.get.return_value = make_response({
            'time': 1700000000,
            'states': [make_state(), ['too', 'short']],
        })

        records = self.client.fetch_aircraft(BBOX)

        assert len(records) == 1
        assert records[0]['icao24'] == 'abc123'
        assert self.client.last_response_time == 1700000000

        url = self.pool.get.call_args[0][0]
        kwargs = self.pool.get.call_args[1]
        assert url == 'https://opensky.test/api/states/all'
        assert kwargs['params'] == {'lamin': 51.0, 'lamax': 52.0, 'lomin': -1.0, 'lomax': 1.0}
        assert kwargs['timeout'] == 5

    def test_null_states_is_empty(self):
        self.pool.get.return_value = make_response({'time': 1700000000, 'states': None})
        assert self.client.fetch_aircraft(BBOX) == []

    def test_is_always_configured(self):
        assert self.client.is_configured()
        assert self.client.name == 'opensky'

    def test_http_error(self):
        self.pool.get.return_value = make_response({}, status_code=429)

        with pytest.raises(ProviderError) as exc_info:
            self.client.fetch_aircraft(BBOX)

        assert exc_info.value.provider == 'opensky'
        assert str(exc_info.value) == 'opensky: API error: 429'

    def test_timeout(self):
        self.pool.get.side_effect = requests.exceptions.Timeout('read timed out')

        with pytest.raises(ProviderError, match='request timed out'):
            self.client.fetch_aircraft(BBOX)

    def test_connection_error(self):
        self.pool.get.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(ProviderError, match='request failed'):
            self.client.fetch_aircraft(BBOX)

    def test_invalid_json(self):
        response = make_response(None)
        response.json.side_effect = ValueError('Expecting value')
        self.pool.get.return_value = response

        with pytest.raises(ProviderError, match='invalid JSON'):
            self.client.fetch_aircraft(BBOX)

    def test_unexpected_format(self):
        self.pool.get.return_value = make_response(['not', 'a', 'dict'])

        with pytest.raises(ProviderError, match='unexpected response format'):
            self.client.fetch_aircraft(BBOX)
