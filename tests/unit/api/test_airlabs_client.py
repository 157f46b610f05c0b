"""
Tests for the AirLabs client.
"""

from unittest.mock import MagicMock

import pytest

from whattheflight.api.airlabs_client import AirLabsClient, parse_flight
from whattheflight.api.providers import ProviderError

BBOX = (51.0, 52.0, -1.0, 1.0)

FLIGHT = {
    'hex': '400a0b',
    'reg_number': 'G-EUPT',
    'flag': 'GB',
    'lat': 51.47,
    'lng': -0.45,
    'alt': 10000,
    'dir': 270,
    'speed': 250,
    'v_speed': 1500,
    'squawk': '4521',
    'flight_icao': 'BAW123',
    'flight_iata': 'BA123',
    'dep_iata': 'LHR',
    'dep_city': 'London',
    'arr_iata': 'JFK',
    'arr_city': 'New York',
    'aircraft_icao': 'A319',
    'airline_name': 'British Airways',
}


def make_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


class TestParseFlight:

    def test_units_converted(self):
        record = parse_flight(FLIGHT)

        assert record['icao24'] == '400a0b'
        assert record['callsign'] == 'BAW123'
        assert record['altitude_m'] == pytest.approx(3048)
        assert record['velocity'] == pytest.approx(128.611, abs=0.01)
        assert record['vertical_rate'] == pytest.approx(7.62)
        assert record['on_ground'] is False

    def test_route_metadata(self):
        record = parse_flight(FLIGHT)

        assert record['origin'] == 'LHR'
        assert record['origin_name'] == 'London'
        assert record['destination'] == 'JFK'
        assert record['destination_name'] == 'New York'
        assert record['registration'] == 'G-EUPT'
        assert record['aircraft_type'] == 'A319'
        assert record['operator'] == 'British Airways'

    def test_sparse_flight(self):
        record = parse_flight({'lat': 51.0, 'lng': 0.0, 'flight_iata': 'U21234'})

        assert record['icao24'] == 'unknown'
        assert record['callsign'] == 'U21234'
        assert record['altitude_m'] == 0
        assert record['velocity'] is None
        assert record['vertical_rate'] is None
        assert record['origin'] is None


class TestAirLabsClient:
    """Test AirLabs client requests and error mapping."""

    def setup_method(self):
        self.pool = MagicMock()
        self.client = AirLabsClient(self.pool, api_key='secret',
                                    base_url='https://airlabs.test/api/v9', timeout=5)

    def test_not_configured_without_key(self):
        client = AirLabsClient(self.pool, api_key='')
        assert not client.is_configured()

        with pytest.raises(ProviderError, match='no API key'):
            client.fetch_aircraft(BBOX)
        self.pool.get.assert_not_called()

    def test_fetch_aircraft_success(self):
        self.pool.get.return_value = make_response({'response': [FLIGHT]})

        records = self.client.fetch_aircraft(BBOX)

        assert len(records) == 1
        assert records[0]['callsign'] == 'BAW123'

        url = self.pool.get.call_args[0][0]
        params = self.pool.get.call_args[1]['params']
        assert url == 'https://airlabs.test/api/v9/flights'
        assert params == {'api_key': 'secret', 'bbox': '51.0,-1.0,52.0,1.0'}

    def test_empty_response(self):
        self.pool.get.return_value = make_response({'response': []})
        assert self.client.fetch_aircraft(BBOX) == []

    def test_error_object(self):
        self.pool.get.return_value = make_response({
            'error': {'message': 'Unknown api_key', 'code': 'unknown_api_key'}
        })

        with pytest.raises(ProviderError) as exc_info:
            self.client.fetch_aircraft(BBOX)

        assert exc_info.value.message == 'Unknown api_key'

    def test_http_error(self):
        self.pool.get.return_value = make_response({}, status_code=500)

        with pytest.raises(ProviderError, match='API error: 500'):
            self.client.fetch_aircraft(BBOX)

    def test_lookup_airport(self):
        self.pool.get.return_value = make_response({
            'response': [{'name': 'Dubai International', 'city': 'Dubai', 'iata_code': 'DXB'}]
        })

        assert self.client.lookup_airport('DXB') == {'name': 'Dubai International', 'city': 'Dubai'}
        params = self.pool.get.call_args[1]['params']
        assert params == {'api_key': 'secret', 'iata_code': 'DXB'}

    def test_lookup_airport_not_found(self):
        self.pool.get.return_value = make_response({'response': []})
        assert self.client.lookup_airport('ZZZ') is None

    def test_lookup_airport_without_key(self):
        client = AirLabsClient(self.pool, api_key='')
        assert client.lookup_airport('DXB') is None
        self.pool.get.assert_not_called()

    def test_lookup_airport_malformed(self):
        self.pool.get.return_value = make_response({'response': {'name': 'Nowhere'}})

        with pytest.raises(ProviderError, match='malformed airport response'):
            self.client.lookup_airport('XYZ')

        self.pool.get.return_value = make_response({'response': [None]})
        with pytest.raises(ProviderError):
            self.client.lookup_airport('XYZ')
