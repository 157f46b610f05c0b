"""
Tests for configuration validation and export
"""

from whattheflight.utils.config import Config


class TestConfig:

    def test_defaults_are_valid(self):
        assert Config.validate() == []

    def test_invalid_smoothing_factor(self, monkeypatch):
        monkeypatch.setattr(Config, 'SMOOTHING_FACTOR', 0)
        assert "SMOOTHING_FACTOR must be in (0, 1]" in Config.validate()

    def test_session_radius_over_max(self, monkeypatch):
        monkeypatch.setattr(Config, 'SESSION_RADIUS_KM', 1000)
        assert "SESSION_RADIUS_KM cannot exceed MAX_RADIUS_KM" in Config.validate()

    def test_tolerances(self, monkeypatch):
        monkeypatch.setattr(Config, 'HEADING_TOLERANCE', 0)
        monkeypatch.setattr(Config, 'ELEVATION_TOLERANCE', 120)
        errors = Config.validate()
        assert len(errors) == 2

    def test_to_dict_hides_keys(self, monkeypatch):
        monkeypatch.setattr(Config, 'AIRLABS_KEY', 'secret')
        monkeypatch.setattr(Config, 'RAPIDAPI_KEY', '')

        exported = Config.to_dict()

        assert exported['AIRLABS_ENABLED'] is True
        assert exported['ROUTE_LOOKUP_ENABLED'] is False
        assert 'secret' not in exported.values()
        assert 'AIRLABS_KEY' not in exported
