"""
Tests for Configuration Loading
"""

import json

import pytest

from solar_events import config as config_module
from solar_events.config import AnalysisConfig, config_from_dict, load_config


class TestDefaults:
    """Test default configuration."""

    def test_default_values(self):
        config = AnalysisConfig()
        assert config.cme_association_window_hours == 6
        assert config.succession_window_minutes == 60
        assert config.succession_threshold == 3
        assert config.expected_speed_ranges['X'] == (800, 2000)

    def test_instances_do_not_share_ranges(self):
        """Mutating one config leaves the defaults alone."""
        first = AnalysisConfig()
        first.expected_speed_ranges['X'] = (1.0, 2.0)
        assert AnalysisConfig().expected_speed_ranges['X'] == (800, 2000)

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv('NASA_API_KEY', 'secret')
        assert AnalysisConfig().api_key == 'secret'

    def test_api_key_default(self, monkeypatch):
        monkeypatch.delenv('NASA_API_KEY', raising=False)
        assert AnalysisConfig().api_key == 'DEMO_KEY'


class TestConfigFromDict:
    """Test building config from a mapping."""

    def test_speed_ranges_merge(self):
        """Overriding one class keeps the others."""
        config = config_from_dict({'expected_speed_ranges': {'x': [900, 2500]}})
        assert config.expected_speed_ranges['X'] == (900.0, 2500.0)
        assert config.expected_speed_ranges['M'] == (500, 1200)

    def test_speed_range_object_form(self):
        config = config_from_dict({'expected_speed_ranges': {'C': {'min': 250, 'max': 900}}})
        assert config.expected_speed_ranges['C'] == (250.0, 900.0)

    @pytest.mark.parametrize("bounds", [[0, 100], [500, 100], ["fast", 100], [100]])
    def test_malformed_speed_range(self, bounds):
        with pytest.raises(ValueError, match="speed range"):
            config_from_dict({'expected_speed_ranges': {'M': bounds}})

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            config_from_dict({'surprise_limit': 3})

    def test_negative_window(self):
        with pytest.raises(ValueError, match=">= 0"):
            config_from_dict({'cme_association_window_hours': -1})

    def test_numeric_values_coerced(self):
        config = config_from_dict({'succession_threshold': "4", 'succession_window_minutes': 30})
        assert config.succession_threshold == 4
        assert config.succession_window_minutes == 30.0

    @pytest.mark.parametrize("key,value", [
        ('succession_threshold', None),
        ('succession_threshold', "three"),
        ('cme_association_window_hours', None),
        ('succession_window_minutes', [60]),
        ('api_key', None),
    ])
    def test_invalid_scalar_values(self, key, value):
        """Null or non-numeric values are reported as ValueError."""
        with pytest.raises(ValueError, match=f"Invalid value for {key}"):
            config_from_dict({key: value})

    def test_nan_window_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            config_from_dict({'succession_window_minutes': "nan"})

    @pytest.mark.parametrize("value", ["x", ["B"], None])
    def test_magnetic_descriptions_must_be_object(self, value):
        with pytest.raises(ValueError, match="magnetic_class_descriptions"):
            config_from_dict({'magnetic_class_descriptions': value})

    def test_magnetic_descriptions_merge(self):
        config = config_from_dict({'magnetic_class_descriptions': {'B': "Bipolar"}})
        assert config.magnetic_class_descriptions['B'] == "Bipolar"
        assert 'BGD' in config.magnetic_class_descriptions


class TestLoadConfig:
    """Test loading from JSON files."""

    def test_load_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'cme_association_window_hours': 8, 'api_key': 'abc'}))

        config = load_config(path)
        assert config.cme_association_window_hours == 8.0
        assert config.api_key == 'abc'

    def test_missing_default_file(self, tmp_path, monkeypatch):
        """An absent default file yields defaults."""
        monkeypatch.setattr(config_module, 'DEFAULT_CONFIG_PATH', tmp_path / "missing.json")
        assert load_config() == AnalysisConfig()

    def test_missing_explicit_file(self, tmp_path):
        """An explicit path must exist."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    def test_null_value_in_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'succession_threshold': None}))
        with pytest.raises(ValueError, match="succession_threshold"):
            load_config(path)
