import pytest

from skyscore.config import Config, load_config

SAMPLE_TOML = """
[site]
latitude_deg = 53.35
name = "Dublin"

[windows.sky]
cloud_threshold = 25

[windows.aurora]
min_score = 65
max_windows = 2

[outdoor]
activity = "hiking"
temp_min = 8
temp_max = 24

[logging]
level = "debug"
"""


def test_load_config_from_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(SAMPLE_TOML)
    config = load_config(path)
    assert config.site_latitude_deg == 53.35
    assert config.site_name == "Dublin"
    assert config.sky_cloud_threshold == 25
    assert config.sky_min_duration_min == 120.0
    assert config.aurora_min_score == 65
    assert config.aurora_max_windows == 2
    assert config.outdoor_activity == "hiking"
    assert config.outdoor_temp_range == (8.0, 24.0)
    assert config.log_level == "debug"


def test_missing_default_config_is_empty(isolated_config):
    config = load_config()
    assert config.site_latitude_deg is None
    assert config.aurora_min_duration_min == 30.0
    assert config.outdoor_min_score == 65.0
    assert config.outdoor_activity == "default"


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_partial_temperature_range_is_ignored():
    assert Config({"outdoor": {"temp_min": 5}}).outdoor_temp_range is None


def test_non_table_section_is_ignored():
    assert Config({"windows": "oops"}).sky_cloud_threshold == 30.0
