import datetime

import pytest

BASE_TIME = datetime.datetime(2024, 1, 15, 18, 0, tzinfo=datetime.timezone.utc)


def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run tests marked as integration",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--integration"):
        return

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(
                pytest.mark.skip(
                    reason="need --integration option to run integration tests"
                )
            )


@pytest.fixture
def base_time():
    return BASE_TIME


@pytest.fixture
def hour_at():
    def _hour_at(index: int) -> datetime.datetime:
        return BASE_TIME + datetime.timedelta(hours=index)

    return _hour_at


@pytest.fixture
def make_hours(hour_at):
    """Build hourly sample mappings; a bare number is taken as cloud cover."""

    def _make(rows):
        hours = []
        for idx, row in enumerate(rows):
            conditions = row if isinstance(row, dict) else {"cloud_cover": row}
            hours.append({"timestamp": hour_at(idx).isoformat(), **conditions})
        return hours

    return _make


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    path = tmp_path / "missing" / "config.toml"
    monkeypatch.setattr("skyscore.config.DEFAULT_CONFIG_PATH", path)
    return path
