from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "skyscore" / "config.toml"


class Config:
    def __init__(self, data: dict):
        self._data = data

    def _section(self, *names: str) -> dict:
        section = self._data
        for name in names:
            section = section.get(name, {})
            if not isinstance(section, dict):
                return {}
        return section

    @property
    def site_latitude_deg(self):
        return self._section("site").get("latitude_deg", None)

    @property
    def site_name(self):
        return self._section("site").get("name", None)

    @property
    def sky_cloud_threshold(self):
        return self._section("windows", "sky").get("cloud_threshold", 30.0)

    @property
    def sky_min_duration_min(self):
        return self._section("windows", "sky").get("min_duration_min", 120.0)

    @property
    def aurora_min_score(self):
        return self._section("windows", "aurora").get("min_score", 60.0)

    @property
    def aurora_min_duration_min(self):
        return self._section("windows", "aurora").get("min_duration_min", 30.0)

    @property
    def aurora_max_windows(self):
        return self._section("windows", "aurora").get("max_windows", 3)

    @property
    def outdoor_min_score(self):
        return self._section("windows", "outdoor").get("min_score", 65.0)

    @property
    def outdoor_min_duration_min(self):
        return self._section("windows", "outdoor").get("min_duration_min", 60.0)

    @property
    def outdoor_max_windows(self):
        return self._section("windows", "outdoor").get("max_windows", 3)

    @property
    def outdoor_activity(self):
        return self._section("outdoor").get("activity", "default")

    @property
    def outdoor_temp_range(self) -> tuple[float, float] | None:
        outdoor = self._section("outdoor")
        temp_min = outdoor.get("temp_min", None)
        temp_max = outdoor.get("temp_max", None)
        if temp_min is None or temp_max is None:
            return None
        return float(temp_min), float(temp_max)

    @property
    def log_level(self):
        return self._section("logging").get("level", None)


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({})

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return Config(data)
