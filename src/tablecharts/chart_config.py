"""Saved chart dialog settings: one JSON file in the user config directory.

Holds the last boxplot and polar selections and the last CSV opened. A
missing, corrupt or older-schema file yields defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from tablecharts.boxplot.boxplot_state import BoxplotState
from tablecharts.polar.polar_chart import PolarState
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1


@dataclass
class ChartConfigData:
    """On-disk payload; states are stored as their to_dict() output."""
    schema_version: int = SCHEMA_VERSION
    boxplot_state: Dict[str, Any] = field(default_factory=dict)
    polar_state: Dict[str, Any] = field(default_factory=dict)
    last_csv: str = ""

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "boxplot_state": self.boxplot_state,
            "polar_state": self.polar_state,
            "last_csv": self.last_csv,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "ChartConfigData":
        """Build from parsed JSON; bad sections fall back to empty, unknown keys are logged."""
        schema_version = int(d.get("schema_version", -1))

        states: dict[str, Dict[str, Any]] = {}
        for key in ("boxplot_state", "polar_state"):
            raw = d.get(key, {})
            if isinstance(raw, dict):
                states[key] = raw
            else:
                logger.warning(f"{key} is not a dict, using defaults")
                states[key] = {}

        last_csv = d.get("last_csv", "")
        if not isinstance(last_csv, str):
            last_csv = ""

        known_keys = {"schema_version", "boxplot_state", "polar_state", "last_csv"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in chart config, ignoring")

        return cls(
            schema_version=schema_version,
            boxplot_state=states["boxplot_state"],
            polar_state=states["polar_state"],
            last_csv=last_csv,
        )


class ChartConfig:
    """ChartConfigData bound to a file path."""

    def __init__(self, *, path: Path, data: Optional[ChartConfigData] = None):
        self.path = path
        self.data = data if data is not None else ChartConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = "tablecharts",
        filename: str = "chart_config.json",
        app_author: str | None = None,
    ) -> Path:
        """Path of the settings file under platformdirs.user_config_dir (created if needed)."""
        d = Path(user_config_dir(app_name, app_author))
        d.mkdir(parents=True, exist_ok=True)
        return d / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = "tablecharts",
        filename: str = "chart_config.json",
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "ChartConfig":
        """Read settings from config_path (or the default path).

        Any read or parse failure gives defaults. A schema_version other than
        the expected one gives defaults too, unless reset_on_version_mismatch
        is False, in which case the loaded data is kept and restamped.
        """
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename, app_author=app_author)
        default_data = ChartConfigData(schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(parsed, dict):
                logger.warning(f"Chart config file at {path} does not contain a dict, using defaults")
                return cls(path=path, data=default_data)

            loaded = ChartConfigData.from_json_dict(parsed)

            if int(loaded.schema_version) != int(schema_version):
                if reset_on_version_mismatch:
                    logger.warning(
                        f"Chart config schema version mismatch: loaded={loaded.schema_version}, "
                        f"expected={schema_version}, resetting to defaults"
                    )
                    cfg = cls(path=path, data=default_data)
                    if create_if_missing:
                        cfg.save()
                    return cfg
                loaded.schema_version = int(schema_version)

            return cls(path=path, data=loaded)
        except FileNotFoundError:
            logger.debug(f"Chart config file not found at {path}, using defaults")
            cfg = cls(path=path, data=default_data)
            if create_if_missing:
                cfg.save()
            return cfg
        except json.JSONDecodeError as e:
            logger.warning(f"Chart config file at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Error loading chart config from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

    def save(self) -> None:
        """Write settings as indented JSON, creating the directory."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
            logger.info(f"Saved chart config to {self.path}")
        except OSError as e:
            logger.error(f"Error saving chart config to {self.path}: {e}")
            raise

    def get_boxplot_state(self) -> BoxplotState:
        return BoxplotState.from_dict(self.data.boxplot_state)

    def set_boxplot_state(self, state: BoxplotState) -> None:
        self.data.boxplot_state = state.to_dict()

    def get_polar_state(self) -> PolarState:
        return PolarState.from_dict(self.data.polar_state)

    def set_polar_state(self, state: PolarState) -> None:
        self.data.polar_state = state.to_dict()

    def get_last_csv(self) -> str:
        return self.data.last_csv

    def set_last_csv(self, path: str | Path) -> None:
        self.data.last_csv = str(path)
