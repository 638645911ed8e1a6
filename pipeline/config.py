"""Runtime settings for the dashboard.

Defaults live in :class:`DashboardSettings`.  A YAML file can override any
field and a handful of environment variables take precedence over both, so
the Streamlit app can be tuned without touching code.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

SETTINGS_ENV = "DASHBOARD_SETTINGS"
DEFAULT_SETTINGS_PATH = "config/dashboard.yaml"


@dataclass(frozen=True)
class DashboardSettings:
    """Tunable parameters shared by the pipeline and the views.

    Attributes
    ----------
    chart_row_cap : int
        Rows kept from each sheet when building a chart series.
    max_upload_mb : float
        Largest upload accepted by the upload widget.
    table_page_size : int
        Rows per page in the table view.
    thousands_separator, decimal_separator : str
        Number formatting used in the summary insights (pt-BR by default).
    log_level : str
        Root logging level configured by the app entry point.
    """

    chart_row_cap: int = 10
    max_upload_mb: float = 10.0
    table_page_size: int = 10
    thousands_separator: str = "."
    decimal_separator: str = ","
    log_level: str = "INFO"

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)


def _coerce(settings: DashboardSettings, overrides: Mapping[str, Any]) -> DashboardSettings:
    known = {f.name for f in fields(DashboardSettings)}
    values: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r", key)
            continue
        default = getattr(settings, key)
        try:
            values[key] = type(default)(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Valor inválido para {key}: {value!r}") from exc
    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()
    return replace(settings, **values)


def load_settings(path: Optional[str] = None) -> DashboardSettings:
    """Load settings from YAML plus environment overrides.

    ``path`` falls back to ``$DASHBOARD_SETTINGS`` and then to
    ``config/dashboard.yaml``.  A missing file simply yields the defaults.
    """

    settings = DashboardSettings()
    file_path = Path(path or os.getenv(SETTINGS_ENV, DEFAULT_SETTINGS_PATH))
    if file_path.exists():
        with open(file_path, "r", encoding="utf-8") as fp:
            payload = yaml.safe_load(fp) or {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"Arquivo de configuração inválido: {file_path}")
        settings = _coerce(settings, payload)
        logger.debug("Loaded settings from %s", file_path)

    env_overrides: Dict[str, Any] = {}
    if os.getenv("DASHBOARD_LOG_LEVEL"):
        env_overrides["log_level"] = os.environ["DASHBOARD_LOG_LEVEL"]
    if os.getenv("DASHBOARD_MAX_UPLOAD_MB"):
        env_overrides["max_upload_mb"] = os.environ["DASHBOARD_MAX_UPLOAD_MB"]
    if env_overrides:
        settings = _coerce(settings, env_overrides)
    return settings
