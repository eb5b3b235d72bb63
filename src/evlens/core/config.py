"""View settings for evlens.

Settings come from an optional YAML file; CLI options override them.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from evlens.core.errors import ConfigError, ValidationError

DEFAULT_SPECIALIZED_INDEX = "SecurityEvents"

UsedFieldTracking = Literal["key", "value"]


class ViewSettings(BaseModel):
    """Settings that shape the results view."""

    specialized_index: str = Field(
        default=DEFAULT_SPECIALIZED_INDEX,
        min_length=1,
        description="Index whose results get the security event view",
    )

    value_cap: int = Field(
        default=50,
        ge=1,
        description="Maximum characters shown for an extra field value",
    )

    extras_cap: int = Field(
        default=6,
        ge=0,
        description="Maximum number of extra fields listed per event",
    )

    used_field_tracking: UsedFieldTracking = Field(
        default="key",
        description="How consumed columns are excluded from extras (key or value equality)",
    )

    page_size: int = Field(
        default=25,
        ge=1,
        description="Results per page",
    )

    catalog: Path | None = Field(
        default=None,
        description="YAML catalog replacing or extending the built-in one",
    )

    model_config = {"extra": "forbid"}

    def merged(self, **overrides: Any) -> "ViewSettings":
        """Return a copy with the non-None overrides applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        try:
            return ViewSettings.model_validate({**self.model_dump(), **updates})
        except PydanticValidationError as e:
            err = e.errors()[0]
            raise ValidationError(
                f"Invalid option {'.'.join(str(p) for p in err['loc'])}: {err['msg']}",
                field=str(err["loc"][0]) if err["loc"] else None,
            )


def load_settings(path: Path | None = None) -> ViewSettings:
    """Load view settings from a YAML file.

    Args:
        path: Settings file; defaults are returned when None

    Returns:
        Validated ViewSettings

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if path is None:
        return ViewSettings()

    if not path.exists():
        raise ConfigError(f"Settings file {path} not found", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", path=str(path))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", path=str(path))

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping", path=str(path))

    # Relative catalog paths are resolved against the settings file
    catalog = data.get("catalog")
    if isinstance(catalog, str) and not Path(catalog).is_absolute():
        data["catalog"] = str(path.parent / catalog)

    try:
        return ViewSettings.model_validate(data)
    except PydanticValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ConfigError(f"Settings file {path} failed validation", path=str(path), errors=errors)
