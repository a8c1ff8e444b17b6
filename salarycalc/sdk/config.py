"""Configuration management for Salary Calc.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)
   - default_output_format: table, json or csv

2. profile.yaml - User's calculation defaults
   - fund_ratio: housing fund ratio (5-12)
   - social_security_cap / housing_fund_cap: contribution base caps
   - deductions: special additional deductions enabled by default

Config directory resolution:
1. SALARY_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/salary-calc/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. settings.json "profile" key (if set via CLI)
2. profile.yaml in same config directory
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .deductions import DEDUCTION_CATALOG, DeductionItem, resolve_deductions, total_deductions
from .schemas import DEFAULT_BASE_CAP, Amount

logger = logging.getLogger(__name__)

APP_NAME = "salary-calc"
CONFIG_ENV_VAR = "SALARY_CALC_CONFIG_PATH"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"

OUTPUT_FORMATS = ("table", "json", "csv")


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


# =============================================================================
# Profile schema
# =============================================================================


class DeductionSetting(BaseModel):
    """A special deduction entry in profile.yaml."""
    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    amount: Optional[int] = Field(default=None, ge=0, description="Override of the default amount")


class ProfileDefaults(BaseModel):
    """Calculation defaults loaded from profile.yaml."""
    model_config = ConfigDict(extra="forbid")

    fund_ratio: int = Field(default=10, ge=5, le=12)
    social_security_cap: Amount = Field(default=DEFAULT_BASE_CAP, gt=0)
    housing_fund_cap: Amount = Field(default=DEFAULT_BASE_CAP, gt=0)
    deductions: Dict[str, DeductionSetting] = Field(default_factory=dict)

    @field_validator("deductions")
    @classmethod
    def check_deduction_keys(cls, value: Dict[str, DeductionSetting]) -> Dict[str, DeductionSetting]:
        unknown = sorted(set(value) - set(DEDUCTION_CATALOG))
        if unknown:
            raise ValueError(f"Unknown special deduction(s): {', '.join(unknown)}")
        return value

    def deduction_items(self) -> List[DeductionItem]:
        """Catalog items with profile settings applied."""
        enabled = [key for key, setting in self.deductions.items() if setting.enabled]
        amounts = {
            key: setting.amount
            for key, setting in self.deductions.items()
            if setting.amount is not None
        }
        return resolve_deductions(enabled, amounts)


def default_profile() -> dict:
    """Profile content written by `salary-calc config init`."""
    return {
        "fund_ratio": 10,
        "social_security_cap": int(DEFAULT_BASE_CAP),
        "housing_fund_cap": int(DEFAULT_BASE_CAP),
        "deductions": {},
    }


# =============================================================================
# Paths and settings
# =============================================================================


def get_config_dir() -> Path:
    """SALARY_CALC_CONFIG_PATH if set, else $XDG_CONFIG_HOME/salary-calc."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """settings.json contents, or {} when the file is absent."""
    path = get_settings_path()
    if not path.exists():
        return {}
    return json.loads(path.read_text())


def save_settings(settings: dict) -> Path:
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2))
    return path


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    return save_settings({**load_settings(), key: value})


def get_default_output_format() -> str:
    """Output format from settings.json; unknown values fall back to 'table'."""
    fmt = get_setting("default_output_format", "table")
    return fmt if fmt in OUTPUT_FORMATS else "table"


# =============================================================================
# Profile
# =============================================================================


def get_profile_path(require_exists: bool = False) -> Path:
    """profile.yaml location: the settings.json "profile" key, else the config dir.

    Raises:
        ProfileNotFoundError: If require_exists=True and the file is missing
    """
    custom = get_setting("profile")
    path = Path(custom) if custom else get_config_dir() / PROFILE_FILENAME

    if require_exists and not path.exists():
        hint = (
            "salary-calc config set profile /path/to/profile.yaml"
            if custom else "salary-calc config init"
        )
        raise ProfileNotFoundError(f"No profile at {path}\n\nFix with: {hint}")
    return path


def load_profile(require_exists: bool = True) -> dict:
    """Raw profile.yaml mapping; {} when optional and missing, or when the file is empty."""
    path = get_profile_path(require_exists=require_exists)
    if not path.exists():
        logger.debug("No profile at %s, using built-in defaults", path)
        return {}

    logger.debug("Loading profile from %s", path)
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    path = path or get_profile_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.dump(profile, default_flow_style=False, sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )
    return path


def load_defaults() -> ProfileDefaults:
    """Load and validate calculation defaults.

    Uses built-in defaults when no profile exists.

    Raises:
        pydantic.ValidationError: If profile.yaml has invalid values
        yaml.YAMLError: If profile.yaml is not valid YAML
    """
    return ProfileDefaults.model_validate(load_profile(require_exists=False))


def set_profile_value(key: str, value: Any) -> Path:
    """Set a profile value by dot-notation key and validate the result.

    Example: set_profile_value("deductions.children.enabled", True)

    Raises:
        pydantic.ValidationError: If the updated profile is invalid (nothing is saved)
    """
    profile = load_profile(require_exists=False) or default_profile()

    parts = key.split(".")
    target = profile
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            target[part] = {}
        target = target[part]
    target[parts[-1]] = value

    ProfileDefaults.model_validate(profile)
    return save_profile(profile)


def get_profile_value(key: str, default: Any = None) -> Any:
    """Get a profile value by dot-notation key."""
    value = load_profile(require_exists=False)
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default
    return value


def profile_defaults_summary(defaults: ProfileDefaults) -> Dict[str, Any]:
    """JSON-able view of resolved defaults, used by `config show`."""
    items = defaults.deduction_items()
    return {
        "fund_ratio": defaults.fund_ratio,
        "social_security_cap": str(defaults.social_security_cap),
        "housing_fund_cap": str(defaults.housing_fund_cap),
        "deductions": {
            item.key: {"enabled": item.enabled, "amount": item.amount}
            for item in items
        },
        "special_deductions_total": str(total_deductions(items)),
    }
