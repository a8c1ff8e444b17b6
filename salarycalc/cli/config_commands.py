"""Config CLI commands for Salary Calc.

Manages both configuration files:
- settings.json: machine-specific settings (profile path, output format)
- profile.yaml: calculation defaults (fund ratio, base caps, deductions)
"""

import json
import os

import click
import pydantic
import yaml

from salarycalc.sdk import (
    get_config_dir,
    get_settings_path,
    load_settings,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    load_defaults,
    default_profile,
)
from salarycalc.sdk.config import CONFIG_ENV_VAR, OUTPUT_FORMATS, profile_defaults_summary

SETTINGS_KEYS = ("profile", "default_output_format")


@click.group()
def config():
    """Manage settings.json and profile.yaml.

    \b
    settings.json keys:
      profile                 path to your profile.yaml
      default_output_format   table, json or csv

    \b
    profile.yaml keys (dot notation):
      fund_ratio              housing fund ratio, 5-12
      social_security_cap     social security base cap
      housing_fund_cap        housing fund base cap
      deductions.KEY.enabled  enable a special deduction (default false)
      deductions.KEY.amount   override an amount; does not enable it
    """
    pass


@config.command("path")
def config_path():
    """Show configuration paths and active profile location."""
    config_dir = get_config_dir()

    click.echo("Configuration paths:")
    click.echo()
    click.echo(f"  Config directory: {config_dir}")
    if os.environ.get(CONFIG_ENV_VAR):
        click.echo(f"    (from {CONFIG_ENV_VAR})")
    else:
        click.echo("    (XDG default)")

    settings_path = get_settings_path()
    state = "exists" if settings_path.exists() else "not found"
    click.echo(f"  Settings file:    {settings_path} [{state}]")

    profile_path = get_profile_path()
    state = "exists" if profile_path.exists() else "not found"
    click.echo(f"  Profile:          {profile_path} [{state}]")


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def config_show(as_json):
    """Show settings and the effective calculation defaults."""
    try:
        defaults = load_defaults()
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in profile: {e}")
    except pydantic.ValidationError as e:
        raise click.ClickException(f"Invalid profile:\n{e}")

    data = {
        "settings": load_settings(),
        "defaults": profile_defaults_summary(defaults),
    }

    if as_json:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
def config_init(force):
    """Create a profile.yaml with default values."""
    profile_path = get_profile_path()
    if profile_path.exists() and not force:
        raise click.ClickException(
            f"Profile already exists: {profile_path}\nUse --force to overwrite."
        )

    path = save_profile(default_profile(), profile_path)
    click.echo(f"Created profile: {path}")


@config.command("get")
@click.argument("key")
def config_get(key):
    """Get a value by KEY (settings key or dot-notation profile key)."""
    if key in SETTINGS_KEYS:
        value = load_settings().get(key)
    else:
        value = get_profile_value(key)

    if value is None:
        raise click.ClickException(f"Key not set: {key}")

    if isinstance(value, (dict, list)):
        click.echo(yaml.dump(value, default_flow_style=False, allow_unicode=True))
    else:
        click.echo(value)


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key, value):
    """Set KEY to VALUE.

    Settings keys go to settings.json, everything else to profile.yaml.
    VALUE is parsed as YAML, so 12, true and 31884.5 keep their types.

    \b
    Examples:
        salary-calc config set fund_ratio 12
        salary-calc config set deductions.children.enabled true
        salary-calc config set default_output_format json
    """
    if key == "default_output_format":
        if value not in OUTPUT_FORMATS:
            raise click.BadParameter(
                f"Must be one of: {', '.join(OUTPUT_FORMATS)}", param_hint="VALUE"
            )
        path = set_setting(key, value)
    elif key == "profile":
        path = set_setting(key, os.path.abspath(os.path.expanduser(value)))
    else:
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError as e:
            raise click.BadParameter(f"Invalid value: {e}", param_hint="VALUE")
        try:
            path = set_profile_value(key, parsed)
        except pydantic.ValidationError as e:
            raise click.ClickException(f"Invalid value for {key}:\n{e}")

    click.echo(f"Set {key} in {path}")


@config.command("dump")
def config_dump():
    """Print the raw profile.yaml contents."""
    profile = load_profile(require_exists=False)
    if not profile:
        click.echo("No profile configured (using built-in defaults).")
        return
    click.echo(yaml.dump(profile, default_flow_style=False, sort_keys=False, allow_unicode=True))
