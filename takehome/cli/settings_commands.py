"""Settings CLI commands for Take Home.

Manages settings.json - default state, filing status, tax year, rules path.
"""

from pathlib import Path

import click

from takehome.sdk import (
    FILING_STATUSES,
    SETTING_KEYS,
    SettingsError,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)
from takehome.sdk.taxes import get_tax_rules_dir


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - default_state: two-letter state code (default: TX)
    - default_filing_status: single, married_jointly, married_separately, head_of_household
    - tax_year: tax year to use (default: latest available)
    - tax_rules_dir: directory of custom tax rules YAML files
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  tax_rules_dir: {get_tax_rules_dir()}")


@settings.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        take-home settings set default_state CA
        take-home settings set default_filing_status married_jointly
    """
    if key == "default_state":
        value = value.strip().upper()
        if len(value) != 2 or not value.isalpha():
            raise click.BadParameter(f"Invalid state code '{value}'. Must be 2 letters.")
    elif key == "default_filing_status":
        if value not in FILING_STATUSES:
            raise click.BadParameter(
                f"Invalid filing status '{value}'. Must be one of: {', '.join(FILING_STATUSES)}"
            )
    elif key == "tax_year":
        if not value.isdigit() or len(value) != 4:
            raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")
    elif key == "tax_rules_dir":
        rules_path = Path(value).expanduser().resolve()
        if not rules_path.is_dir():
            raise click.BadParameter(f"Not a directory: {rules_path}")
        value = str(rules_path)

    try:
        saved_to = set_setting(key, value)
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {saved_to}")


@settings.command("unset")
@click.argument("key", type=click.Choice(SETTING_KEYS))
def settings_unset(key):
    """Clear KEY, reverting to the default."""
    try:
        removed = unset_setting(key)
    except SettingsError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
