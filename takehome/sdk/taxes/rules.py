"""Tax rules loading.

Rules ship as YAML inside the package (takehome/tax_rules/):
- YYYY.yaml: federal brackets, deductions and payroll tax parameters
- states.yaml: per-state income tax mode and parameters

A custom rules directory with the same layout can be selected with the
TAKE_HOME_TAX_RULES_DIR environment variable or the tax_rules_dir setting.
Files are parsed once per process and returned as frozen models.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from ..config import get_setting
from .schemas import StateTaxConfig, TaxRules, TaxYearConfig

logger = logging.getLogger(__name__)

STATES_FILENAME = "states.yaml"


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no rules file exists for a requested tax year."""
    pass


def get_tax_rules_dir() -> Path:
    """Get the tax rules directory path.

    Resolution order:
    1. TAKE_HOME_TAX_RULES_DIR environment variable
    2. settings.json "tax_rules_dir" key
    3. Packaged rules (takehome/tax_rules/)
    """
    env_path = os.environ.get("TAKE_HOME_TAX_RULES_DIR")
    if env_path:
        return Path(env_path)

    custom = get_setting("tax_rules_dir")
    if custom:
        return Path(custom).expanduser()

    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> takehome
    return package_root / "tax_rules"


def get_available_years(rules_dir: Optional[Path] = None) -> list[str]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = rules_dir or get_tax_rules_dir()
    years = [p.stem for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def resolve_tax_year(year: Optional[str] = None) -> str:
    """Resolve the tax year to use for a request.

    Explicit year wins, then the tax_year setting, then the latest year
    with a rules file.
    """
    if year:
        return str(year)

    configured = get_setting("tax_year")
    if configured:
        return str(configured)

    available = get_available_years()
    if not available:
        raise TaxRulesNotFoundError(f"No tax rules files found in {get_tax_rules_dir()}")
    return available[0]


def _read_yaml(path: Path) -> dict:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=None)
def _load_year_file(path: Path) -> TaxYearConfig:
    logger.debug(f"loading federal tax rules from {path}")
    return TaxYearConfig.model_validate(_read_yaml(path))


@lru_cache(maxsize=None)
def _load_states_file(path: Path) -> dict[str, StateTaxConfig]:
    logger.debug(f"loading state tax rules from {path}")
    data = _read_yaml(path)
    return {
        code.upper(): StateTaxConfig.model_validate(entry)
        for code, entry in (data.get("states") or {}).items()
    }


def load_tax_year(year: Optional[str] = None) -> TaxYearConfig:
    """Load federal rules for a tax year from tax_rules/YYYY.yaml.

    Raises:
        TaxRulesNotFoundError: If no rules file exists for the year
        pydantic.ValidationError: If the file fails schema validation
    """
    year = resolve_tax_year(year)
    rules_dir = get_tax_rules_dir()
    config_file = rules_dir / f"{year}.yaml"
    if not config_file.exists():
        available = ", ".join(get_available_years(rules_dir)) or "none"
        raise TaxRulesNotFoundError(
            f"Tax rules file not found for year {year}: {config_file} (available: {available})"
        )
    return _load_year_file(config_file)


def load_state_configs() -> dict[str, StateTaxConfig]:
    """Load state rules from tax_rules/states.yaml.

    A missing states file yields an empty mapping: every state then
    evaluates as unknown rather than failing.
    """
    states_file = get_tax_rules_dir() / STATES_FILENAME
    if not states_file.exists():
        logger.warning(f"State tax rules not found: {states_file}")
        return {}
    return _load_states_file(states_file)


def load_tax_rules(year: Optional[str] = None) -> TaxRules:
    """Load the federal and state rules snapshot for a tax year."""
    return TaxRules(federal=load_tax_year(year), states=load_state_configs())


def clear_rules_cache() -> None:
    """Drop parsed rules so edited files are re-read."""
    _load_year_file.cache_clear()
    _load_states_file.cache_clear()
