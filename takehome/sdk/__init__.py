"""Take Home SDK - Take-home pay, payroll tax and net-to-gross calculators."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    SettingsError,
    SETTING_KEYS,
)

from .taxes import (
    FilingStatus,
    FILING_STATUSES,
    TaxRules,
    TaxYearConfig,
    StateTaxConfig,
    TaxRulesNotFoundError,
    load_tax_rules,
    get_available_years,
    resolve_tax_year,
    federal_bracket_info,
    get_all_states,
    get_state_name,
    get_states_with_flat_tax,
    get_states_with_no_income_tax,
)

from .schemas import (
    SalaryInput,
    SalaryResult,
    TaxBreakdown,
    GrossForNetResult,
    EmployerCostInput,
    EmployerCostResult,
    SelfEmploymentInput,
    SelfEmploymentResult,
    BonusTaxInput,
    BonusTaxResult,
    Job,
    MultipleJobsInput,
    MultipleJobsResult,
    PayRiseInput,
    PayRiseResult,
    HourlyInput,
    HourlyResult,
    ComparisonEntry,
    ComparisonRow,
    SalaryComparisonInput,
    SalaryComparisonResult,
)

from .salary import calculate_salary, scale_breakdown, PERIOD_DIVISORS
from .solver import solve_gross_for_net
from .employer import calculate_employer_cost
from .self_employment import calculate_self_employment_tax
from .bonus import calculate_bonus_tax
from .multiple_jobs import calculate_multiple_jobs
from .pay_rise import calculate_pay_rise
from .hourly import calculate_hourly_salary
from .comparison import compare_salaries
from .formatting import format_currency, format_percent, parse_salary

__all__ = [
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "SettingsError",
    "SETTING_KEYS",
    # Rules
    "FilingStatus",
    "FILING_STATUSES",
    "TaxRules",
    "TaxYearConfig",
    "StateTaxConfig",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "get_available_years",
    "resolve_tax_year",
    "federal_bracket_info",
    "get_all_states",
    "get_state_name",
    "get_states_with_flat_tax",
    "get_states_with_no_income_tax",
    # Schemas
    "SalaryInput",
    "SalaryResult",
    "TaxBreakdown",
    "GrossForNetResult",
    "EmployerCostInput",
    "EmployerCostResult",
    "SelfEmploymentInput",
    "SelfEmploymentResult",
    "BonusTaxInput",
    "BonusTaxResult",
    "Job",
    "MultipleJobsInput",
    "MultipleJobsResult",
    "PayRiseInput",
    "PayRiseResult",
    "HourlyInput",
    "HourlyResult",
    "ComparisonEntry",
    "ComparisonRow",
    "SalaryComparisonInput",
    "SalaryComparisonResult",
    # Calculators
    "calculate_salary",
    "scale_breakdown",
    "PERIOD_DIVISORS",
    "solve_gross_for_net",
    "calculate_employer_cost",
    "calculate_self_employment_tax",
    "calculate_bonus_tax",
    "calculate_multiple_jobs",
    "calculate_pay_rise",
    "calculate_hourly_salary",
    "compare_salaries",
    # Formatting
    "format_currency",
    "format_percent",
    "parse_salary",
]
