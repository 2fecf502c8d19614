"""taxes - Tax rules and per-jurisdiction tax evaluators.

Scope:
- Tax rules loading and validation (tax_rules/YYYY.yaml, states.yaml)
- Federal progressive brackets and marginal rate lookup
- State income tax: no tax / flat rate / progressive, plus local overlay
- FICA: Social Security (capped) and Medicare (+ Additional Medicare Tax)

Constraints:
- Pure calculation - every evaluator receives its rules explicitly
- No settings access outside rules loading

Modules:
- schemas: Pydantic models for the rules files and StateTaxResult
- rules: Locating, parsing and caching rules files
- federal: Bracket walk, federal tax, marginal rate
- state: State/local tax and state listings
- fica: Social Security and Medicare

Usage:
    from takehome.sdk.taxes import load_tax_rules, federal_tax, state_tax

    rules = load_tax_rules("2025")
    tax = federal_tax(35000, "single", rules.federal)
    ca = state_tax(54000, "CA", rules.states)
"""

from .schemas import (
    Bracket,
    FilingStatus,
    FILING_STATUSES,
    StateTaxConfig,
    StateTaxMode,
    StateTaxResult,
    StateTaxStatus,
    TaxRules,
    TaxYearConfig,
)

from .rules import (
    TaxRulesNotFoundError,
    clear_rules_cache,
    get_available_years,
    get_tax_rules_dir,
    load_state_configs,
    load_tax_rules,
    load_tax_year,
    resolve_tax_year,
)

from .federal import (
    bracket_tax,
    federal_bracket_info,
    federal_tax,
    marginal_rate,
)

from .state import (
    get_all_states,
    get_state_name,
    get_state_status,
    get_states_with_flat_tax,
    get_states_with_no_income_tax,
    state_tax,
    warn_unknown_state,
)

from .fica import (
    additional_medicare,
    medicare,
    social_security,
)

__all__ = [
    # Schemas
    "Bracket",
    "FilingStatus",
    "FILING_STATUSES",
    "StateTaxConfig",
    "StateTaxMode",
    "StateTaxResult",
    "StateTaxStatus",
    "TaxRules",
    "TaxYearConfig",
    # Rules
    "TaxRulesNotFoundError",
    "clear_rules_cache",
    "get_available_years",
    "get_tax_rules_dir",
    "load_state_configs",
    "load_tax_rules",
    "load_tax_year",
    "resolve_tax_year",
    # Federal
    "bracket_tax",
    "federal_bracket_info",
    "federal_tax",
    "marginal_rate",
    # State
    "get_all_states",
    "get_state_name",
    "get_state_status",
    "get_states_with_flat_tax",
    "get_states_with_no_income_tax",
    "state_tax",
    "warn_unknown_state",
    # FICA
    "additional_medicare",
    "medicare",
    "social_security",
]
