"""Take Home MCP Server - FastMCP implementation for take-home pay tools.

Each tool loads one rules snapshot for the requested tax year and passes it
to the calculator, so settings are read once per request.
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from takehome.sdk import (
    ComparisonEntry,
    EmployerCostInput,
    HourlyInput,
    PayRiseInput,
    SalaryComparisonInput,
    SalaryInput,
    SelfEmploymentInput,
    calculate_employer_cost,
    calculate_hourly_salary,
    calculate_pay_rise,
    calculate_salary,
    calculate_self_employment_tax,
    compare_salaries,
    get_all_states,
    load_tax_rules,
    solve_gross_for_net,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("take-home")


# --- Tools ---

@mcp.tool()
async def calculate_take_home(
    gross_salary: float = Field(description="Annual gross salary in dollars"),
    state: str = Field(default="TX", description="Two-letter state code"),
    filing_status: str = Field(
        default="single",
        description="single, married_jointly, married_separately or head_of_household",
    ),
    retirement_401k: float = Field(default=0, description="Annual pre-tax 401(k) contribution"),
    hsa_contribution: float = Field(default=0, description="Annual pre-tax HSA contribution"),
    include_local_tax: bool = Field(default=False, description="Include local income tax (NYC, MD counties)"),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Calculate take-home pay with federal, state and FICA taxes. Returns yearly, monthly and biweekly breakdowns."""
    try:
        rules = load_tax_rules(tax_year)
        salary_input = SalaryInput(
            gross_salary=gross_salary,
            state=state,
            filing_status=filing_status,
            retirement_401k=retirement_401k,
            hsa_contribution=hsa_contribution,
            include_local_tax=include_local_tax,
            tax_year=rules.year,
        )
        result = calculate_salary(salary_input, rules)
        return {
            "tax_year": result.tax_year,
            "state": result.state,
            "state_name": result.state_name,
            "state_status": result.state_status,
            "filing_status": result.filing_status,
            "yearly": result.yearly.model_dump(),
            "monthly": result.monthly.model_dump(),
            "biweekly": result.biweekly.model_dump(),
        }
    except Exception as e:
        logger.error(f"Error calculating take-home for {gross_salary}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def net_to_gross(
    target_net: float = Field(description="Desired annual take-home pay in dollars"),
    state: str = Field(default="TX", description="Two-letter state code"),
    filing_status: str = Field(default="single", description="Filing status"),
    include_local_tax: bool = Field(default=False, description="Include local income tax"),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Find the gross salary needed to reach a target annual take-home pay.

    state_status is "unknown" when the state has no tax rules and state tax was taken as 0.
    """
    try:
        rules = load_tax_rules(tax_year)
        result = solve_gross_for_net(
            target_net,
            filing_status,
            state,
            rules=rules,
            include_local_tax=include_local_tax,
        )
        return {"tax_year": rules.year, **result.model_dump()}
    except Exception as e:
        logger.error(f"Error solving net-to-gross for {target_net}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def employer_cost(
    gross_salary: float = Field(description="Annual gross salary in dollars"),
    employer_401k_match: float = Field(default=0, description="401(k) match as percent of salary (e.g. 4)"),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Calculate the total cost of a salary to the employer, including payroll taxes and 401(k) match."""
    try:
        rules = load_tax_rules(tax_year)
        cost_input = EmployerCostInput(
            gross_salary=gross_salary,
            employer_401k_match=employer_401k_match,
            tax_year=rules.year,
        )
        return calculate_employer_cost(cost_input, rules).model_dump()
    except Exception as e:
        logger.error(f"Error calculating employer cost for {gross_salary}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def self_employment_tax(
    net_earnings: float = Field(description="Net self-employment earnings in dollars"),
    filing_status: str = Field(default="single", description="Filing status"),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Calculate self-employment (Social Security and Medicare) tax on net earnings."""
    try:
        rules = load_tax_rules(tax_year)
        se_input = SelfEmploymentInput(
            net_earnings=net_earnings,
            filing_status=filing_status,
            tax_year=rules.year,
        )
        return calculate_self_employment_tax(se_input, rules).model_dump()
    except Exception as e:
        logger.error(f"Error calculating self-employment tax for {net_earnings}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def pay_rise(
    current_salary: float = Field(description="Current annual salary in dollars"),
    rise_value: float = Field(description="Raise: percent, dollar amount or new salary, per rise_type"),
    rise_type: str = Field(default="percentage", description="percentage, amount or new_salary"),
    state: str = Field(default="TX", description="Two-letter state code"),
    filing_status: str = Field(default="single", description="Filing status"),
    retirement_401k: float = Field(default=0, description="Annual pre-tax 401(k) contribution"),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Show how much of a raise reaches take-home pay, with the change in each tax."""
    try:
        rules = load_tax_rules(tax_year)
        rise_input = PayRiseInput(
            current_salary=current_salary,
            rise_type=rise_type,
            rise_value=rise_value,
            state=state,
            filing_status=filing_status,
            retirement_401k=retirement_401k,
            tax_year=rules.year,
        )
        return calculate_pay_rise(rise_input, rules).model_dump()
    except Exception as e:
        logger.error(f"Error calculating pay rise for {current_salary}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def hourly_to_salary(
    hourly_rate: float = Field(description="Hourly wage in dollars"),
    hours_per_week: float = Field(default=40, description="Hours worked per week"),
    weeks_per_year: float = Field(default=52, description="Weeks worked per year"),
    state: str = Field(default="TX", description="Two-letter state code"),
    filing_status: str = Field(default="single", description="Filing status"),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Convert an hourly wage to an annual salary and its yearly take-home pay."""
    try:
        rules = load_tax_rules(tax_year)
        hourly_input = HourlyInput(
            hourly_rate=hourly_rate,
            hours_per_week=hours_per_week,
            weeks_per_year=weeks_per_year,
            state=state,
            filing_status=filing_status,
            tax_year=rules.year,
        )
        result = calculate_hourly_salary(hourly_input, rules)
        return {
            "tax_year": result.salary.tax_year,
            "state": result.salary.state,
            "state_status": result.salary.state_status,
            "hourly_rate": result.hourly_rate,
            "hours_per_year": result.hours_per_year,
            "annual_salary": result.annual_salary,
            "take_home_per_hour": result.take_home_per_hour,
            "yearly": result.salary.yearly.model_dump(),
        }
    except Exception as e:
        logger.error(f"Error converting hourly rate {hourly_rate}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def salary_comparison(
    entries: list[dict[str, Any]] = Field(
        description="Two to four salaries: each {label, salary, state?, filing_status?}",
    ),
    tax_year: str | None = Field(default=None, description="Tax year (default: latest available)"),
) -> dict[str, Any]:
    """Compare take-home pay for two to four salaries, each with its own state and filing status."""
    try:
        rules = load_tax_rules(tax_year)
        comparison_input = SalaryComparisonInput(
            entries=[ComparisonEntry(**entry) for entry in entries],
            tax_year=rules.year,
        )
        return compare_salaries(comparison_input, rules).model_dump()
    except Exception as e:
        logger.error(f"Error comparing salaries: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def list_states(
    mode: str | None = Field(
        default=None,
        description="Filter by income tax mode: no_income_tax, flat or progressive",
    ),
) -> dict[str, Any]:
    """List states with their names and income tax mode."""
    try:
        rules = load_tax_rules()
        states = get_all_states(rules.states, mode=mode)
        return {"states": states, "count": len(states)}
    except Exception as e:
        logger.error(f"Error listing states: {e}")
        return {"error": str(e), "states": [], "count": 0}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
