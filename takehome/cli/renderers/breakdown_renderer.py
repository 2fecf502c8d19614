"""Rich renderers for calculator results.

Transforms SDK result models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from takehome.sdk import (
    BonusTaxResult,
    EmployerCostResult,
    GrossForNetResult,
    HourlyResult,
    MultipleJobsResult,
    PayRiseResult,
    SalaryComparisonResult,
    SalaryResult,
    SelfEmploymentResult,
    format_currency,
    format_percent,
)


SALARY_ROWS = [
    ("Gross Income", "gross_income"),
    ("401(k)", "retirement_401k"),
    ("HSA", "hsa_contribution"),
    ("Federal Taxable Income", "taxable_income"),
    ("Federal Tax", "federal_tax"),
    ("State Tax", "state_tax"),
    ("Local Tax", "local_tax"),
    ("Social Security", "social_security"),
    ("Medicare", "medicare"),
    ("Total Deductions", "total_deductions"),
]


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return format_currency(amount)


def _warn_unknown_state(console: Console, state: str) -> None:
    console.print(Panel(
        f"[yellow]No tax rules for state '{state}'. State tax shown as $0.[/yellow]",
        title="Note",
        border_style="yellow",
    ))


def render_salary_result(console: Console, result: SalaryResult, periods: list[str]) -> None:
    """Render a take-home breakdown with one column per pay period."""
    if result.state_status == "unknown":
        _warn_unknown_state(console, result.state)

    table = Table(
        title=f"Take-Home Pay: {result.state_name}, {result.filing_status} ({result.tax_year})",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=22)
    for period in periods:
        table.add_column(period.title(), justify="right", min_width=12)

    breakdowns = [result.period(period) for period in periods]

    for label, field in SALARY_ROWS:
        values = [getattr(b, field) for b in breakdowns]
        # Skip optional lines that are zero in every period
        if field in ("retirement_401k", "hsa_contribution", "local_tax") and not any(values):
            continue
        style = "dim" if field in ("taxable_income", "total_deductions") else None
        table.add_row(f"  {label}" if field != "gross_income" else label,
                      *[_fmt(v) for v in values], style=style)

    table.add_row(
        "[bold green]TAKE-HOME PAY[/bold green]",
        *[f"[bold green]{_fmt(b.take_home_pay)}[/bold green]" for b in breakdowns],
    )
    console.print(table)

    yearly = result.yearly
    console.print(
        f"Effective tax rate: {format_percent(yearly.effective_tax_rate)}   "
        f"Marginal federal rate: {format_percent(yearly.marginal_tax_rate, 0)}"
    )


def render_gross_for_net(console: Console, result: GrossForNetResult) -> None:
    """Render a net-to-gross solution."""
    if result.state_status == "unknown":
        _warn_unknown_state(console, result.state)

    table = Table(show_header=False, box=box.ROUNDED, title="Net to Gross")
    table.add_column("key", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Target take-home", _fmt(result.target_net))
    table.add_row("[bold green]Required gross[/bold green]", f"[bold green]{_fmt(result.gross_salary)}[/bold green]")
    table.add_row("Take-home at gross", _fmt(result.take_home_pay))
    table.add_row("Difference", _fmt(result.difference), style="dim")
    console.print(table)

    if not result.converged:
        console.print(Panel(
            f"[yellow]Search stopped after {result.iterations} iterations without reaching "
            f"the target within tolerance. The gross shown is the best estimate.[/yellow]",
            title="Approximate",
            border_style="yellow",
        ))


def render_employer_cost(console: Console, result: EmployerCostResult) -> None:
    table = Table(show_header=False, box=box.ROUNDED, title=f"Employer Cost ({result.tax_year})")
    table.add_column("key", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Gross Salary", _fmt(result.gross_salary))
    table.add_row("  Social Security", _fmt(result.employer_social_security))
    table.add_row("  Medicare", _fmt(result.employer_medicare))
    table.add_row("  FUTA", _fmt(result.employer_futa))
    table.add_row("  SUTA (estimate)", _fmt(result.employer_suta))
    if result.employer_401k_match:
        table.add_row("  401(k) Match", _fmt(result.employer_401k_match))
    table.add_row("[bold]TOTAL COST[/bold]", f"[bold]{_fmt(result.total_cost)}[/bold]")
    table.add_row("  per month", _fmt(result.cost_per_month), style="dim")
    table.add_row("  per working day", _fmt(result.cost_per_day), style="dim")
    console.print(table)


def render_self_employment(console: Console, result: SelfEmploymentResult) -> None:
    table = Table(show_header=False, box=box.ROUNDED, title=f"Self-Employment Tax ({result.tax_year})")
    table.add_column("key", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Net Earnings", _fmt(result.net_earnings))
    table.add_row("SE Tax Base (92.35%)", _fmt(result.self_employment_tax_base), style="dim")
    table.add_row("  Social Security", _fmt(result.social_security_tax))
    table.add_row("  Medicare", _fmt(result.medicare_tax))
    table.add_row("[bold]TOTAL SE TAX[/bold]", f"[bold]{_fmt(result.total_self_employment_tax)}[/bold]")
    table.add_row("Deductible half", _fmt(result.deductible_portion), style="dim")
    console.print(table)


def render_bonus_tax(console: Console, result: BonusTaxResult) -> None:
    if result.state_status == "unknown":
        _warn_unknown_state(console, result.state)

    table = Table(box=box.ROUNDED, title=f"Bonus Tax on {_fmt(result.bonus)} ({result.tax_year})")
    table.add_column("", style="bold", min_width=18)
    table.add_column("Withheld", justify="right", min_width=12)
    table.add_column("Actual", justify="right", min_width=12)
    table.add_row("Federal", _fmt(result.withheld_federal), _fmt(result.actual_federal_tax))
    table.add_row("State", _fmt(result.withheld_state), _fmt(result.actual_state_tax))
    table.add_row("Social Security", _fmt(result.withheld_social_security), _fmt(result.actual_social_security))
    table.add_row("Medicare", _fmt(result.withheld_medicare), _fmt(result.actual_medicare))
    table.add_row("Total", _fmt(result.total_withheld), _fmt(result.actual_total_tax), style="dim")
    table.add_row(
        "[bold green]NET BONUS[/bold green]",
        f"[bold green]{_fmt(result.net_bonus_withheld)}[/bold green]",
        f"[bold green]{_fmt(result.net_bonus_actual)}[/bold green]",
    )
    console.print(table)

    diff = result.withholding_difference
    if diff > 0:
        console.print(f"Over-withheld by {_fmt(diff)} (expect it back at filing).")
    elif diff < 0:
        console.print(f"Under-withheld by {_fmt(-diff)} (expect to owe at filing).")


def render_multiple_jobs(console: Console, result: MultipleJobsResult) -> None:
    if result.state_status == "unknown":
        _warn_unknown_state(console, result.state)

    table = Table(box=box.ROUNDED, title=f"Multiple Jobs ({result.tax_year})")
    table.add_column("Job", style="bold")
    table.add_column("Salary", justify="right")
    table.add_column("Federal", justify="right")
    table.add_column("State", justify="right")
    table.add_column("FICA", justify="right")
    for row in result.jobs:
        table.add_row(
            row.name,
            _fmt(row.salary),
            _fmt(row.federal_tax),
            _fmt(row.state_tax),
            _fmt(row.social_security + row.medicare),
        )
    table.add_row(
        "[bold]Withheld[/bold]",
        _fmt(result.total_income),
        _fmt(result.total_federal_withheld),
        _fmt(result.total_state_withheld),
        _fmt(result.total_fica_withheld),
    )
    table.add_row(
        "[bold]Actual[/bold]",
        "",
        _fmt(result.actual_federal_tax),
        _fmt(result.actual_state_tax),
        _fmt(result.actual_fica),
    )
    console.print(table)

    if result.federal_shortfall > 0:
        console.print(f"[yellow]Federal under-withheld by {_fmt(result.federal_shortfall)}.[/yellow]")
    if result.state_shortfall > 0:
        console.print(f"[yellow]State under-withheld by {_fmt(result.state_shortfall)}.[/yellow]")
    if result.excess_social_security > 0:
        console.print(f"Excess Social Security refundable: {_fmt(result.excess_social_security)}")


RISE_ROWS = [
    ("Federal Tax", "federal_tax_increase"),
    ("State Tax", "state_tax_increase"),
    ("FICA", "fica_increase"),
]


def render_pay_rise(console: Console, result: PayRiseResult) -> None:
    """Render take-home before and after a raise."""
    if result.state_status == "unknown":
        _warn_unknown_state(console, result.state)

    table = Table(box=box.ROUNDED, title=f"Pay Rise ({result.tax_year})")
    table.add_column("", style="bold", min_width=16)
    table.add_column("Current", justify="right", min_width=12)
    table.add_column("New", justify="right", min_width=12)
    table.add_column("Change", justify="right", min_width=12)
    table.add_row(
        "Salary",
        _fmt(result.current_salary),
        _fmt(result.new_salary),
        f"{_fmt(result.salary_increase)} ({format_percent(result.percentage_increase)})",
    )
    for label, field in RISE_ROWS:
        table.add_row(f"  {label}", "", "", _fmt(getattr(result, field)), style="dim")
    table.add_row(
        "[bold green]TAKE-HOME PAY[/bold green]",
        _fmt(result.current_take_home),
        _fmt(result.new_take_home),
        f"[bold green]{_fmt(result.take_home_increase)}[/bold green]",
    )
    console.print(table)

    console.print(
        f"Per month: {_fmt(result.monthly_increase)}   "
        f"Per week: {_fmt(result.weekly_increase)}   "
        f"You keep {format_percent(result.retention_rate)} of the raise"
    )


def render_hourly(console: Console, result: HourlyResult) -> None:
    console.print(
        f"{_fmt(result.hourly_rate)}/hour x {result.hours_per_week:g} hours x "
        f"{result.weeks_per_year:g} weeks = [bold]{_fmt(result.annual_salary)}[/bold] a year"
    )
    render_salary_result(console, result.salary, ["yearly", "monthly", "weekly"])
    console.print(f"Take-home per hour worked: {_fmt(result.take_home_per_hour)}")


def render_comparison(console: Console, result: SalaryComparisonResult) -> None:
    """Render compared salaries as columns, with the spread in the last column."""
    for state in dict.fromkeys(row.state for row in result.rows if row.state_status == "unknown"):
        _warn_unknown_state(console, state)

    table = Table(box=box.ROUNDED, title=f"Salary Comparison ({result.tax_year})")
    table.add_column("", style="bold", min_width=16)
    for row in result.rows:
        marker = " *" if row.label == result.highest_take_home else ""
        table.add_column(f"{row.label}{marker}", justify="right", min_width=12)
    table.add_column("Difference", justify="right", style="dim")

    table.add_row("State", *[f"{row.state} ({row.filing_status})" for row in result.rows], "")
    table.add_row("Salary", *[_fmt(row.salary) for row in result.rows], _fmt(result.salary_spread))
    table.add_row("  Federal Tax", *[_fmt(row.federal_tax) for row in result.rows], _fmt(result.federal_tax_spread))
    table.add_row("  State Tax", *[_fmt(row.state_tax) for row in result.rows], _fmt(result.state_tax_spread))
    table.add_row("  FICA", *[_fmt(row.fica) for row in result.rows], _fmt(result.fica_spread))
    table.add_row(
        "[bold green]TAKE-HOME PAY[/bold green]",
        *[f"[bold green]{_fmt(row.take_home_pay)}[/bold green]" for row in result.rows],
        _fmt(result.take_home_spread),
    )
    table.add_row("  per month", *[_fmt(row.monthly_take_home) for row in result.rows], "", style="dim")
    table.add_row(
        "Effective Rate",
        *[format_percent(row.effective_tax_rate) for row in result.rows],
        format_percent(result.effective_rate_spread),
    )
    table.add_row("Take-home %", *[format_percent(row.take_home_percent) for row in result.rows], "")
    console.print(table)

    console.print(f"* Highest take-home: {result.highest_take_home}. Lowest: {result.lowest_take_home}.")


def render_states(console: Console, states: list[dict]) -> None:
    table = Table(box=box.SIMPLE, title="State Income Tax")
    table.add_column("Code", style="bold")
    table.add_column("State")
    table.add_column("Mode")
    for row in states:
        table.add_row(row["code"], row["name"], row["mode"].replace("_", " "))
    console.print(table)


def render_brackets(console: Console, brackets: list[dict], title: str) -> None:
    table = Table(box=box.SIMPLE, title=title)
    table.add_column("Rate", justify="right", style="bold")
    table.add_column("Taxable Income")
    for row in brackets:
        table.add_row(row["rate"], row["range"])
    console.print(table)
