"""Take Home CLI - Command-line interface for take-home pay and payroll tax."""

import json
import logging
import os

import click
from pydantic import ValidationError
from rich.console import Console

from takehome import __version__
from takehome.sdk import (
    FILING_STATUSES,
    PERIOD_DIVISORS,
    BonusTaxInput,
    EmployerCostInput,
    HourlyInput,
    Job,
    MultipleJobsInput,
    PayRiseInput,
    SalaryComparisonInput,
    SalaryInput,
    SelfEmploymentInput,
    SettingsError,
    TaxRulesNotFoundError,
    calculate_bonus_tax,
    calculate_employer_cost,
    calculate_hourly_salary,
    calculate_multiple_jobs,
    calculate_pay_rise,
    calculate_salary,
    calculate_self_employment_tax,
    compare_salaries,
    federal_bracket_info,
    get_all_states,
    get_setting,
    load_tax_rules,
    parse_salary,
    solve_gross_for_net,
)

from .renderers import (
    render_bonus_tax,
    render_brackets,
    render_comparison,
    render_employer_cost,
    render_gross_for_net,
    render_hourly,
    render_multiple_jobs,
    render_pay_rise,
    render_salary_result,
    render_self_employment,
    render_states,
)
from .settings_commands import settings as settings_group

DEFAULT_PERIODS = ("yearly", "monthly", "biweekly")


class SalaryAmount(click.ParamType):
    """Dollar amount accepting "75000", "$75,000" or "75k"."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return float(value)
        amount = parse_salary(value)
        if amount is None:
            self.fail(f"'{value}' is not a dollar amount", param, ctx)
        return amount


AMOUNT = SalaryAmount()


def _defaults(state, filing_status, year):
    """Fill unset options from settings.json."""
    try:
        state = state or get_setting("default_state", "TX")
        filing_status = filing_status or get_setting("default_filing_status", "single")
        year = year or get_setting("tax_year")
    except SettingsError as e:
        raise click.ClickException(str(e))
    if filing_status not in FILING_STATUSES:
        raise click.ClickException(
            f"Invalid default_filing_status '{filing_status}' in settings. "
            f"Must be one of: {', '.join(FILING_STATUSES)}"
        )
    return state.upper(), filing_status, year


def _load_rules(year):
    try:
        return load_tax_rules(year)
    except (TaxRulesNotFoundError, SettingsError, ValueError) as e:
        raise click.ClickException(str(e))


def _validated(model, **kwargs):
    try:
        return model(**kwargs)
    except ValidationError as e:
        raise click.ClickException(f"Invalid input: {e}")


def _echo_json(data):
    click.echo(json.dumps(data, indent=2))


def state_option(f):
    return click.option("--state", "-s", help="Two-letter state code (default: settings or TX)")(f)


def filing_status_option(f):
    return click.option(
        "--filing-status", "-f",
        type=click.Choice(FILING_STATUSES),
        help="Filing status (default: settings or single)",
    )(f)


def year_option(f):
    return click.option("--year", "-y", help="Tax year (default: settings or latest available)")(f)


def format_option(f):
    return click.option(
        "--format", "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Output format (default: text)",
    )(f)


@click.group()
@click.version_option(version=__version__, prog_name="take-home")
def cli():
    """Take Home - US take-home pay and payroll tax calculator.

    Federal and state income tax, Social Security and Medicare for a
    salary, plus net-to-gross, employer cost, self-employment, bonus,
    multiple-job withholding, pay rises, hourly wages and side-by-side
    salary comparisons.

    Defaults are read from (in order):

    \b
    1. Command-line options
    2. settings.json (see 'take-home settings show')
    3. Built-in defaults: TX, single, latest tax year

    Amounts accept "75000", "$75,000" or "75k".
    """
    pass


cli.add_command(settings_group)


@cli.command("salary")
@click.argument("gross", type=AMOUNT)
@state_option
@filing_status_option
@click.option("--bonus", type=AMOUNT, default=0, help="Annual bonus added to gross")
@click.option("--401k", "retirement_401k", type=AMOUNT, default=0, help="Annual pre-tax 401(k) contribution")
@click.option("--hsa", type=AMOUNT, default=0, help="Annual pre-tax HSA contribution")
@click.option("--local-tax", is_flag=True, help="Include local income tax (NYC, MD counties)")
@year_option
@click.option(
    "--period", "-p", "periods",
    type=click.Choice(list(PERIOD_DIVISORS)),
    multiple=True,
    help="Pay period column to show (repeatable; default: yearly, monthly, biweekly)",
)
@format_option
def salary(gross, state, filing_status, bonus, retirement_401k, hsa, local_tax, year, periods, output_format):
    """Show take-home pay for a GROSS annual salary.

    Examples:

    \b
      take-home salary 85000
      take-home salary 120k --state CA --401k 23000
      take-home salary 150000 -s NY --local-tax --period monthly
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    salary_input = _validated(
        SalaryInput,
        gross_salary=gross,
        bonus=bonus,
        filing_status=filing_status,
        state=state,
        retirement_401k=retirement_401k,
        hsa_contribution=hsa,
        include_local_tax=local_tax,
        tax_year=rules.year,
    )
    result = calculate_salary(salary_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_salary_result(Console(), result, list(periods or DEFAULT_PERIODS))


@cli.command("net-to-gross")
@click.argument("target", type=AMOUNT)
@state_option
@filing_status_option
@click.option("--monthly", is_flag=True, help="TARGET is monthly take-home rather than annual")
@click.option("--local-tax", is_flag=True, help="Include local income tax")
@year_option
@format_option
def net_to_gross(target, state, filing_status, monthly, local_tax, year, output_format):
    """Find the gross salary needed for a TARGET take-home pay.

    Examples:

    \b
      take-home net-to-gross 60000
      take-home net-to-gross 5000 --monthly --state CA
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    annual_target = target * PERIOD_DIVISORS["monthly"] if monthly else target
    result = solve_gross_for_net(
        annual_target,
        filing_status,
        state,
        rules=rules,
        include_local_tax=local_tax,
    )

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_gross_for_net(Console(), result)


@cli.command("employer-cost")
@click.argument("gross", type=AMOUNT)
@click.option("--match", "match_percent", type=float, default=0, help="Employer 401(k) match, percent of salary")
@click.option("--state", "-s", help="Two-letter state code (informational)")
@year_option
@format_option
def employer_cost(gross, match_percent, state, year, output_format):
    """Show what a GROSS salary costs the employer.

    Adds the employer halves of Social Security and Medicare, federal and
    state unemployment tax, and an optional 401(k) match.
    """
    _, _, year = _defaults(state, None, year)
    rules = _load_rules(year)

    cost_input = _validated(
        EmployerCostInput,
        gross_salary=gross,
        state=state,
        employer_401k_match=match_percent,
        tax_year=rules.year,
    )
    result = calculate_employer_cost(cost_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_employer_cost(Console(), result)


@cli.command("self-employment")
@click.argument("net_earnings", type=AMOUNT)
@filing_status_option
@year_option
@format_option
def self_employment(net_earnings, filing_status, year, output_format):
    """Show self-employment tax on NET_EARNINGS."""
    _, filing_status, year = _defaults(None, filing_status, year)
    rules = _load_rules(year)

    se_input = _validated(
        SelfEmploymentInput,
        net_earnings=net_earnings,
        filing_status=filing_status,
        tax_year=rules.year,
    )
    result = calculate_self_employment_tax(se_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_self_employment(Console(), result)


@cli.command("bonus")
@click.argument("base_salary", type=AMOUNT)
@click.argument("bonus_amount", type=AMOUNT)
@state_option
@filing_status_option
@click.option("--401k", "retirement_401k", type=AMOUNT, default=0, help="Annual pre-tax 401(k) contribution")
@year_option
@format_option
def bonus(base_salary, bonus_amount, state, filing_status, retirement_401k, year, output_format):
    """Compare tax withheld on a bonus with tax actually owed.

    Employers withhold federal tax on bonuses at the flat supplemental
    rate. The real liability is the increase in annual tax.

    \b
      take-home bonus 120000 15000 --state CA
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    bonus_input = _validated(
        BonusTaxInput,
        base_salary=base_salary,
        bonus=bonus_amount,
        filing_status=filing_status,
        state=state,
        retirement_401k=retirement_401k,
        tax_year=rules.year,
    )
    result = calculate_bonus_tax(bonus_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_bonus_tax(Console(), result)


@cli.command("multiple-jobs")
@click.argument("salaries", type=AMOUNT, nargs=-1, required=True)
@state_option
@filing_status_option
@year_option
@format_option
def multiple_jobs(salaries, state, filing_status, year, output_format):
    """Compare withholding across several jobs with the combined liability.

    \b
      take-home multiple-jobs 90000 40000
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    jobs_input = _validated(
        MultipleJobsInput,
        jobs=[Job(name=f"Job {i}", salary=amount) for i, amount in enumerate(salaries, 1)],
        filing_status=filing_status,
        state=state,
        tax_year=rules.year,
    )
    result = calculate_multiple_jobs(jobs_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_multiple_jobs(Console(), result)


@cli.command("pay-rise")
@click.argument("current", type=AMOUNT)
@click.argument("rise", type=AMOUNT)
@click.option(
    "--type", "rise_type",
    type=click.Choice(["percentage", "amount", "new_salary"]),
    default="percentage",
    help="How RISE is stated (default: percentage)",
)
@state_option
@filing_status_option
@click.option("--401k", "retirement_401k", type=AMOUNT, default=0, help="Annual pre-tax 401(k) contribution")
@year_option
@format_option
def pay_rise(current, rise, rise_type, state, filing_status, retirement_401k, year, output_format):
    """Show how much of a RISE on a CURRENT salary reaches take-home pay.

    \b
      take-home pay-rise 50000 10
      take-home pay-rise 80k 5000 --type amount --state CA
      take-home pay-rise 80k 95000 --type new_salary
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    rise_input = _validated(
        PayRiseInput,
        current_salary=current,
        rise_type=rise_type,
        rise_value=rise,
        retirement_401k=retirement_401k,
        filing_status=filing_status,
        state=state,
        tax_year=rules.year,
    )
    result = calculate_pay_rise(rise_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_pay_rise(Console(), result)


@cli.command("hourly")
@click.argument("rate", type=AMOUNT)
@click.option("--hours", type=float, default=40, help="Hours per week (default: 40)")
@click.option("--weeks", type=float, default=52, help="Weeks worked per year (default: 52)")
@state_option
@filing_status_option
@year_option
@format_option
def hourly(rate, hours, weeks, state, filing_status, year, output_format):
    """Convert an hourly RATE to an annual salary and its take-home pay.

    \b
      take-home hourly 25
      take-home hourly 40 --hours 30 --weeks 48 --state NY
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    hourly_input = _validated(
        HourlyInput,
        hourly_rate=rate,
        hours_per_week=hours,
        weeks_per_year=weeks,
        filing_status=filing_status,
        state=state,
        tax_year=rules.year,
    )
    result = calculate_hourly_salary(hourly_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_hourly(Console(), result)


def _comparison_entries(values, state, filing_status):
    """Parse SALARY[:STATE[:FILING_STATUS]] values into labelled entries."""
    entries = []
    for index, value in enumerate(values):
        parts = value.split(":")
        if len(parts) > 3:
            raise click.BadParameter(f"'{value}' is not SALARY[:STATE[:FILING_STATUS]]", param_hint="ENTRIES")
        amount = parse_salary(parts[0])
        if amount is None:
            raise click.BadParameter(f"'{parts[0]}' is not a dollar amount", param_hint="ENTRIES")
        entry_state = parts[1] if len(parts) > 1 and parts[1] else state
        entry_status = parts[2] if len(parts) > 2 and parts[2] else filing_status
        if entry_status not in FILING_STATUSES:
            raise click.BadParameter(
                f"Invalid filing status '{entry_status}'. Must be one of: {', '.join(FILING_STATUSES)}",
                param_hint="ENTRIES",
            )
        entries.append(dict(
            label=f"Salary {chr(ord('A') + index)}",
            salary=amount,
            state=entry_state,
            filing_status=entry_status,
        ))
    return entries


@cli.command("compare")
@click.argument("entries", nargs=-1, required=True)
@state_option
@filing_status_option
@year_option
@format_option
def compare(entries, state, filing_status, year, output_format):
    """Compare take-home pay for two to four salaries side by side.

    Each entry is SALARY[:STATE[:FILING_STATUS]]; missing parts use the
    --state and --filing-status defaults.

    \b
      take-home compare 90k:TX 100k:CA
      take-home compare 80000 85000:NY 95000:WA:married_jointly
    """
    state, filing_status, year = _defaults(state, filing_status, year)
    rules = _load_rules(year)

    comparison_input = _validated(
        SalaryComparisonInput,
        entries=_comparison_entries(entries, state, filing_status),
        tax_year=rules.year,
    )
    result = compare_salaries(comparison_input, rules)

    if output_format == "json":
        _echo_json(result.model_dump())
        return

    render_comparison(Console(), result)


@cli.command("states")
@click.option(
    "--mode",
    type=click.Choice(["no_income_tax", "flat", "progressive"]),
    help="Only list states with this kind of income tax",
)
@format_option
def states(mode, output_format):
    """List states and how each taxes income."""
    rules = _load_rules(None)
    rows = get_all_states(rules.states, mode=mode)

    if output_format == "json":
        _echo_json(rows)
        return

    render_states(Console(), rows)


@cli.command("brackets")
@filing_status_option
@year_option
@format_option
def brackets(filing_status, year, output_format):
    """Show federal income tax brackets."""
    _, filing_status, year = _defaults(None, filing_status, year)
    rules = _load_rules(year)
    rows = federal_bracket_info(filing_status, rules.federal)

    if output_format == "json":
        _echo_json(rows)
        return

    render_brackets(Console(), rows, f"Federal Brackets: {filing_status} ({rules.year})")


def _configure_logging():
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main():
    """Entry point for the CLI."""
    _configure_logging()
    cli()


if __name__ == "__main__":
    main()
