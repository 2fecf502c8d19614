"""Withholding across multiple concurrent jobs.

Each employer withholds as though its job were the only income: it applies
the full standard deduction and the low brackets again, and withholds
Social Security up to the wage base on its own wages. The liability on
combined income is usually higher for income tax and lower for Social
Security.
"""

from typing import Optional

from .salary import calculate_salary
from .schemas import JobWithholding, MultipleJobsInput, MultipleJobsResult, SalaryInput
from .taxes import TaxRules, get_state_status, load_tax_rules, social_security, warn_unknown_state


def calculate_multiple_jobs(jobs_input: MultipleJobsInput, rules: Optional[TaxRules] = None) -> MultipleJobsResult:
    """Compare per-employer withholding with tax owed on combined income."""
    if rules is None:
        rules = load_tax_rules(jobs_input.tax_year)
    config = rules.federal
    state_status = get_state_status(jobs_input.state, rules.states)
    if state_status == "unknown":
        warn_unknown_state(jobs_input.state)

    def salary_result(gross: float):
        salary_input = SalaryInput(
            gross_salary=gross,
            filing_status=jobs_input.filing_status,
            state=jobs_input.state,
        )
        return calculate_salary(salary_input, rules, warn=False).yearly

    rows = []
    for job in jobs_input.jobs:
        alone = salary_result(job.salary)
        job_ss = social_security(job.salary, config)
        # Employers only withhold the base Medicare rate at these wages
        job_medicare = job.salary * config.medicare.rate
        withheld = alone.federal_tax + alone.state_tax + job_ss + job_medicare
        rows.append(JobWithholding(
            name=job.name,
            salary=job.salary,
            federal_tax=alone.federal_tax,
            state_tax=alone.state_tax,
            social_security=job_ss,
            medicare=job_medicare,
            total_withheld=withheld,
            take_home=job.salary - withheld,
        ))

    total_income = sum(job.salary for job in jobs_input.jobs)
    combined = salary_result(total_income)

    total_federal = sum(row.federal_tax for row in rows)
    total_state = sum(row.state_tax for row in rows)
    total_ss = sum(row.social_security for row in rows)
    total_fica = total_ss + sum(row.medicare for row in rows)

    return MultipleJobsResult(
        jobs=rows,
        total_income=total_income,
        total_federal_withheld=total_federal,
        total_state_withheld=total_state,
        total_fica_withheld=total_fica,
        total_withheld=total_federal + total_state + total_fica,
        actual_federal_tax=combined.federal_tax,
        actual_state_tax=combined.state_tax,
        actual_fica=combined.social_security + combined.medicare,
        federal_shortfall=combined.federal_tax - total_federal,
        state_shortfall=combined.state_tax - total_state,
        excess_social_security=max(0.0, total_ss - combined.social_security),
        combined_take_home=combined.take_home_pay,
        tax_year=config.year,
        state=jobs_input.state,
        state_status=state_status,
    )
