"""CLI renderers - Rich output for calculator results."""

from .breakdown_renderer import (
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

__all__ = [
    "render_bonus_tax",
    "render_brackets",
    "render_comparison",
    "render_employer_cost",
    "render_gross_for_net",
    "render_hourly",
    "render_multiple_jobs",
    "render_pay_rise",
    "render_salary_result",
    "render_self_employment",
    "render_states",
]
