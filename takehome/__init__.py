"""Take Home - US take-home pay and payroll tax calculations."""

__version__ = "0.3.0"
