"""Salary Calc - five insurances and one fund, with cumulative income tax withholding."""

__version__ = "0.3.0"
