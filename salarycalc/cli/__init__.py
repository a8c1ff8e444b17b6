"""Salary Calc CLI."""
