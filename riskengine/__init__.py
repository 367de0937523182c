"""Fraud and account-risk decision engine."""

__version__ = "0.1.0"
