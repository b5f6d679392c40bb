"""Extraction and normalization pipeline for SmartCredit 3B credit reports."""

__version__ = "0.1.0"
