"""Temp CSV table parsing & normalization engine."""

__version__ = "0.3.0"
