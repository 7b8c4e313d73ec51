"""Cleaning utilities for the record source.

Provides functions to rename source columns, coerce dates and amounts, and
turn untyped rows into `InvoiceRecord` objects.
"""
