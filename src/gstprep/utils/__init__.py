"""Utility functions for gstprep."""

from gstprep.utils.date_parser import normalize_date, parse_date
from gstprep.utils.amount_parser import parse_amount, format_amount
from gstprep.utils.natural_sort import code_sort_key

__all__ = ["normalize_date", "parse_date", "parse_amount", "format_amount", "code_sort_key"]
