"""Output formatters for analysis results."""

from sigsentry.output.console import print_library, print_results
from sigsentry.output.json_output import output_json

__all__ = ["print_results", "print_library", "output_json"]
