"""Text and JSON rendering of contract validation reports."""

from .payload import build_report_payload
from .text import exit_code_for, render_results, render_summary

__all__ = ["build_report_payload", "exit_code_for", "render_results", "render_summary"]
