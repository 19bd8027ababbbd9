"""Reporting Module."""

from tickstats.report.writer import ReportWriter, format_report, render_summary

__all__ = [
    "ReportWriter",
    "format_report",
    "render_summary",
]
