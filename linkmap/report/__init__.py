# File: linkmap/report/__init__.py
"""linkmap.report: file exports of a crawled link tree."""

from linkmap.report.json_report import render_json

__all__ = ["render_json"]
