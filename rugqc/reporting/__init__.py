"""
Inspection report aggregation and PDF rendering.
"""

from rugqc.reporting.aggregator import ReportModelBuilder, build_report_model
from rugqc.reporting.pdf_generator import InspectionReport, generate_report

__all__ = [
    "ReportModelBuilder",
    "build_report_model",
    "InspectionReport",
    "generate_report",
]
