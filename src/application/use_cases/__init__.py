"""Application use cases."""

from .analyze_reports import (
    AnalyzeProfileRequest,
    AnalyzeReportRequest,
    AnalyzeReportsResult,
    AnalyzeReportsUseCase,
)

__all__ = [
    "AnalyzeProfileRequest",
    "AnalyzeReportRequest",
    "AnalyzeReportsResult",
    "AnalyzeReportsUseCase",
]
