"""Use case for analyzing stored battle reports."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Dict, List

from squad.analyzer import BattleAnalysis, analyze_parsed_report
from squad.catalog import HeroIndex

from ..ports.report_source import BattleReportSourcePort, ProgressCallbackPort

logger = logging.getLogger(__name__)

# Thread pool for running blocking I/O operations
_executor = ThreadPoolExecutor(max_workers=4)


@dataclass
class AnalyzeReportRequest:
    """Request to analyze one stored report."""

    report_id: str
    profile_id: str | None = None


@dataclass
class AnalyzeProfileRequest:
    """Request to analyze every stored report of a profile."""

    profile_id: str
    limit: int = 200


@dataclass
class AnalyzeReportsResult:
    """Result of report analysis."""

    success: bool
    analyses: List[BattleAnalysis] = field(default_factory=list)
    error: str | None = None
    not_found: bool = False
    metadata: Dict[str, Any] | None = None


class AnalyzeReportsUseCase:
    """Use case for analyzing battle reports.

    This orchestrates the process of:
    1. Fetching stored reports from the report source
    2. Checking report ownership
    3. Running the analyzer against the hero catalog
    """

    def __init__(
        self,
        report_source: BattleReportSourcePort,
        hero_index: HeroIndex | None = None,
    ):
        self._report_source = report_source
        self._hero_index = hero_index

    def analyze_inline(self, report_id: str, parsed: Any) -> BattleAnalysis:
        """Analyze a parsed report supplied by the caller."""
        return analyze_parsed_report(report_id, parsed, self._hero_index)

    async def analyze_one(self, request: AnalyzeReportRequest) -> AnalyzeReportsResult:
        """Fetch and analyze a single report.

        Args:
            request: Report analysis request

        Returns:
            Result holding one analysis, or a not-found/error result
        """
        loop = asyncio.get_running_loop()
        try:
            fetch_func = partial(self._report_source.get_report, request.report_id)
            report = await loop.run_in_executor(_executor, fetch_func)
        except Exception as e:
            logger.exception("Failed to fetch report %s", request.report_id)
            return AnalyzeReportsResult(success=False, error=str(e))

        # Reports owned by another profile look exactly like missing ones.
        if report is None or (request.profile_id and report.profile_id != request.profile_id):
            return AnalyzeReportsResult(
                success=False,
                not_found=True,
                error=f"Report '{request.report_id}' not found.",
            )

        analysis = analyze_parsed_report(report.id, report.parsed or {}, self._hero_index)
        return AnalyzeReportsResult(
            success=True,
            analyses=[analysis],
            metadata={"profile_id": report.profile_id},
        )

    async def analyze_for_profile(
        self,
        request: AnalyzeProfileRequest,
        progress_callback: ProgressCallbackPort | None = None,
    ) -> AnalyzeReportsResult:
        """Fetch and analyze all reports for a profile.

        Args:
            request: Profile analysis request
            progress_callback: Optional callback for progress updates

        Returns:
            Result holding one analysis per stored report
        """
        loop = asyncio.get_running_loop()

        try:
            if progress_callback:
                await progress_callback.report_progress(
                    10, "Loading battle reports...", "processing"
                )

            fetch_func = partial(
                self._report_source.list_reports,
                request.profile_id,
                limit=request.limit,
            )
            reports = await loop.run_in_executor(_executor, fetch_func)

            if progress_callback:
                await progress_callback.report_progress(
                    30, f"Found {len(reports)} reports to analyze...", "processing"
                )

            analyses: List[BattleAnalysis] = []
            total = len(reports) or 1
            for idx, report in enumerate(reports, start=1):
                analyses.append(
                    analyze_parsed_report(report.id, report.parsed or {}, self._hero_index)
                )
                if progress_callback:
                    await progress_callback.report_progress(
                        30 + int(60 * idx / total),
                        f"Analyzed report {idx} of {len(reports)}",
                        "processing",
                    )

            if progress_callback:
                await progress_callback.report_progress(
                    95, "Finalizing analyses...", "processing"
                )

            return AnalyzeReportsResult(
                success=True,
                analyses=analyses,
                metadata={
                    "profile_id": request.profile_id,
                    "count": len(analyses),
                },
            )

        except Exception as e:
            logger.exception("Failed to analyze reports for profile %s", request.profile_id)
            if progress_callback:
                await progress_callback.report_progress(
                    0, f"Error: {str(e)}", "error"
                )
            return AnalyzeReportsResult(
                success=False,
                error=str(e),
            )
