"""REST API routes for battle report analysis."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, ConfigDict, Field

from ..deps import get_use_case
from ..transformers.analysis_transformer import (
    transform_analyses_to_frontend,
    transform_analysis_to_frontend,
)
from ...application.use_cases.analyze_reports import (
    AnalyzeProfileRequest,
    AnalyzeReportRequest,
    AnalyzeReportsUseCase,
)

router = APIRouter(prefix="/api/battle", tags=["battle"])


class InlineAnalysisRequest(BaseModel):
    """Request body for analyzing a parsed report supplied inline."""

    report_id: str = Field(
        ...,
        alias="reportId",
        description="Opaque report identifier echoed in the result",
        min_length=1,
    )
    parsed: Any = Field(
        default=None,
        description="Parsed report produced by the screenshot scanner",
    )

    model_config = ConfigDict(populate_by_name=True)


def error_body(code: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """Build the error envelope shared by every endpoint."""
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        }
    }


def _error(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error_body(code, message, details))


@router.get("/analyze")
async def list_analyses(
    profile_id: str = Query(..., alias="profileId", min_length=1, description="Owner profile id"),
    limit: int = Query(200, ge=1, le=200, description="Maximum reports to analyze"),
    use_case: AnalyzeReportsUseCase = Depends(get_use_case),
):
    """Analyze every stored battle report of a profile.

    Args:
        profile_id: Owner profile identifier
        limit: Maximum number of reports, newest first

    Returns:
        ``{"ok": true, "count": n, "analyses": [...]}``
    """
    result = await use_case.analyze_for_profile(
        AnalyzeProfileRequest(profile_id=profile_id, limit=limit)
    )
    if not result.success:
        raise _error(
            503,
            "SOURCE_UNAVAILABLE",
            result.error or "Report store unavailable",
            {"profileId": profile_id},
        )

    analyses = transform_analyses_to_frontend(result.analyses)
    return {"ok": True, "count": len(analyses), "analyses": analyses}


@router.get("/analyze/{report_id}")
async def get_analysis(
    report_id: str = Path(..., min_length=1),
    profile_id: Optional[str] = Query(None, alias="profileId", description="Owner profile id"),
    use_case: AnalyzeReportsUseCase = Depends(get_use_case),
):
    """Analyze a single stored battle report.

    When ``profileId`` is given, reports owned by another profile are
    reported as not found.

    Args:
        report_id: Report identifier
        profile_id: Optional owner profile identifier

    Returns:
        ``{"ok": true, "analysis": {...}}``
    """
    result = await use_case.analyze_one(
        AnalyzeReportRequest(report_id=report_id, profile_id=profile_id)
    )
    if result.not_found:
        raise _error(404, "NOT_FOUND", result.error or "Not found", {"reportId": report_id})
    if not result.success:
        raise _error(
            503,
            "SOURCE_UNAVAILABLE",
            result.error or "Report store unavailable",
            {"reportId": report_id},
        )

    return {"ok": True, "analysis": transform_analysis_to_frontend(result.analyses[0])}


@router.post("/analyze")
async def analyze_inline(
    request: InlineAnalysisRequest,
    use_case: AnalyzeReportsUseCase = Depends(get_use_case),
):
    """Analyze a parsed report posted in the request body.

    Args:
        request: Report id and parsed report

    Returns:
        ``{"ok": true, "analysis": {...}}``
    """
    try:
        analysis = use_case.analyze_inline(request.report_id, request.parsed or {})
    except ValueError as e:
        raise _error(400, "INVALID_REQUEST", str(e), {"reportId": request.report_id})
    except Exception as e:
        raise _error(500, "INTERNAL_ERROR", f"Error analyzing report: {str(e)}")

    return {"ok": True, "analysis": transform_analysis_to_frontend(analysis)}
