"""WebSocket handlers for batch analysis with progress updates."""

import asyncio
import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from ..transformers.analysis_transformer import transform_analyses_to_frontend
from ...application.ports.report_source import ProgressCallbackPort
from ...application.use_cases.analyze_reports import (
    AnalyzeProfileRequest,
    AnalyzeReportsUseCase,
)
from ...domain.value_objects.types import ProgressStatus

logger = logging.getLogger(__name__)


class WebSocketProgressCallback(ProgressCallbackPort):
    """Progress callback that sends updates via WebSocket."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket

    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Send progress update via WebSocket."""
        await self._websocket.send_json({
            "status": status,
            "progress": progress,
            "message": message,
        })


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({
        "status": ProgressStatus.ERROR.value,
        "progress": 0,
        "message": message,
    })


async def handle_analysis_websocket(websocket: WebSocket, use_case: AnalyzeReportsUseCase) -> None:
    """Handle WebSocket connection for profile-wide analysis.

    Expected client message format:
    {
        "action": "analyze",
        "profileId": "profile-123",
        "limit": 200
    }

    Server sends progress updates:
    {
        "status": "connecting" | "processing" | "completed" | "error",
        "progress": 0-100,
        "message": "Human-readable status"
    }

    Args:
        websocket: FastAPI WebSocket connection
        use_case: Analysis use case bound to the app's report source
    """
    await websocket.accept()

    try:
        data = await websocket.receive_json()

        action = data.get("action") if isinstance(data, dict) else None
        if action != "analyze":
            await _send_error(websocket, f"Unknown action: {action}")
            return

        profile_id = data.get("profileId")
        if not profile_id:
            await _send_error(websocket, "profileId is required")
            return

        limit = data.get("limit", 200)
        if not isinstance(limit, int) or isinstance(limit, bool) or not 1 <= limit <= 200:
            await _send_error(websocket, "limit must be an integer between 1 and 200")
            return

        await websocket.send_json({
            "status": ProgressStatus.CONNECTING.value,
            "progress": 0,
            "message": "Initializing...",
        })

        progress_callback = WebSocketProgressCallback(websocket)
        result = await use_case.analyze_for_profile(
            AnalyzeProfileRequest(profile_id=str(profile_id), limit=limit),
            progress_callback,
        )

        if not result.success:
            await _send_error(websocket, result.error or "Failed to analyze reports")
            return

        analyses = transform_analyses_to_frontend(result.analyses)
        logger.info("Sending %d analyses for profile %s", len(analyses), profile_id)

        await websocket.send_json({
            "status": ProgressStatus.COMPLETED.value,
            "progress": 100,
            "message": "Analysis ready!",
            "count": len(analyses),
            "analyses": analyses,
        })

        # Keep connection alive briefly for client to receive
        await asyncio.sleep(0.1)

    except WebSocketDisconnect:
        logger.info("Client disconnected during analysis")
    except json.JSONDecodeError:
        await _send_error(websocket, "Invalid JSON message")
    except Exception as e:
        logger.exception("WebSocket analysis failed")
        try:
            await _send_error(websocket, f"Error: {str(e)}")
        except (RuntimeError, WebSocketDisconnect):
            logger.debug("Could not deliver error; socket already closed")
    finally:
        try:
            await websocket.close()
        except (RuntimeError, WebSocketDisconnect):
            logger.debug("WebSocket already closed")
