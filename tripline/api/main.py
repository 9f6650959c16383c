"""FastAPI 主应用：行程时间线生成"""

from __future__ import annotations

import logging
import os
import uuid

from dotenv import load_dotenv
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from tripline.api.schemas import HealthResponse, TimelineResponse
from tripline.domain.exceptions import DomainError
from tripline.domain.models import ErrorResponse
from tripline.infrastructure.logging import get_logger
from tripline.services.export_formatter import export_timeline_xml, render_timeline_markdown
from tripline.services.request_loader import TripRequest
from tripline.services.timeline_service import execute_timeline
from tripline.shared.exceptions import ToolError

_api_logger = logging.getLogger("tripline.api")

load_dotenv()  # 自动加载 .env 文件

app = FastAPI(
    title="tripline",
    version="1.0.0",
    docs_url="/docs" if os.getenv("ENABLE_DOCS", "false").lower() == "true" else None,
    redoc_url=None,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """注入安全响应头"""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(DomainError)
async def _domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    _api_logger.warning(f"{request.url.path}: {type(exc).__name__}: {exc}")
    body = ErrorResponse(code=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(ToolError)
async def _tool_error_handler(request: Request, exc: ToolError) -> JSONResponse:
    _api_logger.warning(f"{request.url.path}: {exc}")
    body = ErrorResponse(code="TOOL_ERROR", message=str(exc), details=[exc.tool])
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@app.post("/timeline", response_model=TimelineResponse)
def timeline(req: TripRequest):
    """生成并校验行程时间线"""
    trace_id = str(uuid.uuid4())[:8]
    result = execute_timeline(req, logger=get_logger(trace_id))
    built = result.timeline
    return TimelineResponse(
        status="done",
        timeline=built.model_dump(mode="json"),
        issues=result.issues,
        unresolved_ids=list(built.timeline.unresolved_ids),
        dropped_item_ids=list(built.dropped_item_ids),
        trace_id=trace_id,
    )


@app.post("/timeline/export")
def export(req: TripRequest, fmt: str = Query(default="xml", alias="format", pattern="^(xml|markdown)$")):
    """导出时间线：XML 边界格式或 Markdown"""
    trace_id = str(uuid.uuid4())[:8]
    result = execute_timeline(req, logger=get_logger(trace_id))
    headers = {"X-Trace-Id": trace_id}
    if fmt == "markdown":
        return PlainTextResponse(
            render_timeline_markdown(result.timeline), media_type="text/markdown", headers=headers
        )
    return Response(content=export_timeline_xml(result.timeline), media_type="application/xml", headers=headers)
