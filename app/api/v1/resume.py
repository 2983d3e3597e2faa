import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.core.rate_limit import rate_limit
from app.schemas.analyze import AnalyzeRequest, AnalyzeResult
from app.services.analyze_service import ResponseParseError, analyze

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/resume/analyze", response_model=AnalyzeResult)
@rate_limit()
async def resume_analyze(request: Request, payload: AnalyzeRequest):
    _ = request
    if not payload.resume_text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="resumeText is required.")
    if not payload.job_description.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="jobDescription is required.")

    try:
        result = analyze(payload.resume_text, payload.job_description, payload.raw_completion)
    except ResponseParseError as exc:
        logger.warning("resume_analyze_parse_failed code=%s raw_len=%s", exc.code, len(payload.raw_completion))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return JSONResponse(content=result.to_wire())
