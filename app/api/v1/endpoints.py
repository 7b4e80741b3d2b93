# app/api/v1/endpoints.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from app.services.llm_wrapper import LLMWrapper
from app.services.news_checker import NewsCheckAgent
from app.core.models import CheckNewsRequest, ClassificationResult
from app.core.config import config

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix=config.API_PREFIX, tags=["v1"])


def get_news_checker(request: Request) -> Optional[NewsCheckAgent]:
    """
    Returns the app's NewsCheckAgent, building it on first use.
    Returns None when no model client can be built; the endpoint reports
    that only after the request itself has been validated.
    Override this dependency to inject a different model client.
    """
    checker = getattr(request.app.state, "news_checker", None)
    if checker is None:
        try:
            checker = NewsCheckAgent(LLMWrapper(config).get_llm())
        except ValueError as e:
            logger.error(f"Model client unavailable: {str(e)}")
            return None
        request.app.state.news_checker = checker
    return checker


@router.post("/check-news", response_model=ClassificationResult)
async def check_news(
    request: CheckNewsRequest,
    checker: Optional[NewsCheckAgent] = Depends(get_news_checker),
) -> ClassificationResult:
    """
    Main endpoint: classify a news text or URL as fake, real or uncertain.
    """
    missing = request.missing_field()
    if missing:
        raise HTTPException(status_code=400, detail=f"{missing} is required")

    if checker is None:
        raise HTTPException(status_code=500, detail="Model client is not configured")

    logger.info(f"Received check-news request of type: {request.type.value}")

    try:
        return await checker.run(request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"News check failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )
