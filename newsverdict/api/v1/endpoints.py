# newsverdict/api/v1/endpoints.py
import logging
from fastapi import APIRouter, Depends, Response
from newsverdict.services.analyzer import NewsAnalyzer
from newsverdict.services.gateway import AIGatewayClient
from newsverdict.core.errors import AnalysisError, UpstreamError
from newsverdict.core.models import AnalyzeRequest, AnalysisResult, ErrorResponse
from newsverdict.core.config import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix=config.API_PREFIX, tags=["v1"])


def get_analyzer() -> NewsAnalyzer:
    """Builds the analyzer from process configuration. Overridden in tests."""
    return NewsAnalyzer(gateway=AIGatewayClient.from_config())


@router.options("/analyze-news")
async def analyze_news_preflight() -> Response:
    return Response(status_code=200)


@router.post(
    "/analyze-news",
    response_model=AnalysisResult,
    responses={
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze_news(
    request: AnalyzeRequest,
    analyzer: NewsAnalyzer = Depends(get_analyzer),
) -> AnalysisResult:
    """
    Main endpoint: Analyze a pasted news snippet for credibility.
    Returns a sanitized real/fake/uncertain verdict.
    """
    try:
        return await analyzer.run(request.text)

    except AnalysisError:
        raise  # Rendered by the AnalysisError handler
    except Exception as e:
        logger.error(f"Error in analyze-news endpoint: {str(e)}", exc_info=True)
        raise UpstreamError()
