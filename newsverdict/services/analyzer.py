import logging
from datetime import date
from typing import Any, Optional

from newsverdict.core.errors import InvalidRequestError
from newsverdict.core.models import AnalysisResult
from newsverdict.services.gateway import AIGatewayClient
from newsverdict.services.prompts import build_messages
from newsverdict.services.sanitizer import sanitize_reply

logger = logging.getLogger(__name__)


def validate_text(text: Any) -> str:
    """
    Accepts only a string whose trimmed form is non-empty.

    Raises:
        InvalidRequestError: text is missing, not a string, or blank.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidRequestError()
    return text


class NewsAnalyzer:
    """
    Analysis handler: validate, prompt, call the gateway once, sanitize.
    """

    def __init__(self, gateway: AIGatewayClient):
        self.gateway = gateway

    async def run(self, text: Any, today: Optional[date] = None) -> AnalysisResult:
        """
        Main method to run the analysis.

        Args:
            text (Any): Raw ``text`` field from the request body.
            today (Optional[date]): Reference date for the prompt.

        Returns:
            AnalysisResult: The sanitized verdict.
        """
        text = validate_text(text)
        logger.info(f"Analyzing news content: {text[:100]}...")

        messages = build_messages(text, today=today)
        reply = await self.gateway.complete(messages)
        logger.info(f"AI response: {reply}")

        result = sanitize_reply(reply)
        logger.info(f"Returning analysis result: {result}")
        return result
