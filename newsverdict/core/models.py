from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Literal

Verdict = Literal["real", "fake", "uncertain"]


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Left untyped so the request validator, not schema parsing, rejects bad input.
    text: Any = Field(None, description="The news content to analyze.")


class AnalysisResult(BaseModel):
    """Sanitized verdict returned to the client. Always fully populated."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    verdict: Verdict = Field(..., description="real | fake | uncertain")
    confidence: int = Field(..., ge=0, le=100, description="Confidence score (0-100).")
    explanation: str = Field(..., description="Reasoning behind the verdict.")
    red_flags: List[str] = Field(
        default_factory=list,
        alias="redFlags",
        description="Specific credibility concerns found in the text."
    )


class ErrorResponse(BaseModel):
    error: str
