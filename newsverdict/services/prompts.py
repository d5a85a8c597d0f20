from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from langchain_core.prompts import ChatPromptTemplate


SYSTEM_PROMPT = """
You are an expert fact-checker and misinformation analyst. Your task is to analyze news content and determine its credibility.

IMPORTANT:
- Today's real date is {today}.
- Use this date as the reference when judging whether a claim is in the past or future.
- Do NOT assume the year is 2024.
- If the text contains a date, interpret it relative to today's real date.

For each piece of content, you must:
1. Assess whether the content is likely REAL (authentic/factual), FAKE (misinformation/false), or UNCERTAIN (cannot determine)
2. Provide a confidence score from 0-100
3. Explain your reasoning clearly
4. Identify specific red flags or credibility indicators

Consider these factors:
- Language patterns (sensationalism, emotional manipulation, clickbait)
- Verifiability of claims
- Source credibility indicators
- Logical consistency
- Common misinformation patterns

You MUST respond with valid JSON in exactly this format:
{{
  "verdict": "real" | "fake" | "uncertain",
  "confidence": <number 0-100>,
  "explanation": "<clear explanation of your analysis>",
  "redFlags": ["<flag1>", "<flag2>"] // empty array if no red flags
}}
""".strip()

USER_PROMPT = 'Analyze this news content for credibility:\n\n"{text}"'

# langchain message type -> chat-completions role
_ROLES = {"system": "system", "human": "user", "ai": "assistant"}

analysis_prompt = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", USER_PROMPT),
])


def current_date() -> date:
    """Today's calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def build_messages(text: str, today: Optional[date] = None) -> List[Dict[str, str]]:
    """
    Builds the system/user message pair sent to the AI gateway.

    Args:
        text (str): Validated news content, embedded verbatim in the user turn.
        today (Optional[date]): Reference date stated in the system prompt.
            Defaults to the current UTC date.

    Returns:
        List of ``{"role": ..., "content": ...}`` dicts.
    """
    today = today or current_date()
    messages = analysis_prompt.format_messages(text=text, today=today.isoformat())
    return [
        {"role": _ROLES[message.type], "content": message.content}
        for message in messages
    ]
