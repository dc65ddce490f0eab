# src/esg_dashboard/insights/llm_insights.py
from __future__ import annotations

import logging
import os
import re
from typing import Any, List, Mapping, Optional

from openai import OpenAI

from esg_dashboard.config import DEFAULT_INSIGHT_LIMIT, DEFAULT_MODEL
from esg_dashboard.insights.prompts import build_insight_messages

logger = logging.getLogger(__name__)

# Leading bullets, list numbers and their padding: "- ", "• ", "3. "
BULLET_PREFIX_RE = re.compile(r"^[-•0-9.\s]+")


def parse_insight_lines(text: Optional[str], limit: int = DEFAULT_INSIGHT_LIMIT) -> List[str]:
    """
    Turn a free-text model answer into at most `limit` clean bullet lines.
    """
    if not text:
        return []

    lines = (BULLET_PREFIX_RE.sub("", line).strip() for line in text.split("\n"))
    return [line for line in lines if line][:limit]


# ======================================================================
# Public insight requester
# ======================================================================

def generate_insights(
    system_prompt: str,
    payload: Mapping[str, Any],
    *,
    model: str = DEFAULT_MODEL,
    limit: int = DEFAULT_INSIGHT_LIMIT,
) -> List[str]:
    """
    Ask the model for bullet-point insights on an ESG payload.

    Returns [] when the API key is missing or anything goes wrong with the
    call; callers decide on fallbacks.
    """

    # ------------------------------------------------------------------
    # 0) Check for API key (.env should load it)
    # ------------------------------------------------------------------
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.warning("llm: insights disabled (missing OPENAI_API_KEY).")
        return []

    client = OpenAI(api_key=api_key)
    logger.info("llm: querying model %s", model)

    # ------------------------------------------------------------------
    # 1) Query model
    # ------------------------------------------------------------------
    try:
        completion = client.chat.completions.create(
            model=model,
            messages=build_insight_messages(system_prompt, payload),
        )
    except Exception as exc:
        logger.error("llm: API error: %s", exc)
        return []

    # ------------------------------------------------------------------
    # 2) Extract text response
    # ------------------------------------------------------------------
    try:
        content = completion.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        logger.error("llm: invalid API response structure")
        return []

    if not content:
        logger.error("llm: empty response from model")
        return []

    insights = parse_insight_lines(content, limit)
    logger.debug("llm: %d insight lines parsed", len(insights))
    return insights
