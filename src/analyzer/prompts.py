"""Prompt templates for the business analysis model call."""

import json

SYSTEM_PROMPT = (
    "You are a business analyst. Always respond with pure JSON only, "
    "no explanations or markdown."
)

ANALYSIS_PROMPT = """\
Return ONLY a JSON object analyzing this business. No other text or formatting. \
The response must be a raw JSON object matching this exact structure:

{{
  "scores": {{
    "marketFit": <0-10>,
    "growthPotential": <0-10>,
    "businessModel": <0-10>,
    "overall": <0-10>
  }},
  "analysis": {{
    "strengths": ["<strength 1>", "<strength 2>"],
    "improvements": ["<improvement 1>", "<improvement 2>"],
    "recommendations": ["<recommendation 1>", "<recommendation 2>"]
  }},
  "marketPosition": "<brief summary>"
}}

Business to analyze: {business}"""


def format_analysis_prompt(payload: dict[str, str]) -> str:
    """Embed the truncated content record into the analysis prompt."""
    return ANALYSIS_PROMPT.format(business=json.dumps(payload, ensure_ascii=False))
