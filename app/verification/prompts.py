"""
Prompt template for incident report verification.

The model is asked for a bare JSON object with exactly two fields so the
response can be parsed strictly; anything else takes the degraded path.
"""

VERIFICATION_PROMPT = """Analyze this incident report and provide an assessment.
Respond with ONLY a JSON object containing exactly two fields, "assessment" and "severity", formatted as in this example (replace the content with your own analysis):

{{
  "assessment": "This appears to be a genuine incident report describing a concerning situation. The details provided are specific and consistent.",
  "severity": "medium"
}}

"severity" must be one of "low", "medium" or "high", based on these criteria:
- low: Minor incidents with no immediate danger
- medium: Serious incidents requiring attention but not immediate danger
- high: Severe incidents involving immediate danger or harm

Do not wrap the JSON in markdown and do not add any text before or after it.

Report to analyze: "{description}\""""


def build_verification_prompt(description: str) -> str:
    """Embed a report description into the verification prompt."""
    return VERIFICATION_PROMPT.format(description=description)
