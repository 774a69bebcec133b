import json
from typing import Optional, Sequence

from models import Round
from analytics.stats import PerformanceComparison


# ================================================================
# Shared prompt fragments
# ================================================================

_PREAMBLE = "You are a specialized golf scorecard analyzer. I will show you a golf scorecard image."

_FIELD_INSTRUCTIONS = """
Carefully extract the following with high precision:
1. Course name: look for the course logo or name at the top of the card.
2. Tee box: the tee color or name the player's row was played from, if marked.
3. Date: look for a date field, typically at the top. If not shown, use an empty string.
4. For each hole (1-18):
   - Score: the HANDWRITTEN number in the player's score row (NOT the "Par" row).
     This row usually has the player's name written on the left.
   - Putts: the HANDWRITTEN number in the "Putts" row, usually below the score row.
   - Fairway: "hit" if the fairway row is checked (a tick, dot or similar mark),
     "left" or "right" if an arrow or letter shows a miss to that side,
     otherwise an empty string. Par 3s normally have no fairway mark.
   - Green in regulation: true when (score - putts) <= 2, otherwise false."""

_SCORING_FORMAT_INSTRUCTIONS = """
IMPORTANT SCORING INSTRUCTIONS:
- DO NOT read from the "Par" row; it shows the hole's par, not the player's score.
- Scores are typically in the 2-8 range and putts in the 1-4 range.
- An 18-hole total is usually between 70 and 120.
- A hole's score should always be at least its putts.
- Use null for a hole you cannot read at all. Do NOT guess."""

_PLAYER_INSTRUCTIONS = """
MULTIPLE PLAYERS:
Scorecards often have rows for multiple players. If the user specifies their name, extract only that player's scores. If not specified and there are multiple players, extract the first/top row of scores."""

_JSON_FORMAT = """
Return the data in this exact JSON format (every array has exactly 9 entries):
{
  "date_played": "YYYY-MM-DD or empty string",
  "submission_type": "scanned",
  "course_name": "string or empty string",
  "tee_box_name": "string or empty string",
  "front_nine_scores": [holes 1-9],
  "back_nine_scores": [holes 10-18],
  "front_nine_putts": [holes 1-9],
  "back_nine_putts": [holes 10-18],
  "front_nine_fairways": [holes 1-9],
  "back_nine_fairways": [holes 10-18],
  "front_nine_gir": [holes 1-9],
  "back_nine_gir": [holes 10-18],
  "total_score": int,
  "total_putts": int,
  "total_fairways_hit": int,
  "total_gir": int,
  "course_id": "",
  "tee_box_id": ""
}
No extra explanation is needed."""


def _append_user_context(prompt: str, user_context: Optional[str]) -> str:
    """Append user context to a prompt if provided."""
    if not user_context:
        return prompt
    return prompt + "\nADDITIONAL CONTEXT FROM THE USER:\n" + user_context + "\n"


# ================================================================
# Scorecard extraction
# ================================================================

def build_extraction_prompt(user_context: Optional[str] = None) -> str:
    """Prompt sent alongside the scorecard photo."""
    prompt = (
        _PREAMBLE
        + _FIELD_INSTRUCTIONS
        + "\n"
        + _SCORING_FORMAT_INSTRUCTIONS
        + "\n"
        + _PLAYER_INSTRUCTIONS
        + "\n"
        + _JSON_FORMAT
    )
    return _append_user_context(prompt, user_context)


# ================================================================
# Insights
# ================================================================

def build_performance_prompt(comparison: PerformanceComparison) -> str:
    """Prompt asking for two short insights from recent vs previous form."""
    par_lines = "\n".join(
        f"Par {par} average: {comparison.par_averages[par]:.1f}"
        for par in sorted(comparison.par_averages)
    ) or "No hole-by-hole scores recorded."
    return f"""Analyze this golf performance data and provide focused insights:
A lower score is better in golf.

Recent {comparison.recent_rounds} rounds average score: {comparison.recent_avg_score:.1f}
Previous {comparison.previous_rounds} rounds average score: {comparison.previous_avg_score:.1f}
Score trend: {comparison.score_trend}

Recent average putts per round: {comparison.recent_avg_putts:.1f}
Previous average putts per round: {comparison.previous_avg_putts:.1f}

Recent GIR percentage: {comparison.recent_gir_percentage:.1f}%
Previous GIR percentage: {comparison.previous_gir_percentage:.1f}%

Hole-by-hole performance (recent rounds):
{par_lines}

Please provide:
1. One major insight about the player's overall game, using the trend direction above
2. One specific insight about their performance on par 3s, 4s, or 5s

Keep the response concise and focused on actionable insights."""


def _rounds_as_json(rounds: Sequence[Round]) -> str:
    return json.dumps(
        [r.model_dump(mode="json", exclude={"user_id", "created_at"}) for r in rounds]
    )


def build_chat_prompt(question: str, rounds: Sequence[Round]) -> str:
    """Free-form question answered from the player's round history."""
    return (
        "You are a golf performance AI assistant. "
        f"Here is the user's golf round data as JSON: {_rounds_as_json(rounds)}.\n\n"
        f"User question: {question.strip()}\n\n"
        "Give a concise, actionable answer based on the data."
    )
