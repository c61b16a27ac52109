# ABOUTME: LLM API client for a short session note in surf window events
# ABOUTME: Uses Google Gemini 2.5 Flash-Lite, falling back to the recommendation text

import logging

import google.generativeai as genai

from surfcal.debug import debug_log
from surfcal.scoring.recommender import METERS_TO_FEET, Recommendation
from surfcal.weather.models import SurfWindow

log = logging.getLogger(__name__)

MAX_NOTE_CHARS = 280


class LLMClient:
    """Client for generating session notes via LLM API"""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash-lite"):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)

    def generate_session_note(
        self,
        window: SurfWindow,
        location_name: str,
        recommendation: Recommendation,
    ) -> str:
        """
        Generate a one-sentence note for the event description

        Args:
            window: Selected surf window
            location_name: Spot name
            recommendation: Skill-level recommendation for the window

        Returns:
            Short note, or the recommendation text if the API fails
        """
        prompt = f"""You are a local surf coach at {location_name} writing a calendar note.

CONDITIONS {window.start_time:%H:%M}-{window.end_time:%H:%M}: {window.wave_height:.1f}m ({window.wave_height * METERS_TO_FEET:.1f}ft) waves at {window.wave_period:.0f}s, wind {window.wind_speed:.0f}kts from {window.wind_direction:.0f} degrees. Quality: {window.score}/100. Level: {recommendation.label} ({recommendation.audience}).

Write ONE short sentence of practical advice for this session. No emojis, no headings."""

        debug_log(f"Prompt length: {len(prompt)} chars", "LLM")

        try:
            response = self.model.generate_content(prompt)
            note = response.text.strip()
        except Exception as e:
            log.error(f"LLM API error: {e}")
            return recommendation.recommendation

        debug_log(f"Response length: {len(note)} chars", "LLM")
        if not note:
            return recommendation.recommendation
        return note[:MAX_NOTE_CHARS]
