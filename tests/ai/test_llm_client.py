# ABOUTME: Tests for LLM client interface (Google Gemini API)
# ABOUTME: Uses mocked responses to avoid real API calls and costs in tests

from datetime import datetime
from unittest.mock import Mock, patch
from zoneinfo import ZoneInfo

from surfcal.ai.llm_client import LLMClient
from surfcal.scoring.recommender import SurfRecommender
from surfcal.weather.models import SurfWindow

TZ = ZoneInfo("Asia/Jerusalem")

WINDOW = SurfWindow(
    wave_height=1.2,
    wave_period=9.0,
    wind_speed=4.0,
    wind_direction=315.0,
    start_time=datetime(2025, 6, 1, 9, tzinfo=TZ),
    end_time=datetime(2025, 6, 1, 11, tzinfo=TZ),
    hour_count=2,
    score=98,
)
RECOMMENDATION = SurfRecommender().classify_window(WINDOW)


def test_llm_client_generates_note():
    """LLMClient should return the stripped model text"""
    mock_response = Mock()
    mock_response.text = "  Paddle out early before the breeze fills in.\n"

    with patch('google.generativeai.GenerativeModel') as mock_gemini:
        mock_gemini.return_value.generate_content.return_value = mock_response

        client = LLMClient(api_key="test_key")
        result = client.generate_session_note(WINDOW, "Herzliya", RECOMMENDATION)

        assert result == "Paddle out early before the breeze fills in."


def test_llm_client_prompt_includes_conditions():
    """Prompt should carry the window conditions and location"""
    mock_response = Mock()
    mock_response.text = "Test response"

    with patch('google.generativeai.GenerativeModel') as mock_gemini:
        mock_model = Mock()
        mock_gemini.return_value = mock_model
        mock_model.generate_content.return_value = mock_response

        client = LLMClient(api_key="test_key")
        client.generate_session_note(WINDOW, "Herzliya", RECOMMENDATION)

        prompt = mock_model.generate_content.call_args[0][0]
        assert "Herzliya" in prompt
        assert "09:00-11:00" in prompt
        assert "1.2m" in prompt
        assert "98/100" in prompt


def test_llm_client_handles_api_failure():
    """LLMClient should fall back to the recommendation text on failure"""
    with patch('google.generativeai.GenerativeModel') as mock_gemini:
        mock_gemini.return_value.generate_content.side_effect = Exception("API error")

        client = LLMClient(api_key="test_key")
        result = client.generate_session_note(WINDOW, "Herzliya", RECOMMENDATION)

        assert result == RECOMMENDATION.recommendation


def test_llm_client_empty_response_falls_back():
    mock_response = Mock()
    mock_response.text = "   "

    with patch('google.generativeai.GenerativeModel') as mock_gemini:
        mock_gemini.return_value.generate_content.return_value = mock_response

        client = LLMClient(api_key="test_key")
        result = client.generate_session_note(WINDOW, "Herzliya", RECOMMENDATION)

        assert result == RECOMMENDATION.recommendation


def test_llm_client_truncates_long_note():
    mock_response = Mock()
    mock_response.text = "x" * 500

    with patch('google.generativeai.GenerativeModel') as mock_gemini:
        mock_gemini.return_value.generate_content.return_value = mock_response

        client = LLMClient(api_key="test_key")
        result = client.generate_session_note(WINDOW, "Herzliya", RECOMMENDATION)

        assert len(result) == 280
