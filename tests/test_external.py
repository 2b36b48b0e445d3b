from datetime import datetime

import pytest

from pupil_fatigue.config import AnalysisSettings
from pupil_fatigue.io.external import (
    TTSRequest,
    analysis_request_for,
    build_analysis_request,
    build_tts_request,
    parse_analysis_response,
)


@pytest.mark.parametrize(
    "selection,expected",
    [(None, "both"), (True, "both"), (False, "both"), ("left_pupil", "left_pupil")],
)
def test_pupil_selection(selection, expected):
    assert build_analysis_request(selection)["data"][1] == expected


def test_request_defaults():
    request = build_analysis_request()
    assert request == {"data": [None, "both", "ResNet18", True], "fn_index": 1}


def test_blink_detection_only_disabled_explicitly():
    assert build_analysis_request(blink_detection=None)["data"][3] is True
    assert build_analysis_request(blink_detection=False)["data"][3] is False


def test_request_from_settings():
    settings = AnalysisSettings(pupil_selection="right", tv_model="ResNet50", blink_detection=False)
    assert analysis_request_for(settings)["data"] == [None, "right", "ResNet50", False]


def test_response_with_image_and_text_summary():
    now = datetime(2025, 3, 14, 12, 0)
    response = parse_analysis_response({"data": ["data:image/png;base64,AAA", "0,left_eye,2.5"]}, 1500, now)
    assert response.success
    assert response.analysis_url == "data:image/png;base64,AAA"
    assert response.summary == "0,left_eye,2.5"
    assert response.metadata == {"timestamp": "2025-03-14T12:00:00", "processingTime": 1500}


def test_response_with_structured_summary():
    response = parse_analysis_response({"data": [{"path": "/tmp/x.png"}, {"mean": 2.4}, "extra"]})
    assert response.success
    assert response.analysis_url is None
    assert response.summary == '{"mean": 2.4}'
    assert response.results == {"mean": 2.4}


def test_response_http_plot_is_accepted():
    response = parse_analysis_response({"data": ["https://host/plot.png", "text"]})
    assert response.analysis_url == "https://host/plot.png"


@pytest.mark.parametrize("payload", [{}, {"data": ["only one"]}, {"data": "not a list"}, []])
def test_unexpected_response(payload):
    response = parse_analysis_response(payload)
    assert not response.success
    assert response.error == "Unexpected response format from API"
    assert "timestamp" in response.metadata


def test_tts_defaults():
    request = build_tts_request({"text_input": "  Time for a break.  "})
    assert request.to_payload() == {
        "text_input": "Time for a break.",
        "exaggeration_input": 0.5,
        "temperature_input": 0.8,
        "seed_num_input": 0,
        "cfgw_input": 0.5,
    }


@pytest.mark.parametrize("text", ["", "   ", None])
def test_tts_requires_text(text):
    with pytest.raises(ValueError, match="Text input is required"):
        build_tts_request({"text_input": text})


def test_tts_length_limit():
    assert TTSRequest("a" * 300).text == "a" * 300
    with pytest.raises(ValueError, match="300 characters or less"):
        TTSRequest("a" * 301)
