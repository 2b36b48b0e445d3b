# pupil_fatigue/io/external.py
"""
Request and response contracts of the external services.

Only the payloads are built and decoded here; sending them is left to the
caller. The analysis service is a Gradio app whose predict endpoint takes
``data = [video, pupil_selection, tv_model, blink_detection]`` and answers
``data = [plot, summary, ...]``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from ..config.config import AnalysisSettings
from ..config.constants import ServiceDefaults, ValidationMessages

UNEXPECTED_RESPONSE = "Unexpected response format from API"


def build_analysis_request(
    pupil_selection: Union[bool, str, None] = None,
    tv_model: Optional[str] = None,
    blink_detection: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Payload for the analysis service predict endpoint.

    The video itself is uploaded as a separate file part, so its slot in
    ``data`` is None.

    Args:
        pupil_selection: A selection string is passed through; True or None
            mean both pupils
        tv_model: Model name (default ResNet18)
        blink_detection: Only an explicit False disables it
    """
    selection = pupil_selection if isinstance(pupil_selection, str) else "both"
    return {
        "data": [
            None,
            selection,
            tv_model or ServiceDefaults.DEFAULT_TV_MODEL,
            blink_detection is not False,
        ],
        "fn_index": ServiceDefaults.ANALYSIS_FN_INDEX,
    }


def analysis_request_for(settings: AnalysisSettings) -> Dict[str, Any]:
    return build_analysis_request(settings.pupil_selection, settings.tv_model, settings.blink_detection)


@dataclass
class ServiceResponse:
    """Decoded analysis service answer."""

    success: bool
    summary: Optional[str] = None
    analysis_url: Optional[str] = None
    results: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def _plot_url(plot: Any) -> Optional[str]:
    if isinstance(plot, str) and (plot.startswith("data:image") or plot.startswith("http")):
        return plot
    return None


def parse_analysis_response(
    payload: Dict[str, Any],
    processing_time_ms: Optional[int] = None,
    now: Optional[datetime] = None,
) -> ServiceResponse:
    """
    Decode the predict response.

    A response without a ``data`` list of at least two entries is reported
    as unsuccessful rather than raised.
    """
    metadata: Dict[str, Any] = {"timestamp": (now or datetime.now()).isoformat()}
    if processing_time_ms is not None:
        metadata["processingTime"] = processing_time_ms

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list) or len(data) < 2:
        return ServiceResponse(success=False, metadata=metadata, error=UNEXPECTED_RESPONSE)

    plot, results = data[0], data[1]
    summary = results if isinstance(results, str) else json.dumps(results)
    return ServiceResponse(
        success=True,
        summary=summary,
        analysis_url=_plot_url(plot),
        results=results,
        metadata=metadata,
    )


@dataclass(frozen=True)
class TTSRequest:
    """Validated text-to-speech request."""

    text: str
    exaggeration: float = ServiceDefaults.TTS_EXAGGERATION
    temperature: float = ServiceDefaults.TTS_TEMPERATURE
    seed: int = ServiceDefaults.TTS_SEED
    cfgw: float = ServiceDefaults.TTS_CFGW

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValueError(ValidationMessages.EMPTY_TTS_TEXT)
        if len(self.text.strip()) > ServiceDefaults.TTS_MAX_CHARS:
            raise ValueError(ValidationMessages.TTS_TEXT_TOO_LONG)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "text_input": self.text.strip(),
            "exaggeration_input": self.exaggeration,
            "temperature_input": self.temperature,
            "seed_num_input": self.seed,
            "cfgw_input": self.cfgw,
        }


def build_tts_request(body: Dict[str, Any]) -> TTSRequest:
    """Validate a raw request body; missing tuning values take the defaults."""
    return TTSRequest(
        text=(body.get("text_input") or "").strip(),
        exaggeration=body.get("exaggeration_input", ServiceDefaults.TTS_EXAGGERATION),
        temperature=body.get("temperature_input", ServiceDefaults.TTS_TEMPERATURE),
        seed=body.get("seed_num_input", ServiceDefaults.TTS_SEED),
        cfgw=body.get("cfgw_input", ServiceDefaults.TTS_CFGW),
    )
