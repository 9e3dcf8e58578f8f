"""
src/narrative/gemini.py
───────────────────────
Gemini-backed narrative provider (google-genai SDK).

The SDK call is blocking, so it runs in a worker thread. The model is asked
for JSON matching NarrativeResponse's camelCase keys; anything else is a
NarrativeServiceError. No retries: the pipeline falls back immediately.
"""
from __future__ import annotations

import asyncio
import logging
import textwrap
from typing import Any

from google import genai
from pydantic import ValidationError

from config.settings import Settings
from src.narrative.contract import (
    NarrativeProvider,
    NarrativeRequest,
    NarrativeResponse,
    NarrativeServiceError,
)

logger = logging.getLogger(__name__)


def build_prompt(request: NarrativeRequest) -> str:
    bio = f"{request.bio_hazard_score:.1f}/100" if request.bio_hazard_score is not None else "not scored"
    confidence = f"{request.confidence:.2f}" if request.confidence is not None else "not estimated"

    return textwrap.dedent(f"""
    Act as a Senior Public Health Official.

    LOCAL DIAGNOSTICS:
    - Severity Score: {request.severity_score:.1f}/100
    - Bio-Hazard Score: {bio}
    - Safety Status: {request.status.value}
    - Classification Confidence: {confidence}
    - Station Reliability Index: {request.reliability_index:.0f}/100

    WATER QUALITY DATASET ({request.category}):
    - B.O.D: {request.bod} mg/l (Target < 3)
    - D.O.: {request.dissolved_oxygen} mg/l (Target > 4)
    - pH: {request.ph}
    - Turbidity: {request.turbidity} NTU
    - TDS: {request.tds} ppm
    - Temperature: {request.temperature} °C
    - Fecal Coliform: {request.fecal_coliform} MPN/100ml
    - Total Coliform: {request.total_coliform} MPN/100ml
    - Conductivity: {request.conductivity} µmhos/cm
    - Nitrate-N: {request.nitrate} mg/l

    LOCATION: {request.location_name} (station {request.station_id})

    YOUR TASK:
    1. Provide a diagnostic 'Biological Risk Summary'.
    2. Explain the most likely root cause of the contamination.
    3. Give a counterfactual: what change in the readings would make the water safe.
    4. Give one concrete policy recommendation.
    5. Generate 3 specific probabilistic disease risks (probability between 0 and 1).

    RESPOND IN THIS EXACT JSON FORMAT:
    {{
        "aiSummary": "...",
        "rootCause": "...",
        "counterfactual": "...",
        "policyRecommendation": "...",
        "diseaseRisks": [
            {{"disease": "...", "probability": 0.0, "description": "..."}}
        ]
    }}
    """).strip()


def parse_response(text: str | None) -> NarrativeResponse:
    """Extract the JSON object from the model text and validate it."""
    if not text:
        raise NarrativeServiceError("Empty response from narrative service")
    start = text.find("{")
    end = text.rfind("}") + 1
    if start < 0 or end <= start:
        raise NarrativeServiceError("No JSON object in narrative response")
    try:
        return NarrativeResponse.model_validate_json(text[start:end])
    except ValidationError as e:
        raise NarrativeServiceError(f"Malformed narrative response: {e}") from e


class GeminiNarrativeProvider:
    def __init__(self, api_key: str, model: str, client: Any | None = None) -> None:
        self.model = model
        self.client = client or genai.Client(api_key=api_key)

    async def narrate(self, request: NarrativeRequest) -> NarrativeResponse:
        prompt = build_prompt(request)
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=prompt,
                config={"temperature": 0.2, "response_mime_type": "application/json"},
            )
        except Exception as e:
            raise NarrativeServiceError(f"Gemini call failed: {e}") from e
        return parse_response(response.text)


def build_provider(config: Settings) -> NarrativeProvider | None:
    """Gemini provider when an API key is configured, else None."""
    if not config.GEMINI_API_KEY:
        logger.info("GEMINI_API_KEY not set; narratives will use fallback text")
        return None
    logger.info("Gemini narrative provider initialized (%s)", config.GEMINI_MODEL)
    return GeminiNarrativeProvider(api_key=config.GEMINI_API_KEY, model=config.GEMINI_MODEL)
