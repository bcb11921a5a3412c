"""AI gain estimator backed by the Gemini generateContent endpoint.

The estimator asks the model to rate how much one activity improved each
of the five attributes, retrying with exponential backoff while the
endpoint reports rate limiting.
"""

import json
import logging
import math
import time
from typing import Any, Callable, Optional

import httpx

from personadaily.config import DEFAULT_MODEL
from personadaily.errors import (
    EstimatorError,
    RequestFailedError,
    ResponseValidationError,
)
from personadaily.models.stats import ATTRIBUTES, MAX_GAIN, STAT_NAMES, Gains, round_points

logger = logging.getLogger(__name__)

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

DEFAULT_MAX_RETRIES = 5
DEFAULT_INITIAL_DELAY_MS = 1000

HTTP_TOO_MANY_REQUESTS = 429

PROMPT_TEMPLATE = """You are an assistant that simulates the five social stats from the Persona series.
Based on the user's activity for today and how they felt about it, decide how much the
activity improved each of the five stats (Diligence, Knowledge, Courage, Understanding, Expression).
- Activity: {activity}
- Feeling: {feeling}

Rate the gain for each stat as an integer from 0 to 5.
Return only a JSON object in this format:
{{ "diligence": 0, "knowledge": 0, "courage": 0, "understanding": 0, "expression": 0 }}
Do not add any markdown or explanatory text."""


def build_prompt(activity: str, feeling: str) -> str:
    """Format the rating prompt for one activity."""
    return PROMPT_TEMPLATE.format(activity=activity, feeling=feeling)


def build_payload(activity: str, feeling: str) -> dict:
    """Build the generateContent request body.

    The response is constrained to a JSON object with the five attribute
    fields, all required.
    """
    return {
        "contents": [{"parts": [{"text": build_prompt(activity, feeling)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": {
                "type": "OBJECT",
                "properties": {
                    name: {"type": "NUMBER", "description": STAT_NAMES[name]}
                    for name in ATTRIBUTES
                },
                "required": list(ATTRIBUTES),
            },
        },
    }


def _clamp_gain(name: str, value: Any) -> int:
    # bool is an int subclass but never a valid rating
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseValidationError(f"Gain for '{name}' is not a number: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ResponseValidationError(f"Gain for '{name}' is not finite: {value!r}")
    return round_points(value, MAX_GAIN)


def parse_gains(result: Any) -> Gains:
    """Extract gains from a generateContent response body.

    Args:
        result: Decoded JSON response.

    Returns:
        Gains rounded to integers and clamped to the 0-5 range.

    Raises:
        ResponseValidationError: If the expected text part is missing, is not
            JSON, or lacks any of the five attributes.
    """
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise ResponseValidationError("AI response did not contain any gains data")

    if not isinstance(text, str) or not text:
        raise ResponseValidationError("AI response did not contain any gains data")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseValidationError(f"AI response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResponseValidationError("AI response is not a JSON object")

    missing = [name for name in ATTRIBUTES if name not in data]
    if missing:
        raise ResponseValidationError(f"AI response is missing: {', '.join(missing)}")

    return Gains(**{name: _clamp_gain(name, data[name]) for name in ATTRIBUTES})


class GainEstimator:
    """Estimates attribute gains for an activity using a generative AI model."""

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay_ms: int = DEFAULT_INITIAL_DELAY_MS,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the estimator.

        Args:
            api_key: API key sent as the ``key`` query parameter.
            model: Model name used in the endpoint path.
            max_retries: Retries allowed after rate-limited responses.
            initial_delay_ms: First backoff delay; doubled on each retry.
            timeout: HTTP timeout in seconds (ignored when ``client`` is given).
            client: Optional preconfigured httpx client.
            sleep: Function used to wait between retries, in seconds.
        """
        self._api_key = api_key
        self.model = model
        self.max_retries = max_retries
        self.initial_delay_ms = initial_delay_ms
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))
        self._sleep = sleep

    @property
    def url(self) -> str:
        return f"{API_BASE_URL}/{self.model}:generateContent"

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def _post_with_backoff(self, payload: dict) -> Any:
        """POST the payload, retrying rate-limited responses.

        Raises:
            RequestFailedError: On a transport error, a non-success status
                other than 429, or when the retry budget is exhausted.
        """
        retries = self.max_retries
        delay_ms = self.initial_delay_ms
        params = {"key": self._api_key} if self._api_key else None

        while True:
            try:
                response = self._client.post(self.url, params=params, json=payload)
            except httpx.HTTPError as e:
                raise RequestFailedError(f"API request error: {e}") from e

            if response.is_success:
                try:
                    return response.json()
                except ValueError as e:
                    raise ResponseValidationError(f"API response is not JSON: {e}") from e

            status = response.status_code
            if status == HTTP_TOO_MANY_REQUESTS and retries > 0:
                logger.warning(
                    "Rate limited, retrying in %d ms (%d retries left)", delay_ms, retries
                )
                self._sleep(delay_ms / 1000)
                delay_ms *= 2
                retries -= 1
                continue

            raise RequestFailedError(
                f"API request failed with status {status}", status_code=status
            )

    def estimate(self, activity: str, feeling: str) -> Gains:
        """Ask the model for the gains of one activity.

        Raises:
            RequestFailedError: If the request fails.
            ResponseValidationError: If the response has no usable gains.
        """
        result = self._post_with_backoff(build_payload(activity, feeling))
        logger.debug("API response: %s", result)
        return parse_gains(result)

    def estimate_or_zero(self, activity: str, feeling: str) -> Gains:
        """Like :meth:`estimate`, but returns zero gains on any failure."""
        try:
            return self.estimate(activity, feeling)
        except EstimatorError as e:
            logger.error("AI gain estimate failed: %s", e)
            return Gains.zero()
