"""AI gain estimation for Persona Daily."""

from personadaily.ai.estimator import GainEstimator, build_payload, build_prompt, parse_gains

__all__ = ["GainEstimator", "build_payload", "build_prompt", "parse_gains"]
