"""Run orchestration: the main request flow and the audio step."""
from .audio import run_audio_pipeline
from .runner import run_prompt

__all__ = ["run_audio_pipeline", "run_prompt"]
