"""Speech output for a finished run: rotate the previous wav, then synthesize."""
from typing import Optional

from ..archive import archive_current_audio
from ..config import WorkspaceLayout
from ..providers.base import ModelProvider
from ..utils import log, warn


def run_audio_pipeline(
    provider: ModelProvider,
    layout: WorkspaceLayout,
    instruction: str,
    response_text: str,
    quiet: bool = False,
) -> Optional[str]:
    """Write ``output.wav`` for this run; returns its path or None.

    An empty ``instruction`` means the model response itself is spoken.
    """
    try:
        archive_current_audio(layout.audio_file, layout.audio_archive_dir, quiet=quiet)
    except OSError as e:
        warn(f"audio pre-archive failed: {e}. Continuing to generate new audio.")

    text = instruction or response_text
    log(f"Requesting speech synthesis, text_len={len(text)}", quiet)
    audio = provider.synthesize_speech(text)
    if audio is None:
        warn("TTS request failed; no audio generated.")
        return None

    with open(layout.audio_file, "wb") as f:
        f.write(audio)
    print(f"Audio written to {layout.audio_name}")
    return layout.audio_file
