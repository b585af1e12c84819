from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional
import os

from dotenv import load_dotenv, find_dotenv

from .errors import ConfigError, OptionsError, PromptFileError


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 300
DEFAULT_TTS_MODEL = "gpt-4o-mini-tts"
DEFAULT_TTS_VOICE = "alloy"

REASONING_EFFORTS = ("none", "minimal", "low", "medium", "high", "xhigh")
VERBOSITY_LEVELS = ("low", "medium", "high")


class EndpointKind(Enum):
    CHAT_COMPLETIONS = "chat_completions"
    RESPONSES = "responses"


ENDPOINT_PATHS: Dict[EndpointKind, str] = {
    EndpointKind.CHAT_COMPLETIONS: "/chat/completions",
    EndpointKind.RESPONSES: "/responses",
}


@dataclass(frozen=True)
class ModelDescriptor:
    name: str
    endpoint_kind: EndpointKind
    allowed_reasoning_efforts: FrozenSet[str] = frozenset()


class ModelRegistry:
    """Case-insensitive lookup table of the models this tool can talk to."""

    def __init__(self, models: Iterable[ModelDescriptor]):
        self._models: Dict[str, ModelDescriptor] = {}
        for m in models:
            self._models[m.name.lower()] = m

    def __iter__(self):
        return iter(self._models.values())

    def names(self):
        return [m.name for m in self._models.values()]

    def resolve(self, name: str) -> ModelDescriptor:
        try:
            return self._models[name.lower()]
        except KeyError:
            supported = "\n".join(f"  - {n}" for n in self.names())
            raise OptionsError(f"model not supported: {name}\nSupported models:\n{supported}") from None


DEFAULT_MODELS = ModelRegistry(
    [
        ModelDescriptor("gpt-4.1-2025-04-14", EndpointKind.CHAT_COMPLETIONS),
        ModelDescriptor("gpt-4.1-mini-2025-04-14", EndpointKind.CHAT_COMPLETIONS),
        ModelDescriptor(
            "gpt-5-2025-08-07",
            EndpointKind.RESPONSES,
            frozenset({"minimal", "low", "medium", "high"}),
        ),
        ModelDescriptor(
            "gpt-5.2-2025-12-11",
            EndpointKind.RESPONSES,
            frozenset({"none", "low", "medium", "high", "xhigh"}),
        ),
    ]
)


@dataclass
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    tts_model: str = DEFAULT_TTS_MODEL
    tts_voice: str = DEFAULT_TTS_VOICE
    models: ModelRegistry = field(default_factory=lambda: DEFAULT_MODELS)

    def endpoint_url(self, kind: EndpointKind) -> str:
        return self.base_url.rstrip("/") + ENDPOINT_PATHS[kind]


@dataclass(frozen=True)
class WorkspaceLayout:
    """Files and directories the tool reads and rotates, relative to one root."""

    root: str
    prompt_name: str = "prompt.md"
    images_name: str = "images"
    image_archive_name: str = "image-archive"
    archive_name: str = "archive"
    archive_prefix: str = "prompt"
    audio_name: str = "output.wav"
    audio_archive_name: str = "audio-archive"

    @classmethod
    def from_cwd(cls) -> "WorkspaceLayout":
        return cls(root=os.getcwd())

    @property
    def prompt_file(self) -> str:
        return os.path.join(self.root, self.prompt_name)

    @property
    def images_dir(self) -> str:
        return os.path.join(self.root, self.images_name)

    @property
    def image_archive_dir(self) -> str:
        return os.path.join(self.root, self.image_archive_name)

    @property
    def archive_dir(self) -> str:
        return os.path.join(self.root, self.archive_name)

    @property
    def audio_file(self) -> str:
        return os.path.join(self.root, self.audio_name)

    @property
    def audio_archive_dir(self) -> str:
        return os.path.join(self.root, self.audio_archive_name)


def _find_env_file() -> str:
    # Try find_dotenv(); if it fails to locate a file, search parent directories
    env = find_dotenv(usecwd=True)
    if env:
        return env
    p = os.path.abspath(os.getcwd())
    while True:
        cand = os.path.join(p, ".env")
        if os.path.exists(cand):
            return cand
        parent = os.path.dirname(p)
        if parent == p:
            break
        p = parent
    return ".env"


def load_config(models: Optional[ModelRegistry] = None) -> Settings:
    load_dotenv(_find_env_file())
    # "openai" is the variable name older setups of this tool used
    api_key = os.environ.get("OPENAI_API_KEY") or os.environ.get("openai")
    if not api_key or not api_key.strip():
        raise ConfigError("OPENAI_API_KEY is not set")

    def _int_env(name: str, default: int) -> int:
        v = os.environ.get(name)
        if not v:
            return default
        try:
            return int(v)
        except ValueError:
            return default

    return Settings(
        api_key=api_key.strip(),
        base_url=os.environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        timeout=_int_env("OPENAI_TIMEOUT", DEFAULT_TIMEOUT),
        tts_model=os.environ.get("OPENAI_TTS_MODEL") or DEFAULT_TTS_MODEL,
        tts_voice=os.environ.get("OPENAI_TTS_VOICE") or DEFAULT_TTS_VOICE,
        models=models or DEFAULT_MODELS,
    )


def read_prompt_file(path: str) -> str:
    """Return the prompt file content verbatim; a missing file is fatal."""
    if not os.path.isfile(path):
        raise PromptFileError(f"{path} not found (working directory: {os.getcwd()})")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
