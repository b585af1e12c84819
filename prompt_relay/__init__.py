"""Public API for prompt_relay.

Expose a small, explicit set of helpers used by the CLI and tests.
"""
from importlib.metadata import PackageNotFoundError, version

try:
	__version__ = version("prompt-relay")
except PackageNotFoundError:
	__version__ = "0.0.0"

from .errors import PromptRelayError, ConfigError, OptionsError, PromptFileError
from .config import (
	EndpointKind,
	ModelDescriptor,
	ModelRegistry,
	DEFAULT_MODELS,
	Settings,
	WorkspaceLayout,
	load_config,
	read_prompt_file,
)
from .options import Options, parse_options
from .images import ImageAttachment, load_png_attachments
from .request_builder import build_request
from .response import ResponseResult, Usage, extract_response, parse_json_body
from .archive import (
	append_response_block,
	archive_conversation,
	archive_current_audio,
	archive_images,
	move_with_timestamp_if_exists,
	next_archive_number,
)

__all__ = [
	"PromptRelayError",
	"ConfigError",
	"OptionsError",
	"PromptFileError",
	"EndpointKind",
	"ModelDescriptor",
	"ModelRegistry",
	"DEFAULT_MODELS",
	"Settings",
	"WorkspaceLayout",
	"load_config",
	"read_prompt_file",
	"Options",
	"parse_options",
	"ImageAttachment",
	"load_png_attachments",
	"build_request",
	"ResponseResult",
	"Usage",
	"extract_response",
	"parse_json_body",
	"append_response_block",
	"archive_conversation",
	"archive_current_audio",
	"archive_images",
	"move_with_timestamp_if_exists",
	"next_archive_number",
	"__version__",
]
