from typing import Any, Dict, Optional, Protocol, Tuple

from ..config import EndpointKind


class ModelProvider(Protocol):
    """Protocol describing what the runner needs from an API backend."""

    def post_json(self, kind: EndpointKind, payload: Dict[str, Any]) -> Tuple[int, str]:
        ...

    def synthesize_speech(self, text: str) -> Optional[bytes]:
        ...
