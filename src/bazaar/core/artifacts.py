"""Screenshot attachment sinks."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class ArtifactSink(Protocol):
    """Accepts a named attachment; storage and retention are its business."""

    def attach(self, name: str, content: bytes, extension: str = "png") -> Optional[Path]:
        ...


def _safe_name(name: str) -> str:
    cleaned = re.sub(r"[^\w.-]+", "_", name.strip(), flags=re.UNICODE)
    return cleaned.strip("_") or "artifact"


class DirectoryArtifactSink:
    """Writes attachments as ``<name>_<YYYYmmdd_HHMMSS>.<ext>`` under ``base_dir``."""

    def __init__(self, base_dir: str = "build/screenshots"):
        self.base_dir = Path(base_dir)

    def attach(
        self,
        name: str,
        content: bytes,
        extension: str = "png",
        timestamp: Optional[datetime] = None,
    ) -> Path:
        timestamp = timestamp or datetime.now()
        self.base_dir.mkdir(parents=True, exist_ok=True)

        filename = f"{_safe_name(name)}_{timestamp.strftime('%Y%m%d_%H%M%S')}.{extension}"
        destination = self.base_dir / filename
        destination.write_bytes(content)

        logger.info(f"Screenshot saved: {destination.resolve()}")
        return destination


@dataclass
class Attachment:
    name: str
    content: bytes
    extension: str = "png"


@dataclass
class MemoryArtifactSink:
    """Keeps attachments in memory."""

    attachments: List[Attachment] = field(default_factory=list)

    def attach(self, name: str, content: bytes, extension: str = "png") -> None:
        self.attachments.append(Attachment(name, content, extension))
        return None

    @property
    def names(self) -> List[str]:
        return [a.name for a in self.attachments]
