"""Delivery of the reward audio file."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi.responses import FileResponse

from riddle_gate.core.errors import ArtifactMissingAppError

logger = logging.getLogger(__name__)

ARTIFACT_MEDIA_TYPE = "audio/wav"


def serve_artifact(path: Path) -> FileResponse:
    """Stream the reward file read-only from ``path``.

    Args:
        path: Location of the audio file on disk.

    Returns:
        FileResponse streaming the file as ``audio/wav``.

    Raises:
        ArtifactMissingAppError: If the file does not exist.
    """
    if not path.is_file():
        logger.error("artifact.missing", extra={"path": str(path)})
        raise ArtifactMissingAppError(
            code="artifact_missing",
            message="The requested audio file is not available",
        )

    return FileResponse(path, media_type=ARTIFACT_MEDIA_TYPE, filename=path.name)
