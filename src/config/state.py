"""Best-effort persistence of the last active workspace."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class EditorState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_work_dir: str = Field(default="", alias="lastWorkDir")


def load_state(path: Path) -> EditorState:
    """Read persisted state; any failure yields an empty state."""
    try:
        data = orjson.loads(path.read_bytes())
        return EditorState.model_validate(data)
    except FileNotFoundError:
        return EditorState()
    except (OSError, orjson.JSONDecodeError, ValidationError) as exc:
        logger.debug("Ignoring unreadable state file %s: %s", path, exc)
        return EditorState()


def save_state(path: Path, state: EditorState) -> bool:
    """Write state; failures are logged and reported as False."""
    payload = state.model_dump(by_alias=True)
    try:
        path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    except OSError as exc:
        logger.debug("Could not persist state to %s: %s", path, exc)
        return False
    return True


__all__ = ["EditorState", "load_state", "save_state"]
