"""Draft persistence for the receipt wizard.

A half-filled form is kept as JSON in the data directory so the operator
can resume it later. Only one draft exists at a time.
"""

import json
import logging
from pathlib import Path

from recibos.domain.form import FormState
from recibos.store.schema import get_data_dir

logger = logging.getLogger(__name__)


def get_draft_path() -> Path:
    """Get the draft file path (XDG compliant)."""
    return get_data_dir() / "draft.json"


def save_draft(state: FormState, draft_path: Path | None = None) -> Path:
    """Write the form state to the draft file.

    Args:
        state: Form state to keep.
        draft_path: Path to the draft file. If None, uses default location.

    Returns:
        The written path.
    """
    if draft_path is None:
        draft_path = get_draft_path()
    draft_path.parent.mkdir(parents=True, exist_ok=True)
    draft_path.write_text(json.dumps(state.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return draft_path


def load_draft(draft_path: Path | None = None) -> FormState | None:
    """Read the draft file.

    Args:
        draft_path: Path to the draft file. If None, uses default location.

    Returns:
        The saved form state, or None when there is no usable draft.
    """
    if draft_path is None:
        draft_path = get_draft_path()
    if not draft_path.exists():
        return None
    try:
        data = json.loads(draft_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable draft at %s", draft_path, exc_info=True)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring malformed draft at %s", draft_path)
        return None
    return FormState.from_dict(data)


def clear_draft(draft_path: Path | None = None) -> None:
    """Delete the draft file if there is one."""
    if draft_path is None:
        draft_path = get_draft_path()
    draft_path.unlink(missing_ok=True)
