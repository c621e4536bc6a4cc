"""Path containment checks for caller-supplied project and session ids."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TRANSCRIPT_SUFFIX = ".jsonl"


def is_path_allowed(path: str | Path, root: str | Path) -> bool:
    """Validate that a path is within `root`.

    The lexical check runs first so that nothing outside the root is ever
    stat'ed; symlinks are then resolved to prevent escape attacks.
    """
    try:
        root_abs = os.path.abspath(os.path.expanduser(str(root)))
        candidate = os.path.abspath(os.path.join(root_abs, str(path)))
    except (OSError, ValueError):
        return False

    if not _contains(root_abs, candidate):
        return False

    try:
        return _contains(os.path.realpath(root_abs), os.path.realpath(candidate))
    except (OSError, ValueError):
        return False


def resolve_project_dir(projects_dir: str | Path, project_id: str) -> Path | None:
    """Return `projects_dir/project_id` if it names a direct child of the root."""
    if not _is_plain_name(project_id):
        return None
    candidate = Path(projects_dir) / project_id
    if not is_path_allowed(candidate, projects_dir):
        return None
    return candidate


def resolve_session_path(
    projects_dir: str | Path,
    project_id: str,
    session_id: str,
) -> Path | None:
    """Return the transcript path for (project, session) or None if it escapes the root."""
    if not _is_plain_name(project_id) or not _is_plain_name(session_id):
        logger.warning("Rejected session path: %r / %r", project_id, session_id)
        return None
    candidate = Path(projects_dir) / project_id / f"{session_id}{TRANSCRIPT_SUFFIX}"
    if not is_path_allowed(candidate, projects_dir):
        logger.warning("Rejected session path outside root: %s", candidate)
        return None
    return candidate


def _is_plain_name(name: str) -> bool:
    """A single path segment: non-empty, no separators, not . or .."""
    if not isinstance(name, str) or not name or name in (".", ".."):
        return False
    if "\x00" in name:
        return False
    return "/" not in name and "\\" not in name and os.sep not in name


def _contains(root: str, path: str) -> bool:
    return path.startswith(root + os.sep)
