"""Lossy decoding of Claude Code project directory names.

Claude Code replaces every non-alphanumeric character of the working
directory with a hyphen, so `-home-wiz-my-app` may be `/home/wiz/my-app` or
`/home/wiz/my/app`. Use PathResolver for the real path; these helpers only
produce display labels.
"""


def decode_path(encoded: str) -> str:
    """Best-effort decode of a project directory name.

    -home-wiz-AI-LLM → /home/wiz/AI/LLM
    """
    if not encoded:
        return ""
    return encoded.replace("-", "/")


def extract_project_name(encoded: str) -> str:
    """Get the last path segment as the project display name.

    -home-wiz-AI-LLM → LLM
    """
    path = decode_path(encoded)
    return path.rstrip("/").rsplit("/", 1)[-1] if path else ""
