"""
FitCoach - Prompt Logger.

Logs completion prompts and responses to files for debugging.
Enabled via FITCOACH_LOG_PROMPTS=1 or the --log-prompts CLI flag.
"""

import os
from datetime import datetime
from pathlib import Path

# Configuration
LOG_PROMPTS = os.getenv("FITCOACH_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

# Session tracking
_session_id: str | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Enable or disable prompt logging."""
    global LOG_PROMPTS
    LOG_PROMPTS = enabled
    if enabled:
        _ensure_log_dir()


def _ensure_log_dir() -> None:
    """Create the log directory if it doesn't exist."""
    LOG_DIR.mkdir(exist_ok=True)


def _get_session_id() -> str:
    """Get or create a session ID for this run."""
    global _session_id
    if _session_id is None:
        _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    return _session_id


def _get_session_dir() -> Path:
    """Get the directory for this session's logs."""
    session_dir = LOG_DIR / _get_session_id()
    session_dir.mkdir(exist_ok=True)
    return session_dir


def log_prompt(
    *,
    node: str,
    model: str,
    messages: list[dict],
    response: str | None = None,
    error: str | None = None,
) -> Path | None:
    """
    Log a completion call to a markdown file.

    Args:
        node: Which feature made this call (chat, workout, nutrition, ...)
        model: The model used
        messages: Role-tagged messages sent to the model
        response: The generated text (optional)
        error: Any error that occurred (optional)

    Returns:
        Path to the log file, or None if logging is disabled
    """
    if not LOG_PROMPTS:
        return None

    global _call_counter
    _call_counter += 1

    _ensure_log_dir()
    filepath = _get_session_dir() / f"{_call_counter:02d}_{node}.md"

    content = f"""# Completion Call: {node}

**Time:** {datetime.now().isoformat()}
**Model:** {model}

---
"""
    for message in messages:
        content += f"\n## {message['role'].title()}\n\n```\n{message['content']}\n```\n"

    content += "\n---\n\n## Response\n\n"
    if error:
        content += f"**ERROR:** {error}\n"
    elif response:
        content += f"```\n{response}\n```\n"
    else:
        content += "(No response yet)\n"

    filepath.write_text(content, encoding="utf-8")

    return filepath


def get_session_log_dir() -> Path | None:
    """Get the current session's log directory, if logging is enabled."""
    if not LOG_PROMPTS:
        return None
    return _get_session_dir()


def reset_session() -> None:
    """Reset the session (for testing or new conversation)."""
    global _session_id, _call_counter
    _session_id = None
    _call_counter = 0
