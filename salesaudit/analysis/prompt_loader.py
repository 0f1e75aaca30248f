from pathlib import Path

from salesaudit.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the audit prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled analysis_prompt.txt.

    Returns:
        The raw template string with ``{conversation}`` and ``{json_schema}``
        placeholders.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "analysis_prompt.txt", "prompt template")


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema the provider must answer with.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "analysis_schema.json", "JSON schema")


def load_system_prompt(path: Path | None = None) -> str:
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt")


def _read(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load {label}: {exc}") from exc
