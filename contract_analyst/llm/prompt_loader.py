from pathlib import Path

from contract_analyst.llm.exceptions import ChatError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the analyst system prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled analyst_prompt.txt.

    Returns:
        The raw template string with a ``{context}`` placeholder.

    Raises:
        ChatError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analyst_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ChatError(f"Failed to load prompt template: {exc}") from exc
