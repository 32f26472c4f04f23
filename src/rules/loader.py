import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules

# First ```yaml fenced block of a markdown document
_YAML_FENCE = re.compile(r"^\s*```yaml\s*$\n(.*?)^\s*```", re.MULTILINE | re.DOTALL)


def _yaml_source(content: str) -> str:
    match = _YAML_FENCE.search(content)
    return match.group(1) if match else content


def load_rules(path: Path | str) -> Rules:
    """
    Load and validate the rules file.

    Accepts plain YAML or a markdown document carrying a ```yaml block.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    try:
        data = yaml.safe_load(_yaml_source(path.read_text(encoding="utf-8")))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if data is None:
        return Rules()
    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
