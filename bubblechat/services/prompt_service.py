"""Markdown prompts with YAML front matter and ``{{name}}`` placeholders."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Set, Tuple

import yaml

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"
SYSTEM_PROMPT_FILE = PROMPTS_DIR / "system_prompt.md"

PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")
FRONT_MATTER_DELIMITER = "---"


def split_front_matter(text: str, source: Any = "<string>") -> Tuple[Dict[str, Any], str]:
    """Separate a leading YAML block from the prompt body.

    Text without a complete front matter block is returned unchanged with
    empty metadata.

    Raises:
        ValueError: If the front matter is not valid YAML
    """
    if not text.startswith(FRONT_MATTER_DELIMITER):
        return {}, text

    pieces = text.split(FRONT_MATTER_DELIMITER, 2)
    if len(pieces) < 3:
        return {}, text

    _, header, body = pieces
    try:
        metadata = yaml.safe_load(header) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter in {source}: {e}") from e
    return metadata, body.strip()


@dataclass
class PromptTemplate:
    """Prompt text plus the placeholder names it expects."""

    content: str
    variables: Set[str]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_string(cls, content: str, metadata: Optional[Dict[str, Any]] = None) -> "PromptTemplate":
        return cls(
            content=content,
            variables=cls._extract_variables(content),
            metadata=metadata or {},
        )

    @classmethod
    def from_file(cls, file_path: Path) -> "PromptTemplate":
        """Read a markdown prompt, parsing any YAML front matter into metadata.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the front matter is not valid YAML
        """
        if not file_path.is_file():
            raise FileNotFoundError(f"Prompt file not found: {file_path}")

        metadata, body = split_front_matter(file_path.read_text(encoding="utf-8"), file_path)
        return cls.from_string(body, metadata)

    @staticmethod
    def _extract_variables(content: str) -> Set[str]:
        return set(PLACEHOLDER.findall(content))

    def render(self, variables: Mapping[str, Any]) -> str:
        """Substitute every placeholder.

        Raises:
            ValueError: If a placeholder has no value in `variables`
        """
        missing = self.variables.difference(variables)
        if missing:
            raise ValueError(f"Missing required variables: {missing}")
        return PLACEHOLDER.sub(lambda match: str(variables[match.group(1)]), self.content)


def load_system_prompt(tool_names: Iterable[str], path: Optional[Path] = None) -> str:
    """Load and render the system prompt sent once when a chat starts.

    Args:
        tool_names: Names of the registered tools, listed in the prompt
        path: Alternate prompt file (defaults to the bundled prompt)

    Returns:
        Rendered system prompt text
    """
    template = PromptTemplate.from_file(path or SYSTEM_PROMPT_FILE)
    return template.render({"tool_names": ", ".join(tool_names)})
