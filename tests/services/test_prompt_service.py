"""Tests for the prompt service."""

import pytest

from bubblechat.services.prompt_service import (
    SYSTEM_PROMPT_FILE,
    PromptTemplate,
    load_system_prompt,
    split_front_matter,
)


class TestPromptTemplate:
    """Test PromptTemplate parsing and rendering."""

    def test_from_string_collects_variables(self):
        template = PromptTemplate.from_string("Use {{tool_names}} on {{cluster}}; {tool}")

        assert template.variables == {"tool_names", "cluster"}
        assert template.metadata == {}

    def test_render(self):
        template = PromptTemplate.from_string("Tools: {{tool_names}}.")

        assert template.render({"tool_names": "gcloud, kubectl"}) == "Tools: gcloud, kubectl."

    def test_render_missing_variable(self):
        template = PromptTemplate.from_string("Tools: {{tool_names}}")

        with pytest.raises(ValueError, match="Missing required variables"):
            template.render({})

    def test_from_file_with_front_matter(self, tmp_path):
        prompt_file = tmp_path / "prompt.md"
        prompt_file.write_text(
            "---\nname: test\ndescription: A test prompt\n---\n\nHello {{who}}\n"
        )

        template = PromptTemplate.from_file(prompt_file)

        assert template.metadata == {"name": "test", "description": "A test prompt"}
        assert template.content == "Hello {{who}}"
        assert template.variables == {"who"}

    def test_from_file_without_front_matter(self, tmp_path):
        prompt_file = tmp_path / "plain.md"
        prompt_file.write_text("Just text")

        template = PromptTemplate.from_file(prompt_file)

        assert template.content == "Just text"
        assert template.metadata == {}

    def test_from_file_invalid_yaml(self, tmp_path):
        prompt_file = tmp_path / "broken.md"
        prompt_file.write_text("---\nname: [unclosed\n---\nbody")

        with pytest.raises(ValueError, match="Invalid YAML frontmatter"):
            PromptTemplate.from_file(prompt_file)

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PromptTemplate.from_file(tmp_path / "nope.md")


class TestLoadSystemPrompt:
    """Test the bundled system prompt."""

    def test_bundled_prompt_exists(self):
        assert SYSTEM_PROMPT_FILE.exists()

    def test_lists_tool_names(self):
        prompt = load_system_prompt(["gcloud", "kubectl"])

        assert "gcloud, kubectl" in prompt
        assert "{{" not in prompt

    def test_custom_path(self, tmp_path):
        prompt_file = tmp_path / "custom.md"
        prompt_file.write_text("Only {{tool_names}} allowed.")

        assert load_system_prompt(["kubectl"], path=prompt_file) == "Only kubectl allowed."


class TestSplitFrontMatter:
    """Test front matter detection."""

    def test_no_front_matter(self):
        assert split_front_matter("plain body") == ({}, "plain body")

    def test_unterminated_front_matter_is_body(self):
        assert split_front_matter("---\nname: x\n") == ({}, "---\nname: x\n")

    def test_empty_front_matter(self):
        assert split_front_matter("---\n---\nbody") == ({}, "body")
