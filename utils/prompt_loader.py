"""
Utility to load and format prompt templates from markdown files

This keeps prompts clean and separated from code logic.
"""

from pathlib import Path
from typing import Any


class PromptLoader:
    """Load and format prompt templates"""

    def __init__(self, prompts_dir: str = "prompts"):
        """
        Initialize prompt loader

        Args:
            prompts_dir: Root directory containing prompt templates
        """
        # Get absolute path to prompts directory
        self.prompts_dir = Path(__file__).parent.parent / prompts_dir

    def load(
        self,
        template_name: str,
        mode: str = "advice",
        **kwargs: Any
    ) -> str:
        """
        Load and format a prompt template

        Args:
            template_name: Name of template file (without .md extension)
            mode: Sub-directory of the prompts directory
            **kwargs: Variables to substitute in template

        Returns:
            Formatted prompt string

        Examples:
            loader = PromptLoader()

            prompt = loader.load(
                "linkedin_optimize",
                full_name="Ada",
                current_role="Developer",
                target_role="Architect",
                bio="...",
                skills="Python (Level: 4/5)",
                education="BSc - MIT",
            )
        """
        # Build path to template file
        template_path = self.prompts_dir / mode / f"{template_name}.md"

        if not template_path.exists():
            raise FileNotFoundError(f"Prompt template not found: {template_path}")

        # Read template
        with open(template_path, "r", encoding="utf-8") as f:
            template = f.read()

        # Format template with provided variables
        try:
            return template.format(**kwargs)
        except KeyError as e:
            raise ValueError(
                f"Missing required variable '{e.args[0]}' for template '{template_name}' in mode '{mode}'"
            )

    def load_advice(self, template_name: str, **kwargs) -> str:
        """Convenience method for advice templates"""
        return self.load(template_name, mode="advice", **kwargs)
