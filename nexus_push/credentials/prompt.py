"""Terminal prompting for missing credentials."""

import click


class ClickPrompter:
    """Prompt on the terminal with click; prompts go to stderr."""

    def prompt(self, field: str, secret: bool = False) -> str:
        return click.prompt(field.capitalize(), hide_input=secret, err=True)
