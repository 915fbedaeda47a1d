"""Terminal front end: typer CLI, Rich output and the prompt_toolkit menu browser."""
