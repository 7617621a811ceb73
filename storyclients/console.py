"""Rich console used for all StoryClients terminal output.

Diagnostics from the library modules go through ``logging``; only the CLI
prints here.
"""

from rich.console import Console

console = Console()
