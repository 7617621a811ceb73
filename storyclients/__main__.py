"""Allow running as python -m storyclients."""

from .StoryClients import app

if __name__ == "__main__":
    app()
