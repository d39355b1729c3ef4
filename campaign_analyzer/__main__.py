"""Allow ``python -m campaign_analyzer``."""

from campaign_analyzer.cli import entry_point

if __name__ == "__main__":
    entry_point()
