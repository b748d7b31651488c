"""memmaster: spaced repetition for markdown notes."""

__version__ = "0.1.0"

from memmaster.models import CardMetadata, Outcome
from memmaster.config import Settings
from memmaster.app import App

__all__ = ["App", "CardMetadata", "Outcome", "Settings"]
