"""Textual host integration for the care-taker demo."""

from .controller import CareTakerUIHooks, TextualCareTakerAdapter

__all__ = ["CareTakerUIHooks", "TextualCareTakerAdapter"]
