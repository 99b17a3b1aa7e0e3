"""
Error taxonomy for the expectation engine.

UnknownWord is soft: the engine logs it and keeps going. Everything else
aborts the current parse and reaches the caller.
"""
from typing import Optional, Sequence


class AtendoError(Exception):
    """Base class for all parse failures."""


class UnknownWord(AtendoError):
    """A word has no entry in the lexicon."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"Unknown word '{word}'")


class UnboundSlot(AtendoError):
    """An expression or template read a slot that was never declared."""

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"Slot '{slot}' was never assigned")


class CyclicBinding(AtendoError):
    """Variable resolution loops back onto a slot already being resolved."""

    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__("Cyclic binding: " + " -> ".join(self.chain))


class MalformedRequest(AtendoError):
    """Lexicon data does not have the shape of a packet, request or expression."""

    def __init__(self, message: str, word: Optional[str] = None):
        self.word = word
        if word is not None:
            message = f"{message} (in definition of '{word}')"
        super().__init__(message)
