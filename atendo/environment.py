"""
The variable environment shared by every request fired during one parse.

Fixed control slots always exist. Any other name is declared the first time
a request assigns to it and is visible to all later requests, whichever word
introduced it.

Reading a slot that was never declared raises UnboundSlot and aborts the
parse: it always means a lexicon entry refers to a variable nobody sets.
"""
import logging
from typing import Any, Dict, Optional

from atendo.errors import UnboundSlot

logger = logging.getLogger(__name__)

CURRENT_WORD = "currentWord"
PART_OF_SPEECH = "partOfSpeech"
CD_FORM = "cdForm"
SUBJECT = "subject"
PREDICATES = "predicates"
CONCEPT = "concept"
REMAINING_WORDS = "remainingWords"

FIXED_SLOTS = (
    CURRENT_WORD,
    PART_OF_SPEECH,
    CD_FORM,
    SUBJECT,
    PREDICATES,
    CONCEPT,
    REMAINING_WORDS,
)


class Environment:
    """Mapping from slot name to value with declare-on-first-write semantics."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._slots: Dict[str, Any] = dict.fromkeys(FIXED_SLOTS)
        if initial:
            for slot, value in initial.items():
                self.set(slot, value)

    def get(self, slot: str) -> Any:
        try:
            return self._slots[slot]
        except KeyError:
            raise UnboundSlot(slot) from None

    def set(self, slot: str, value: Any) -> None:
        if slot not in self._slots:
            logger.debug(f"Declaring slot '{slot}'")
        self._slots[slot] = value

    def is_declared(self, slot: str) -> bool:
        return slot in self._slots

    def evaluate(self, expr) -> Any:
        """Evaluate a compiled expression against the current bindings."""
        return expr.evaluate(self)

    def reset(self) -> None:
        """Drop every ad-hoc slot and clear the fixed ones."""
        self._slots = dict.fromkeys(FIXED_SLOTS)

    def snapshot(self) -> Dict[str, Any]:
        # values are immutable, a shallow copy is a full copy
        return dict(self._slots)

    def restore(self, snapshot: Dict[str, Any]) -> None:
        self._slots = dict(snapshot)

    def __repr__(self) -> str:
        return f"Environment({len(self._slots)} slots)"
