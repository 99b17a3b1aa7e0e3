"""
The lexicon: word -> initial packet.

Definitions are kept as written (S-expression text or already-read lists)
and compiled the first time the word is looked up. A broken definition only
fails the parses that actually use that word.

File format (JSON; a definition may also be a list of lines)::

    {
      "start": "*start*",
      "words": {
        "jack": "(((assign partOfSpeech 'noun-phrase cdForm '(person (name (jack))))))",
        ...
      }
    }
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from atendo.errors import MalformedRequest, UnknownWord
from atendo.packets import Packet, compile_packet

logger = logging.getLogger(__name__)

START_WORD = "*start*"
DEFAULT_LEXICON_PATH = Path(__file__).parent / "data" / "lexicon.json"
LEXICON_ENV_VAR = "ATENDO_LEXICON"


def default_lexicon_path() -> Path:
    """The bundled lexicon, unless ATENDO_LEXICON points elsewhere."""
    override = os.environ.get(LEXICON_ENV_VAR)
    return Path(override) if override else DEFAULT_LEXICON_PATH


def _definition_text(definition: Any) -> Any:
    """Definitions may be split over a list of lines for readability."""
    if isinstance(definition, list) and definition and all(isinstance(line, str) for line in definition):
        return "\n".join(definition)
    return definition


class Lexicon:
    """Word definitions, compiled lazily into packets."""

    def __init__(self, entries: Dict[str, Any], start_word: Optional[str] = START_WORD):
        """
        Args:
            entries: Mapping of word to packet definition (S-expression text
                or normalised lists).
            start_word: Pseudo-word processed before every sentence, if it
                has an entry. None disables it.
        """
        self._entries = dict(entries)
        self._compiled: Dict[str, Packet] = {}
        self.start_word = start_word if start_word in self._entries else None

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'Lexicon':
        """Load a lexicon from a JSON file (default: the bundled one)."""
        path = Path(path) if path else default_lexicon_path()
        logger.info(f"Loading lexicon from {path}")
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Lexicon':
        if "words" not in data or not isinstance(data["words"], dict):
            raise MalformedRequest("Lexicon data must have a 'words' mapping")
        lexicon = cls(data["words"], start_word=data.get("start", START_WORD))
        logger.info(f"Lexicon ready: {len(lexicon)} entries, start word: {lexicon.start_word}")
        return lexicon

    def packet_for(self, word: str) -> Packet:
        """
        Return the compiled packet for a word.

        Raises:
            UnknownWord: if the word has no entry.
            MalformedRequest: if its definition does not compile.
        """
        if word in self._compiled:
            return self._compiled[word]
        if word not in self._entries:
            raise UnknownWord(word)
        try:
            packet = compile_packet(_definition_text(self._entries[word]))
        except MalformedRequest as e:
            raise MalformedRequest(str(e), word=word) from e
        self._compiled[word] = packet
        return packet

    def lookup(self, word: str) -> Optional[Packet]:
        """Like packet_for, but None for unknown words."""
        try:
            return self.packet_for(word)
        except UnknownWord:
            return None

    def validate(self) -> Dict[str, str]:
        """Compile every entry; return {word: error message} for the broken ones."""
        errors = {}
        for word in self._entries:
            try:
                self.packet_for(word)
            except MalformedRequest as e:
                errors[word] = str(e)
        return errors

    def words(self) -> Iterable[str]:
        return tuple(self._entries)

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Lexicon({len(self)} entries)"
