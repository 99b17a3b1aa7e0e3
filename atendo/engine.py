"""
The cascade engine.

For every word:

1. look the word up and push its packet (unknown words push nothing);
2. cascade: while the top packet has a triggered request, pop the packet,
   fire that request and remember it; stop at the first top packet with no
   triggered request, or when the stack runs dry;
3. push the next packets of every fired request, in firing order, so the
   packets of the most recently fired request end up on top.

After the last word the ``concept`` slot is instantiated into the result.
There is no backtracking: a popped packet is gone for good.
"""
import logging
from typing import Any, Iterable, List

from atendo.environment import CONCEPT, CURRENT_WORD, REMAINING_WORDS, Environment
from atendo.errors import UnknownWord
from atendo.instantiator import instantiate
from atendo.lexicon import Lexicon
from atendo.logging_config import log_with_context
from atendo.packets import PacketStack, Request
from atendo.sexpr import format_tree

logger = logging.getLogger(__name__)


class CascadeEngine:
    """Owns the packet stack and environment of one parse at a time."""

    def __init__(self, lexicon: Lexicon, carry_over: bool = False):
        """
        Args:
            lexicon: Source of word packets.
            carry_over: If True, only the stack and ``concept`` are cleared
                between sentences and every other slot keeps the value the
                previous sentence left in it. If False (default), each parse
                starts from a fresh environment.
        """
        self.lexicon = lexicon
        self.carry_over = carry_over
        self.environment = Environment()
        self.stack = PacketStack()
        self.unknown_words: List[str] = []

    def reset(self) -> None:
        self.stack.clear()
        self.unknown_words = []
        if self.carry_over:
            self.environment.set(CONCEPT, None)
        else:
            self.environment.reset()

    def parse_sentence(self, words: Iterable[str], trace=None) -> Any:
        """
        Run every word through the engine and instantiate the concept.

        Args:
            words: The tokenised sentence.
            trace: Optional ExecutionTrace receiving one step per word.

        Returns:
            The concrete result tree (Frame, Compound, atom or None).

        Raises:
            UnboundSlot, CyclicBinding, MalformedRequest: the parse is
                abandoned; the stack is cleared and, in carry-over mode, the
                environment is rolled back to its state before this parse.
        """
        words = list(words)
        before = self.environment.snapshot()
        self.reset()

        sequence = ([self.lexicon.start_word] if self.lexicon.start_word else []) + words
        logger.info(f"Parsing {len(words)} word(s): {' '.join(words)}")

        try:
            for position, word in enumerate(sequence):
                self.environment.set(CURRENT_WORD, word)
                self.environment.set(REMAINING_WORDS, tuple(sequence[position + 1:]))
                self.process_word(word, trace=trace)
            result = instantiate(self.environment.get(CONCEPT), self.environment)
        except Exception as e:
            logger.error(f"Parse failed: {e.__class__.__name__}: {e}")
            self.stack.clear()
            if self.carry_over:
                self.environment.restore(before)
            raise

        logger.info(f"Result: {format_tree(result)}")
        return result

    def process_word(self, word: str, trace=None) -> List[Request]:
        """Push the word's packet and run the cascade; return the fired requests."""
        unknown = False
        try:
            packet = self.lexicon.packet_for(word)
        except UnknownWord as e:
            logger.warning(f"{e}; it contributes nothing to the parse")
            self.unknown_words.append(word)
            unknown = True
            packet = None

        self.stack.push(packet)
        fired = self.run_cascade()
        pushed = self.push_next_packets(fired)

        if trace is not None:
            trace.add_step(
                "Word",
                inputs={"word": word},
                outputs={
                    "unknown": unknown,
                    "fired": [request.source for request in fired],
                    "pushed_packets": pushed,
                    "stack_depth": len(self.stack),
                },
            )
        return fired

    def run_cascade(self) -> List[Request]:
        """Fire the top packet for as long as it has a triggered request."""
        fired = []
        while not self.stack.is_empty():
            request = self.stack.peek().select(self.environment)
            if request is None:
                break
            self.stack.pop()
            request.fire(self.environment)
            fired.append(request)
            log_with_context(
                f"Fired request {len(fired)} for '{self.environment.get(CURRENT_WORD)}'",
                context={"request": request.source, "stack_depth": len(self.stack)},
                logger=logger,
            )
        return fired

    def push_next_packets(self, fired: List[Request]) -> int:
        pushed = 0
        for request in fired:
            for packet in request.next_packets:
                if packet:
                    self.stack.push(packet)
                    pushed += 1
        return pushed
