"""
The driver: raw sentence text in, traced result out.
"""
import logging
from typing import Any, Optional

from .engine import CascadeEngine
from .errors import AtendoError
from .lexicon import Lexicon
from .sexpr import format_tree, tree_to_data
from .tokenizer import tokenize
from .trace import ExecutionTrace

logger = logging.getLogger(__name__)


class AtendoPipeline:
    """
    Tokenizes a sentence, runs it through the cascade engine and records
    everything in an ExecutionTrace.
    """
    def __init__(self, lexicon: Optional[Lexicon] = None, carry_over: bool = False):
        """
        Initialize the pipeline.

        Args:
            lexicon: Lexicon to use. Defaults to the bundled one (or the file
                named by ATENDO_LEXICON).
            carry_over: Keep slot values from one sentence to the next instead
                of starting every parse from a fresh environment.
        """
        self.lexicon = lexicon or Lexicon.load()
        self.engine = CascadeEngine(self.lexicon, carry_over=carry_over)
        logger.info(f"AtendoPipeline initialized with {self.lexicon} (carry_over={carry_over}).")

    def run(self, text: str) -> ExecutionTrace:
        """
        Parse one sentence.

        Failures are not raised: they end up in ``trace.error`` as
        ``{"type": ..., "message": ...}``.
        """
        trace = ExecutionTrace(initial_query=text)
        try:
            words = tokenize(text)
            trace.add_step(
                "Tokenizer",
                inputs={"text": text},
                outputs={"words": words},
                description="Split the sentence into lexicon words."
            )

            result = self.engine.parse_sentence(words, trace=trace)
            trace.unknown_words = list(self.engine.unknown_words)
            trace.set_final_response(format_tree(result), tree_to_data(result))
        except AtendoError as e:
            trace.unknown_words = list(self.engine.unknown_words)
            trace.set_error(e)
        except Exception as e:
            # Ensure any failure is logged to the trace
            logger.error(f"Pipeline failed with error: {e}", exc_info=True)
            trace.unknown_words = list(self.engine.unknown_words)
            trace.set_error(e)

        return trace

    def parse_text(self, text: str) -> Any:
        """Parse one sentence and return the result tree; errors propagate."""
        return self.engine.parse_sentence(tokenize(text))
