"""
Requests, packets and the packet stack.

A request is a guarded action::

    ((test (equal partOfSpeech 'noun-phrase))
     (assign subject cdForm)
     (next-packet ((test (equal partOfSpeech 'verb))
                   (assign concept cdForm))))

A packet is an ordered list of requests competing for the same expectation;
order is priority, the first triggered request wins and the rest of the
packet is discarded with it.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from atendo.cd_form import is_symbol
from atendo.environment import Environment
from atendo.errors import MalformedRequest
from atendo.expressions import compile_expression, is_true
from atendo.sexpr import format_raw, read

logger = logging.getLogger(__name__)

TEST = "test"
ASSIGN = "assign"
NEXT_PACKET = "next-packet"
CLAUSES = (TEST, ASSIGN, NEXT_PACKET)


@dataclass(frozen=True)
class Request:
    test: Optional[Any] = None
    assignments: Tuple[Tuple[str, Any], ...] = ()
    next_packets: Tuple['Packet', ...] = ()
    source: str = field(default="", compare=False)

    def is_triggered(self, env: Environment) -> bool:
        return self.test is None or is_true(env.evaluate(self.test))

    def fire(self, env: Environment) -> None:
        """Apply the assignments in order; each sees the writes before it."""
        for slot, expr in self.assignments:
            env.set(slot, env.evaluate(expr))

    def __repr__(self) -> str:
        return f"Request({self.source or '...'})"


@dataclass(frozen=True)
class Packet:
    requests: Tuple[Request, ...] = ()

    def select(self, env: Environment) -> Optional[Request]:
        """Return the first triggered request, or None."""
        for request in self.requests:
            if request.is_triggered(env):
                return request
        return None

    def __iter__(self):
        return iter(self.requests)

    def __len__(self) -> int:
        return len(self.requests)

    def __bool__(self) -> bool:
        return bool(self.requests)


class PacketStack:
    """Strict LIFO of packets; only the top is ever inspected."""

    def __init__(self):
        self._packets: List[Packet] = []

    def push(self, packet: Optional[Packet]) -> None:
        if not packet:
            return
        self._packets.append(packet)

    def pop(self) -> Packet:
        if not self._packets:
            raise IndexError("pop from empty packet stack")
        return self._packets.pop()

    def peek(self) -> Optional[Packet]:
        return self._packets[-1] if self._packets else None

    def is_empty(self) -> bool:
        return not self._packets

    def clear(self) -> None:
        self._packets = []

    def __len__(self) -> int:
        return len(self._packets)


# -----------------------------------------------------------------------------
# --- Compiling lexicon data
# -----------------------------------------------------------------------------

def compile_request(raw: Any) -> Request:
    """
    Compile one request from normalised S-expression data.

    Raises:
        MalformedRequest: if the request is not a non-empty list of
            test / assign / next-packet clauses.
    """
    if not isinstance(raw, list) or not raw:
        raise MalformedRequest(f"A request must be a non-empty list of clauses, got {raw!r}")

    test = None
    seen_test = False
    assignments = []
    next_packets = []

    for clause in raw:
        if not isinstance(clause, list) or not clause or clause[0] not in CLAUSES:
            raise MalformedRequest(
                f"Request clause must start with one of {', '.join(CLAUSES)}: {clause!r}"
            )
        kind, body = clause[0], clause[1:]

        if kind == TEST:
            if seen_test:
                raise MalformedRequest("A request may have only one test clause")
            if len(body) != 1:
                raise MalformedRequest(f"test takes exactly one expression: {clause!r}")
            test = compile_expression(body[0])
            seen_test = True

        elif kind == ASSIGN:
            if len(body) % 2:
                raise MalformedRequest(f"assign needs slot/expression pairs: {clause!r}")
            for slot, expr in zip(body[0::2], body[1::2]):
                if not is_symbol(slot) or slot in ("nil", "t"):
                    raise MalformedRequest(f"assign target must be a slot name, got {slot!r}")
                assignments.append((slot, compile_expression(expr)))

        else:
            next_packets.append(compile_packet(body))

    return Request(
        test=test,
        assignments=tuple(assignments),
        next_packets=tuple(next_packets),
        source=format_raw(raw),
    )


def compile_packet(raw: Any) -> Packet:
    """Compile a packet from a list of requests, or from S-expression text."""
    if isinstance(raw, str):
        raw = read(raw)
    if not isinstance(raw, list):
        raise MalformedRequest(f"A packet must be a list of requests, got {raw!r}")
    return Packet(tuple(compile_request(request) for request in raw))
