"""
Conceptual-dependency forms.

The same tree shape serves two purposes:

- as a *template*, stored in a slot and possibly containing variable
  references (``?name``) that point back into the environment;
- as a *result*, the concrete tree produced by instantiation.

Trees are immutable (frozen dataclasses over tuples), so a value read out of
the environment can never be changed behind the back of whoever holds it.

Leaves are plain Python values: symbols are ``str``, numbers stay numbers,
``None`` is the absent value (printed as ``nil``).
"""
from dataclasses import dataclass
from typing import Any, Tuple

from atendo.errors import MalformedRequest

VARIABLE_PREFIX = "?"


@dataclass(frozen=True)
class Var:
    """Reference to an environment slot, resolved only by the instantiator."""
    name: str

    def __repr__(self) -> str:
        return f"{VARIABLE_PREFIX}{self.name}"


@dataclass(frozen=True)
class Frame:
    """A header symbol plus ordered (role, filler) pairs."""
    header: str
    roles: Tuple[Tuple[str, Any], ...] = ()

    def with_role(self, role: str, filler: Any) -> 'Frame':
        return Frame(self.header, self.roles + ((role, filler),))

    def extend(self, pairs: Tuple[Tuple[str, Any], ...]) -> 'Frame':
        return Frame(self.header, self.roles + tuple(pairs))


@dataclass(frozen=True)
class Compound:
    """Several independent frames produced together (one action, two events)."""
    frames: Tuple[Any, ...]

    def __iter__(self):
        return iter(self.frames)

    def __len__(self) -> int:
        return len(self.frames)


def is_empty(value: Any) -> bool:
    """True for values that prune a role: absent, false, or an empty sequence."""
    if value is None or value is False:
        return True
    if isinstance(value, tuple) and not value:
        return True
    if isinstance(value, Compound) and not value.frames:
        return True
    return False


def is_symbol(value: Any) -> bool:
    return isinstance(value, str)


def build_template(raw: Any) -> Any:
    """
    Build a template from normalised S-expression data.

    ``(ptrans (actor ?x) (to (store)))`` becomes
    ``Frame('ptrans', (('actor', Var('x')), ('to', Frame('store'))))``;
    a list whose head is itself a list becomes a Compound.

    Raises:
        MalformedRequest: if a frame's role entries are not (role filler) pairs.
    """
    if isinstance(raw, list):
        if not raw:
            return None
        if raw[0] == "quote" and len(raw) == 2:
            return build_template(raw[1])
        if isinstance(raw[0], list):
            return Compound(tuple(build_template(item) for item in raw))
        header = raw[0]
        if not is_symbol(header):
            raise MalformedRequest(f"Frame header must be a symbol, got {header!r}")
        roles = []
        for entry in raw[1:]:
            if not (isinstance(entry, list) and len(entry) == 2 and is_symbol(entry[0])):
                raise MalformedRequest(
                    f"Frame '{header}' has a role entry that is not a (role filler) pair: {entry!r}"
                )
            roles.append((entry[0], build_template(entry[1])))
        return Frame(header, tuple(roles))

    if is_symbol(raw):
        if raw == "nil":
            return None
        if raw.startswith(VARIABLE_PREFIX) and len(raw) > 1:
            return Var(raw[len(VARIABLE_PREFIX):])
        return raw

    if raw is True:
        return True

    # numbers and other self-evaluating atoms
    return raw
