"""
S-expression reading and printing.

Lexicon definitions are written in S-expression notation and read with the
``sexpdata`` library. Results go the other way: a tree is turned back into
S-expression text, which is also the format the tests compare against.
"""
from typing import Any

import sexpdata

from atendo.cd_form import Compound, Frame, Var, VARIABLE_PREFIX
from atendo.errors import MalformedRequest


def read(text: str) -> Any:
    """
    Parse one S-expression into nested lists of plain Python values.

    Symbols become ``str``; ``'x`` and double-quoted strings become
    ``['quote', x]``; ``nil`` becomes ``[]`` and ``t`` becomes ``True``.
    """
    try:
        parsed = sexpdata.loads(text)
    except Exception as e:
        raise MalformedRequest(f"Failed to read S-expression: {e}") from e
    return normalise(parsed)


def normalise(obj: Any) -> Any:
    """Recursively convert sexpdata output to plain lists, strings and numbers."""
    if isinstance(obj, list):
        return [normalise(item) for item in obj]
    if isinstance(obj, sexpdata.Quoted):
        return ["quote", normalise(obj.x)]
    if isinstance(obj, sexpdata.Symbol):
        return str(obj)
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, str):
        # string literals are self-evaluating symbols
        return ["quote", str(obj)]
    return obj


def format_tree(tree: Any) -> str:
    """
    Render a tree as S-expression text.

    >>> format_tree(Frame('ptrans', (('to', Frame('store')),)))
    '(ptrans (to (store)))'
    """
    if tree is None or tree is False:
        return "nil"
    if tree is True:
        return "t"
    if isinstance(tree, Var):
        return f"{VARIABLE_PREFIX}{tree.name}"
    if isinstance(tree, Frame):
        parts = [tree.header]
        parts.extend(f"({role} {format_tree(filler)})" for role, filler in tree.roles)
        return "(" + " ".join(parts) + ")"
    if isinstance(tree, Compound):
        return "(" + " ".join(format_tree(frame) for frame in tree.frames) + ")"
    if isinstance(tree, tuple):
        return "(" + " ".join(format_tree(item) for item in tree) + ")"
    return str(tree)


def tree_to_data(tree: Any) -> Any:
    """JSON-ready form of a tree: frames become dicts, compounds become lists."""
    if isinstance(tree, Frame):
        return {
            "header": tree.header,
            "roles": [[role, tree_to_data(filler)] for role, filler in tree.roles],
        }
    if isinstance(tree, Compound):
        return [tree_to_data(frame) for frame in tree.frames]
    if isinstance(tree, tuple):
        return [tree_to_data(item) for item in tree]
    if isinstance(tree, Var):
        return f"{VARIABLE_PREFIX}{tree.name}"
    return tree


def format_raw(raw: Any) -> str:
    """Render normalised S-expression data (as returned by ``read``) as text."""
    if isinstance(raw, list):
        if len(raw) == 2 and raw[0] == "quote":
            return "'" + format_raw(raw[1])
        return "(" + " ".join(format_raw(item) for item in raw) + ")"
    if raw is True:
        return "t"
    return str(raw)
