"""
Template instantiation: turn a variable-laden CD form into a concrete tree.

Rules, applied recursively:

1. atoms come back unchanged;
2. a variable reference is replaced by the instantiated value of its slot;
3. a frame keeps its header and drops every role whose filler instantiates
   to an empty value (``nil``, false, empty list); a frame that loses all its
   roles still comes back as ``(header)``;
4. a compound concept instantiates each of its frames independently.

Resolution keeps the chain of slots currently being expanded. Meeting a slot
that is already on the chain means the bindings are cyclic.
"""
import logging
from typing import Any, Tuple

from atendo.cd_form import Compound, Frame, Var, is_empty
from atendo.environment import Environment
from atendo.errors import CyclicBinding

logger = logging.getLogger(__name__)


def instantiate(template: Any, env: Environment) -> Any:
    """
    Resolve a template against the environment.

    Args:
        template: Atom, Var, Frame, Compound or tuple of those.
        env: Environment holding the final bindings.

    Returns:
        A new tree containing no variable references.

    Raises:
        CyclicBinding: if resolving a variable leads back to itself.
        UnboundSlot: if a variable names a slot that was never declared.
    """
    return _instantiate(template, env, ())


def _instantiate(template: Any, env: Environment, chain: Tuple[str, ...]) -> Any:
    if isinstance(template, Var):
        if template.name in chain:
            raise CyclicBinding(chain + (template.name,))
        return _instantiate(env.get(template.name), env, chain + (template.name,))

    if isinstance(template, Frame):
        roles = []
        for role, filler in template.roles:
            value = _instantiate(filler, env, chain)
            if is_empty(value):
                logger.debug(f"Pruning empty role '{role}' from ({template.header} ...)")
                continue
            roles.append((role, value))
        return Frame(template.header, tuple(roles))

    if isinstance(template, Compound):
        return Compound(tuple(_instantiate(frame, env, chain) for frame in template.frames))

    if isinstance(template, tuple):
        return tuple(_instantiate(item, env, chain) for item in template)

    return template
