# This file makes the 'atendo' directory a Python package.

from atendo.cd_form import Compound, Frame, Var
from atendo.engine import CascadeEngine
from atendo.environment import Environment
from atendo.errors import (
    AtendoError,
    CyclicBinding,
    MalformedRequest,
    UnboundSlot,
    UnknownWord,
)
from atendo.instantiator import instantiate
from atendo.lexicon import Lexicon
from atendo.packets import Packet, PacketStack, Request
from atendo.pipeline import AtendoPipeline
from atendo.sexpr import format_tree

__all__ = [
    'Compound',
    'Frame',
    'Var',
    'CascadeEngine',
    'Environment',
    'AtendoError',
    'CyclicBinding',
    'MalformedRequest',
    'UnboundSlot',
    'UnknownWord',
    'instantiate',
    'Lexicon',
    'Packet',
    'PacketStack',
    'Request',
    'AtendoPipeline',
    'format_tree',
]
