"""Simple finite state machine utility for enforcing allowed phase transitions.

Usage:
    from bootstrapper.utils.fsm import TransitionValidator
    PHASES = TransitionValidator({
        'not_initialized': {'running'},
        'running': {'initialized', 'failed'},
        'initialized': set(),
    }, field_name='phase')
    PHASES.assert_can_transition(current, target)

Raises InvalidTransition if the move is not in the graph.
"""
from __future__ import annotations
from typing import Dict, Set

from bootstrapper.errors import InvalidTransition


class TransitionValidator:
    def __init__(self, graph: Dict[str, Set[str]], field_name: str = 'status'):
        self.graph = graph
        self.field_name = field_name

    def can_transition(self, current: str, target: str) -> bool:
        return target in self.graph.get(current, set())

    def assert_can_transition(self, current: str, target: str):
        if not self.can_transition(current, target):
            raise InvalidTransition(f"Invalid {self.field_name} transition {current} -> {target}")
        return True

__all__ = ['TransitionValidator']
