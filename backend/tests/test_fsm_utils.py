import pytest
from bootstrapper.errors import InvalidTransition
from bootstrapper.services.orchestrator import PHASES
from bootstrapper.utils.fsm import TransitionValidator


def test_transition_validator_allows_valid():
    fsm = TransitionValidator({'A': {'B'}, 'B': set()})
    assert fsm.assert_can_transition('A', 'B') is True


def test_transition_validator_blocks_invalid():
    fsm = TransitionValidator({'A': {'B'}, 'B': set()}, field_name='widget')
    with pytest.raises(InvalidTransition) as exc:
        fsm.assert_can_transition('A', 'C')
    assert 'widget' in str(exc.value)
    assert exc.value.http_status == 409


@pytest.mark.parametrize('current,target,allowed', [
    ('not_initialized', 'running', True),
    ('running', 'initialized', True),
    ('running', 'failed', True),
    ('failed', 'running', True),
    ('initialized', 'running', True),
    ('initialized', 'not_initialized', True),
    ('not_initialized', 'initialized', False),
    ('failed', 'initialized', False),
    ('initialized', 'failed', False),
])
def test_initialization_phase_graph(current, target, allowed):
    assert PHASES.can_transition(current, target) is allowed
