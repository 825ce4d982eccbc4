"""Run state record and its persistence in the options table.

The state lives as one JSON document under STATE_OPTION_KEY (tenant_id NULL).
Backups are copies of that document under BACKUP_OPTION_PREFIX + timestamp.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bootstrapper.constants.policy import STATE_OPTION_KEY, BACKUP_OPTION_PREFIX, STATE_VERSION
from .store import Store

log = logging.getLogger(__name__)

STEP_INITIALIZED = 'initialized'
STEP_FAILED = 'failed'

PHASE_NOT_INITIALIZED = 'not_initialized'
PHASE_RUNNING = 'running'
PHASE_INITIALIZED = 'initialized'
PHASE_FAILED = 'failed'


@dataclass
class StepStatus:
    component: str
    status: str
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {'component': self.component, 'status': self.status}
        if self.error:
            out['error'] = self.error
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StepStatus':
        return cls(component=data.get('component', ''), status=data.get('status', ''), error=data.get('error'))


@dataclass
class RunState:
    is_initialized: bool = False
    statuses: List[StepStatus] = field(default_factory=list)
    last_run_time: Optional[int] = None
    version: str = STATE_VERSION
    mode: str = 'website'

    @property
    def phase(self) -> str:
        if any(s.status == STEP_FAILED for s in self.statuses):
            return PHASE_FAILED
        if self.is_initialized:
            return PHASE_INITIALIZED
        return PHASE_NOT_INITIALIZED

    @property
    def components(self) -> List[str]:
        return [s.component for s in self.statuses]

    def record(self, component: str, status: str, error: Optional[str] = None) -> StepStatus:
        entry = StepStatus(component, status, error)
        self.statuses.append(entry)
        return entry

    def stamp(self):
        self.last_run_time = int(datetime.now(timezone.utc).timestamp() * 1000)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_initialized': self.is_initialized,
            'statuses': [s.to_dict() for s in self.statuses],
            'last_run_time': self.last_run_time,
            'version': self.version,
            'mode': self.mode,
            'phase': self.phase,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RunState':
        return cls(
            is_initialized=bool(data.get('is_initialized', False)),
            statuses=[StepStatus.from_dict(s) for s in data.get('statuses') or []],
            last_run_time=data.get('last_run_time'),
            version=data.get('version') or STATE_VERSION,
            mode=data.get('mode') or 'website',
        )


def _decode(raw: Optional[str], name: str) -> Optional[RunState]:
    if not raw:
        return None
    try:
        return RunState.from_dict(json.loads(raw))
    except (ValueError, TypeError, AttributeError) as exc:
        log.warning('ignoring unreadable initialization state %s: %s', name, exc)
        return None


def load_state(store: Store) -> Optional[RunState]:
    return _decode(store.get_option(STATE_OPTION_KEY), STATE_OPTION_KEY)


def save_state(store: Store, state: RunState):
    store.set_option(STATE_OPTION_KEY, json.dumps(state.to_dict(), sort_keys=True))


def backup_key(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"{BACKUP_OPTION_PREFIX}{now.strftime('%Y%m%d%H%M%S%f')}"


def create_backup(store: Store, state: RunState) -> str:
    key = backup_key()
    store.set_option(key, json.dumps(state.to_dict(), sort_keys=True))
    log.info('initialization state backed up as %s', key)
    return key


def list_backups(store: Store) -> List[str]:
    return store.option_names(BACKUP_OPTION_PREFIX)


def read_backup(store: Store, key: str) -> Optional[RunState]:
    if not key.startswith(BACKUP_OPTION_PREFIX):
        key = f"{BACKUP_OPTION_PREFIX}{key}"
    return _decode(store.get_option(key), key)


__all__ = [
    'StepStatus', 'RunState', 'load_state', 'save_state', 'backup_key', 'create_backup', 'list_backups',
    'read_backup', 'STEP_INITIALIZED', 'STEP_FAILED', 'PHASE_NOT_INITIALIZED', 'PHASE_RUNNING',
    'PHASE_INITIALIZED', 'PHASE_FAILED',
]
