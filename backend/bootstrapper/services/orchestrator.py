"""Initialization orchestrator.

Built per request (or per CLI run) around a Store; the run state is reloaded from
the options table on construction. Steps run strictly in order and the first
failing step aborts the run:

    roles -> permissions -> tenants -> users -> policies
          -> menus -> options -> dictionaries -> organizations

Each successful step is committed, so rows from earlier steps survive a later
failure and the existence guards absorb the next run.
"""
from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Tuple

from sqlalchemy.exc import SQLAlchemyError

from bootstrapper.config.initialization import InitConfig
from bootstrapper.errors import (
    InitializationError, AlreadyInitialized, NotYetInitialized, DependencyMissing, ModeLocked, StepFailed,
    ValidationWarning,
)
from bootstrapper.utils.fsm import TransitionValidator
from . import roles, permissions, tenants, users, policy, menus, options, dictionaries, organizations
from . import state as state_store
from .context import ProvisionContext
from .data_loader import Mode, DataLoader, get_data_loader
from .state import (
    RunState, STEP_INITIALIZED, STEP_FAILED, PHASE_NOT_INITIALIZED, PHASE_RUNNING, PHASE_INITIALIZED, PHASE_FAILED,
)
from .store import Store
from .validator import Finding, check_seed_data, validate_seed_data

log = logging.getLogger(__name__)

Step = Tuple[str, Callable[[ProvisionContext], object]]

STEPS: Tuple[Step, ...] = (
    ('roles', roles.check),
    ('permissions', permissions.check),
    ('tenants', tenants.check),
    ('users', users.check),
    ('policies', policy.check),
    ('menus', menus.check),
    ('options', options.check),
    ('dictionaries', dictionaries.check),
    ('organizations', organizations.check),
)
STEP_MAP = dict(STEPS)

USERS_CLOSURE = ('roles', 'permissions', 'tenants')
ORGANIZATIONS_CLOSURE = ('roles', 'permissions', 'tenants', 'users')

PHASES = TransitionValidator({
    PHASE_NOT_INITIALIZED: {PHASE_RUNNING, PHASE_NOT_INITIALIZED},
    # a partial run (users / organizations only) leaves the system not initialized
    PHASE_RUNNING: {PHASE_INITIALIZED, PHASE_FAILED, PHASE_NOT_INITIALIZED},
    PHASE_INITIALIZED: {PHASE_RUNNING, PHASE_NOT_INITIALIZED},
    PHASE_FAILED: {PHASE_RUNNING, PHASE_NOT_INITIALIZED},
}, field_name='initialization phase')


def _compile_policies(ctx: ProvisionContext):
    summary = policy.compile_policies(ctx)
    if summary.failed:
        log.warning('policy passes failed: %s', ', '.join(summary.failed))
    return summary


class Orchestrator:
    def __init__(self, store: Store, config: InitConfig = None):
        self.store = store
        self.config = config or InitConfig()
        self.state = state_store.load_state(store) or RunState(mode=Mode.parse(self.config.mode).value)
        self.phase = self.state.phase

    @property
    def mode(self) -> Mode:
        return Mode.parse(self.state.mode)

    @property
    def loader(self) -> DataLoader:
        return get_data_loader(self.mode)

    def context(self) -> ProvisionContext:
        return ProvisionContext(store=self.store, loader=self.loader, config=self.config)

    def get_state(self) -> RunState:
        return self.state

    def is_initialized(self) -> bool:
        return self.state.is_initialized

    # --- mode ---
    def set_mode(self, mode) -> RunState:
        """Pin a new mode. Only allowed before anything has been provisioned."""
        target = Mode.parse(mode)
        if self.phase != PHASE_NOT_INITIALIZED or self.state.statuses:
            raise ModeLocked(
                f"mode is pinned to '{self.state.mode}' once initialization has started; reset first",
                self.state,
            )
        if target.value != self.state.mode:
            log.info('initialization mode changed %s -> %s', self.state.mode, target.value)
            self.state.mode = target.value
            self._persist()
        return self.state

    def validate(self) -> List[Finding]:
        return validate_seed_data(self.loader)

    # --- runs ---
    def execute(self, allow_reinit: bool = False) -> RunState:
        if self.state.is_initialized and not (allow_reinit or self.config.allow_reinitialization):
            log.info('system already initialized, skipping')
            raise AlreadyInitialized('system is already initialized', self.state)
        ctx = self.context()
        self._begin()
        log.info('starting %s initialization', self.mode.value)
        self._advise(ctx)
        self._run(ctx, STEPS)
        self._finish(PHASE_INITIALIZED)
        log.info('initialization completed successfully')
        return self.state

    def initialize_users(self) -> RunState:
        return self._run_slice('users', USERS_CLOSURE)

    def initialize_organizations(self) -> RunState:
        return self._run_slice('organizations', ORGANIZATIONS_CLOSURE)

    def _run_slice(self, target: str, closure: Iterable[str]) -> RunState:
        ctx = self.context()
        self._begin()
        steps = [] if self.state.is_initialized else [(name, STEP_MAP[name]) for name in closure]
        steps.append((target, STEP_MAP[target]))
        # recompile unguarded so new users and roles get their rules
        steps.append(('policies', _compile_policies))
        log.info('initializing %s (%s)', target, ', '.join(name for name, _ in steps))
        self._run(ctx, steps)
        self._finish(PHASE_INITIALIZED if self.state.is_initialized else PHASE_NOT_INITIALIZED)
        return self.state

    def reset_initialization(self) -> RunState:
        if not self.config.allow_reinitialization:
            raise AlreadyInitialized('reinitialization is disabled by configuration', self.state)
        PHASES.assert_can_transition(self.phase, PHASE_NOT_INITIALIZED)
        self.state = RunState(mode=self.state.mode)
        self.phase = PHASE_NOT_INITIALIZED
        self._persist()
        log.info('initialization state reset; provisioned data kept')
        return self.state

    # --- backups ---
    def create_backup(self) -> str:
        if not self.state.is_initialized and not self.state.statuses:
            raise NotYetInitialized('nothing to back up before the first initialization run', self.state)
        key = state_store.create_backup(self.store, self.state)
        self.store.commit()
        return key

    def list_backups(self) -> List[str]:
        return state_store.list_backups(self.store)

    def restore_backup(self, key: str) -> RunState:
        restored = state_store.read_backup(self.store, key)
        if restored is None:
            raise DependencyMissing(f"backup '{key}' not found", self.state)
        self.state = restored
        self.phase = restored.phase
        state_store.save_state(self.store, self.state)
        self.store.commit()
        log.info('initialization state restored from %s', key)
        return self.state

    # --- internals ---
    def _begin(self):
        PHASES.assert_can_transition(self.phase, PHASE_RUNNING)
        self.phase = PHASE_RUNNING
        self.state.statuses = []

    def _advise(self, ctx: ProvisionContext):
        try:
            check_seed_data(ctx.loader)
        except ValidationWarning as warning:
            for finding in warning.findings:
                log.warning('seed data: %s', finding)

    def _run(self, ctx: ProvisionContext, steps: Iterable[Step]):
        for name, step in steps:
            log.info('initializing %s...', name)
            try:
                step(ctx)
                self.store.commit()
            except (InitializationError, SQLAlchemyError) as exc:
                self.store.rollback()
                log.error('initialization step %s failed: %s', name, exc)
                self.state.record(name, STEP_FAILED, str(exc))
                self._finish(PHASE_FAILED)
                raise StepFailed(name, exc, self.state) from exc
            self.state.record(name, STEP_INITIALIZED)

    def _finish(self, phase: str):
        PHASES.assert_can_transition(self.phase, phase)
        self.phase = phase
        if phase == PHASE_INITIALIZED:
            self.state.is_initialized = True
        self.state.stamp()
        self._persist()

    def _persist(self):
        if not self.config.persist_state:
            return
        try:
            state_store.save_state(self.store, self.state)
            self.store.commit()
        except (InitializationError, SQLAlchemyError) as exc:
            self.store.rollback()
            log.warning('failed to save initialization state: %s', exc)


__all__ = ['Orchestrator', 'STEPS', 'PHASES']
