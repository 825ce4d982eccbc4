#!/usr/bin/env python
"""Command line front end for the bootstrap orchestrator.

Usage:
    python backend/scripts/init_system.py                         # full run in INIT_MODE (default website)
    python backend/scripts/init_system.py --mode company          # pin mode, then run
    python backend/scripts/init_system.py --allow-reinit          # re-run on an initialized system
    python backend/scripts/init_system.py --users-only            # users (plus closure) and policies
    python backend/scripts/init_system.py --orgs-only             # organizations (plus closure) and policies
    python backend/scripts/init_system.py --validate              # seed data cross-checks; exit 2 on findings
    python backend/scripts/init_system.py --show-state
    python backend/scripts/init_system.py --backup | --list-backups | --restore KEY
    python backend/scripts/init_system.py --reset                 # needs INIT_ALLOW_REINITIALIZATION=1
"""
from __future__ import annotations
import os, sys, argparse, textwrap, json, logging

# Allow running from repo root
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bootstrapper import create_app, get_db  # type: ignore
from bootstrapper.config.initialization import InitConfig
from bootstrapper.errors import InitializationError
from bootstrapper.models import Base
from bootstrapper.services.data_loader import Mode
from bootstrapper.services.orchestrator import Orchestrator
from bootstrapper.services.store import Store


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Initialize roles, users, tenants, policies and organization data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  full run: init_system.py --mode enterprise\n  check seed data: init_system.py --validate\n  export state: init_system.py --show-state --export-json state.json\n""")
    )
    p.add_argument('--mode', help='website | company | enterprise; pinned before any run (only before the first run)')
    p.add_argument('--allow-reinit', action='store_true', help='Run again even if already initialized')
    group = p.add_mutually_exclusive_group()
    group.add_argument('--users-only', action='store_true', help='Initialize users only')
    group.add_argument('--orgs-only', action='store_true', help='Initialize organizations only')
    group.add_argument('--reset', action='store_true', help='Reset the run state (data is kept)')
    group.add_argument('--validate', action='store_true', help='Cross-check seed data; exits 2 on findings')
    group.add_argument('--show-state', action='store_true', help='Print the current run state')
    group.add_argument('--backup', action='store_true', help='Back up the current run state')
    group.add_argument('--list-backups', action='store_true', help='List run state backups')
    group.add_argument('--restore', metavar='KEY', help='Restore the run state from a backup key')
    p.add_argument('--export-json', nargs='?', const='-', metavar='FILE', help='Write the resulting state as JSON (to FILE or stdout if omitted)')
    return p.parse_args(argv)


def ensure_schema(session):
    try:
        session.execute(text('SELECT 1 FROM options LIMIT 1'))
    except SQLAlchemyError:
        # Auto-create schema for bootstrap; in real env prefer alembic upgrade
        session.rollback()
        Base.metadata.create_all(session.get_bind())
    finally:
        session.commit()


def export_state(state, target):
    payload = json.dumps(state.to_dict(), indent=2, sort_keys=True)
    if target == '-':
        print(payload)
    else:
        with open(target, 'w', encoding='utf-8') as fh:
            fh.write(payload + '\n')
        print(f"[INFO] State written to {target}")


def run(args, orch: Orchestrator) -> int:
    if args.validate:
        findings = orch.validate()
        if findings:
            print(f'\n[VALIDATION] FAIL ({orch.mode.value}):')
            for f in findings:
                print(' -', f)
            return 2
        print(f'[VALIDATION] OK: {orch.mode.value} seed data is consistent.')
        return 0
    if args.list_backups:
        keys = orch.list_backups()
        if not keys:
            print('[INFO] No backups present.')
        for key in keys:
            print(key)
        return 0
    if args.backup:
        print(f"[DONE] Backup created: {orch.create_backup()}")
        return 0
    runs = args.users_only or args.orgs_only or not (args.restore or args.reset or args.show_state)
    if args.mode and runs and orch.mode is not Mode.parse(args.mode):
        orch.set_mode(args.mode)

    if args.restore:
        orch.restore_backup(args.restore)
        print(f"[DONE] State restored from {args.restore}")
    elif args.reset:
        orch.reset_initialization()
        print('[DONE] Initialization state reset.')
    elif args.users_only:
        orch.initialize_users()
    elif args.orgs_only:
        orch.initialize_organizations()
    elif not args.show_state:
        orch.execute(allow_reinit=args.allow_reinit)
        print(f"[DONE] {orch.mode.value} initialization complete.")

    state = orch.get_state()
    if args.export_json:
        export_state(state, args.export_json)
    else:
        print(f"[STATE] mode={state.mode} phase={state.phase} initialized={state.is_initialized}")
        for status in state.statuses:
            suffix = f" ({status.error})" if status.error else ''
            print(f"  {status.component.ljust(14)} {status.status}{suffix}")
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=os.getenv('LOG_LEVEL', 'INFO'), format='[%(levelname)s] %(message)s')
    app = create_app()
    with app.app_context():
        session = get_db()
        ensure_schema(session)
        orch = Orchestrator(Store(session), InitConfig.from_mapping(app.config))
        try:
            code = run(args, orch)
        except InitializationError as exc:
            print(f"[ERROR] {type(exc).__name__}: {exc}")
            code = 1
        finally:
            session.close()
    sys.exit(code)


if __name__ == '__main__':
    main()
