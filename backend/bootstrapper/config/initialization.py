"""Typed view over the INIT_* keys of the Flask config.

Usage:
    from bootstrapper.config.initialization import InitConfig
    cfg = InitConfig.from_mapping(current_app.config)
    cfg.mode, cfg.allow_reinitialization, cfg.password_policy.min_length
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping

DEFAULT_MODE = 'website'
DEFAULT_PASSWORD_MIN_LENGTH = 8


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int = DEFAULT_PASSWORD_MIN_LENGTH
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digits: bool = True
    require_special: bool = False


@dataclass(frozen=True)
class InitConfig:
    mode: str = DEFAULT_MODE
    allow_reinitialization: bool = False
    persist_state: bool = True
    init_token: str = ''
    password_policy: PasswordPolicy = field(default_factory=PasswordPolicy)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> 'InitConfig':
        policy = PasswordPolicy(
            min_length=int(config.get('INIT_PASSWORD_MIN_LENGTH', DEFAULT_PASSWORD_MIN_LENGTH)),
            require_uppercase=_as_bool(config.get('INIT_PASSWORD_REQUIRE_UPPERCASE', True)),
            require_lowercase=_as_bool(config.get('INIT_PASSWORD_REQUIRE_LOWERCASE', True)),
            require_digits=_as_bool(config.get('INIT_PASSWORD_REQUIRE_DIGITS', True)),
            require_special=_as_bool(config.get('INIT_PASSWORD_REQUIRE_SPECIAL', False)),
        )
        return cls(
            mode=str(config.get('INIT_MODE') or DEFAULT_MODE),
            allow_reinitialization=_as_bool(config.get('INIT_ALLOW_REINITIALIZATION', False)),
            persist_state=_as_bool(config.get('INIT_PERSIST_STATE', True)),
            init_token=str(config.get('INIT_TOKEN') or ''),
            password_policy=policy,
        )


__all__ = ['InitConfig', 'PasswordPolicy', 'DEFAULT_MODE']
