"""Reusable validation helpers.

Password checks return a list of human readable problems instead of raising so the
seeding pipeline can report weak template passwords as warnings.
"""
from __future__ import annotations
import string
from typing import List

from bootstrapper.config.initialization import PasswordPolicy


def password_problems(raw: str, policy: PasswordPolicy) -> List[str]:
    """Return the policy rules `raw` violates (empty list when it complies)."""
    problems: List[str] = []
    raw = raw or ''
    if len(raw) < policy.min_length:
        problems.append(f"shorter than {policy.min_length} characters")
    if policy.require_uppercase and not any(c.isupper() for c in raw):
        problems.append('missing an uppercase letter')
    if policy.require_lowercase and not any(c.islower() for c in raw):
        problems.append('missing a lowercase letter')
    if policy.require_digits and not any(c.isdigit() for c in raw):
        problems.append('missing a digit')
    if policy.require_special and not any(c in string.punctuation for c in raw):
        problems.append('missing a special character')
    return problems


__all__ = ['password_problems']
