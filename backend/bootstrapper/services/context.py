from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional

from bootstrapper.config.initialization import InitConfig
from bootstrapper.errors import DependencyMissing
from bootstrapper.models import Tenant, User
from bootstrapper.seeds.templates import ModeProfile
from .data_loader import DataLoader
from .store import Store

log = logging.getLogger(__name__)


@dataclass
class ProvisionContext:
    """Everything one provisioning run needs, passed explicitly to every step."""
    store: Store
    loader: DataLoader
    config: InitConfig = field(default_factory=InitConfig)

    @property
    def profile(self) -> ModeProfile:
        return self.loader.profile

    def default_tenant(self) -> Optional[Tenant]:
        return self.store.tenants.get_by_key(self.profile.default_tenant_slug)

    def require_default_tenant(self) -> Tenant:
        tenant = self.default_tenant()
        if tenant is None:
            raise DependencyMissing(f"default tenant '{self.profile.default_tenant_slug}' not found")
        return tenant

    def admin_user(self) -> User:
        """First existing user among the mode's admin candidates."""
        for username in self.profile.admin_usernames:
            user = self.store.users.get_by_key(username)
            if user is not None:
                return user
        raise DependencyMissing(f"no admin user found among {list(self.profile.admin_usernames)}")


__all__ = ['ProvisionContext']
