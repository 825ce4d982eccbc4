"""Audit trail for the initialization control endpoints (mode, reset, backups)."""
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, JSON, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from .authz import Base


class AuditLog(Base):
    __tablename__ = 'audit_logs'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # INIT.MODE.SET, INIT.RESET, INIT.BACKUP.CREATE, INIT.BACKUP.RESTORE
    action: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # 0 when the call was authorized by the init token alone
    actor_user_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    entity: Mapped[str] = mapped_column(String(64), nullable=False, default='Initialization')
    entity_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    remote_addr: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    meta: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f'<AuditLog {self.action} {self.entity}:{self.entity_id} by {self.actor_user_id}>'
