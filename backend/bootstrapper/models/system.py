from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, Text, Boolean, ForeignKey, UniqueConstraint
from typing import Optional

from .authz import Base


class Menu(Base):
    __tablename__ = 'menus'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True, index=True)
    parent_id: Mapped[Optional[int]] = mapped_column(ForeignKey('menus.id', ondelete='CASCADE'), nullable=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    path: Mapped[str] = mapped_column(String(255), default='')
    icon: Mapped[str] = mapped_column(String(64), default='')
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    # Permission name required to see the entry
    permission: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    hidden: Mapped[bool] = mapped_column(Boolean, default=False)
    created_by: Mapped[Optional[int]] = mapped_column(ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    __table_args__ = (UniqueConstraint('tenant_id', 'slug', name='uq_menu_slug'),)


class Option(Base):
    """Key/value configuration. tenant_id NULL holds system records (e.g. run state)."""
    __tablename__ = 'options'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(16), default='string')
    value: Mapped[str] = mapped_column(Text, default='')
    autoload: Mapped[bool] = mapped_column(Boolean, default=True)
    __table_args__ = (UniqueConstraint('tenant_id', 'name', name='uq_option_name'),)


class Dictionary(Base):
    __tablename__ = 'dictionaries'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(16), default='object')
    value: Mapped[str] = mapped_column(Text, default='')
    description: Mapped[str] = mapped_column(String(255), default='')
    __table_args__ = (UniqueConstraint('tenant_id', 'slug', name='uq_dictionary_slug'),)
