"""Shared types for badgebrotr services."""

from .types import EventPublisher, EventQuerier


__all__ = ["EventPublisher", "EventQuerier"]
