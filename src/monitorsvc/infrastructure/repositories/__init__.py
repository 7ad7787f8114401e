"""Data mappers between table rows and record models."""

from monitorsvc.infrastructure.repositories.monitor import MonitorRepository

__all__ = ["MonitorRepository"]
