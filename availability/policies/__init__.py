"""Task ordering and slot scoring policies."""

from .base import SchedulingPolicy
from .priority import PriorityPolicy

__all__ = ['SchedulingPolicy', 'PriorityPolicy']
