"""Scheduling - deferred callbacks used to settle reactive updates."""

from .next_tick import next_tick, wait_tick, ManualScheduler

__all__ = ['next_tick', 'wait_tick', 'ManualScheduler']
