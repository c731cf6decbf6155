"""Typed FIX field values, field maps, session time ranges, timers and logs."""

__version__ = "0.1.0"