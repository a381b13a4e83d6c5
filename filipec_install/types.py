"""Shared type definitions and utilities for filipec-install."""

from __future__ import annotations

from dataclasses import dataclass

# Reusable decorator for immutable, slot-based dataclasses.
frozen_slots = dataclass(frozen=True, slots=True)

# Shell name -> rc file name relative to the home directory.
RcFileMap = tuple[tuple[str, str], ...]
