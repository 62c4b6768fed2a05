#!/usr/bin/env python3
"""
Error Taxonomy
==============
Exceptions raised by conlangkit.

- ConfigurationError: a language document could not be read or is malformed
- ExhaustedAttempts: root synthesis ran out of its retry budget
- InsufficientDiversity: root seeding could not find enough distinct forms

Derivation misses (a blocked rule or a duplicate form) are not errors and
never surface here.
"""

from pathlib import Path
from typing import Optional, Union


class ConlangkitError(Exception):
    """Base exception for all conlangkit errors."""


class ConfigurationError(ConlangkitError):
    """A language configuration file is unreadable, unparseable or invalid."""

    def __init__(self, reason: str, path: Optional[Union[str, Path]] = None):
        self.reason = reason
        self.path = str(path) if path is not None else None
        if self.path:
            message = f"Invalid configuration '{self.path}': {reason}"
        else:
            message = f"Invalid configuration: {reason}"
        super().__init__(message)


class ExhaustedAttempts(ConlangkitError):
    """Root synthesis could not satisfy its constraints within the retry budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Failed to generate a valid root after {attempts} attempts. "
            f"Check your language configuration for overly restrictive rules."
        )


class InsufficientDiversity(ConlangkitError):
    """Root seeding could not reach the requested number of unique roots."""

    def __init__(self, requested: int, produced: int, draws: int):
        self.requested = requested
        self.produced = produced
        self.draws = draws
        super().__init__(
            f"Only {produced} of {requested} unique roots found after {draws} draws. "
            f"The phonotactic space is too small for this many roots."
        )
