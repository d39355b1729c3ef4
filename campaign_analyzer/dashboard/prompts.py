"""Questionary prompt helpers for the interactive dashboard.

Each helper returns a plain value and maps a cancelled prompt (Ctrl-C, which
questionary reports as ``None``) to the supplied default, so callers never
deal with ``None``. Tests replace these functions with ``monkeypatch``.
"""

from __future__ import annotations

import questionary


def ask_select(prompt: str, choices: list[str], default: str | None = None) -> str:
    """Ask the user to pick one of ``choices``.

    Parameters
    ----------
    prompt : str
        Question shown above the list.
    choices : list[str]
        Options in display order.
    default : str | None, optional
        Pre-selected option, also returned when the prompt is cancelled.
        Falls back to the last choice when omitted.

    Returns
    -------
    str
        The selected option.
    """
    fallback = default if default in choices else choices[-1]
    answer = questionary.select(prompt, choices=choices, default=fallback).ask()
    return str(answer) if answer is not None else fallback


def ask_text(prompt: str, default: str = "") -> str:
    """Ask for free text; returns ``default`` on cancel or empty input."""
    answer = questionary.text(prompt, default=default).ask()
    return (answer or "").strip() or default


def ask_path(prompt: str, default: str = "") -> str:
    """Ask for a filesystem path with completion; returns ``default`` on cancel."""
    answer = questionary.path(prompt, default=default).ask()
    return (answer or "").strip() or default
