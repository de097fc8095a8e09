from __future__ import annotations

from enum import Enum
import logging
from pathlib import Path

from packrender.adapters.errors import InputCancelled, OverwriteCancelled
from packrender.domain.error_context import DEST_FILE, ErrorContext
from packrender.domain.session import SessionState
from packrender.ports.terminal import TerminalPort

logger = logging.getLogger(__name__)

OVERWRITE_PROMPT = "Output file exists, overwrite? [y/n/a] "


class PromptState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    APPROVED = "approved"
    DECLINED = "declined"
    AUTO_APPROVED = "auto_approved"
    CANCELLED = "cancelled"


ANSWERS = {
    "y": PromptState.APPROVED,
    "n": PromptState.DECLINED,
    "a": PromptState.AUTO_APPROVED,
}


def next_state(answer: str) -> PromptState:
    return ANSWERS.get(answer.strip().lower(), PromptState.AWAITING_INPUT)


class ConfirmationGate:
    """Decides whether an existing destination file may be overwritten."""

    def __init__(self, terminal: TerminalPort) -> None:
        self.terminal = terminal

    def _await_answer(self, path: Path) -> PromptState:
        state = PromptState.AWAITING_INPUT
        while state == PromptState.AWAITING_INPUT:
            try:
                answer = self.terminal.input(OVERWRITE_PROMPT)
            except (InputCancelled, KeyboardInterrupt, EOFError, OSError) as e:
                logger.debug("overwrite prompt for %s cancelled: %r", path, e)
                raise OverwriteCancelled(
                    "overwrite confirmation cancelled",
                    cause=e,
                    context=ErrorContext().add(DEST_FILE, path),
                )
            state = next_state(answer)
        return state

    def confirm(self, path: Path, session: SessionState, interactive: bool) -> bool:
        if session.auto_approve_all:
            return True
        if not (path.exists() or path.is_symlink()):
            return True
        if not interactive:
            return False
        state = self._await_answer(path)
        if state == PromptState.AUTO_APPROVED:
            session.approve_all()
        return state in (PromptState.APPROVED, PromptState.AUTO_APPROVED)
