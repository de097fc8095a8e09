from __future__ import annotations


class SessionState:
    """Per-invocation state shared by every overwrite decision.

    The only state is the auto-approve flag. It starts out false unless the
    caller pre-seeds it and, once raised, stays raised for the rest of the
    run.
    """

    __slots__ = ("_auto_approve_all",)

    def __init__(self, auto_approve_all: bool = False) -> None:
        self._auto_approve_all = bool(auto_approve_all)

    @property
    def auto_approve_all(self) -> bool:
        return self._auto_approve_all

    def approve_all(self) -> None:
        self._auto_approve_all = True

    def __repr__(self) -> str:
        return f"SessionState(auto_approve_all={self._auto_approve_all})"
