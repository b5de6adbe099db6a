from __future__ import annotations


class FarsError(Exception):
    """Base class for errors raised by the fars package."""


class YearParseError(FarsError, ValueError):
    """A year could not be read as an integer."""


class StateParseError(FarsError, ValueError):
    """A state id could not be read as an integer."""


class InvalidStateError(FarsError, ValueError):
    def __init__(self, state_id: int) -> None:
        super().__init__(f"invalid STATE number: {state_id}")
        self.state_id = state_id
