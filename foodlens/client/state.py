# -*- coding: utf-8 -*-
"""Client: view state machine.

Exactly one view is active at a time. ``update`` is the only way to move
between views; it returns a new :class:`ViewState` and raises
:class:`InvalidTransition` for anything the UI does not offer, including any
navigation while an analysis request is still in flight.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from ..analysis.models import FoodAnalysisResult


class View(str, Enum):
    home = "home"
    camera = "camera"
    search = "search"
    analysis = "analysis"
    history = "history"


class InvalidTransition(RuntimeError):
    pass


@dataclass(frozen=True)
class ViewState:
    view: View = View.home
    is_analyzing: bool = False
    result: Optional[FoodAnalysisResult] = None
    failure: Optional[str] = None


@dataclass(frozen=True)
class Navigate:
    target: View


@dataclass(frozen=True)
class Submit:
    """Camera capture or search submitted; the request is now in flight."""


@dataclass(frozen=True)
class Resolved:
    result: FoodAnalysisResult


@dataclass(frozen=True)
class Failed:
    message: str


Event = Union[Navigate, Submit, Resolved, Failed]

_NAVIGATION = {
    View.home: {View.camera, View.search, View.history},
    View.camera: {View.home},
    View.search: {View.home},
    View.analysis: {View.home, View.camera},
    View.history: {View.home},
}


def update(state: ViewState, event: Event) -> ViewState:
    if isinstance(event, Navigate):
        if state.is_analyzing:
            raise InvalidTransition(f"cannot leave {state.view.value} while a request is in flight")
        if event.target not in _NAVIGATION[state.view]:
            raise InvalidTransition(f"{state.view.value} -> {event.target.value} is not allowed")
        return replace(state, view=event.target)

    if isinstance(event, Submit):
        if state.is_analyzing:
            raise InvalidTransition("a request is already in flight")
        if state.view not in (View.camera, View.search):
            raise InvalidTransition(f"cannot submit from {state.view.value}")
        return ViewState(view=View.analysis, is_analyzing=True)

    if isinstance(event, (Resolved, Failed)):
        if not (state.view is View.analysis and state.is_analyzing):
            raise InvalidTransition("no request is in flight")
        if isinstance(event, Resolved):
            return ViewState(view=View.analysis, result=event.result)
        return ViewState(view=View.analysis, failure=event.message)

    raise TypeError(f"unknown event: {event!r}")
