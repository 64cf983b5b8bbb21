"""Reducer registration and dispatch by intent type.

ReducerRouter replaces if/elif chains over intent types in a slice reducer.

The @reducer decorator records which intent type a reducer handles and checks
at import time that the reducer's type hint agrees, so a router can be built
with single-argument ``.on(func)`` calls.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Iterable
from typing import Any, Callable, Generic, TypeVar

S = TypeVar("S")

Reducer = Callable[[S, Any], S]
StateFactory = Callable[[], S]


def validate_reducer(
    func: Callable,
    intent_type: type,
    intent_param_index: int = 1,
    decorator_name: str = "reducer",
) -> str:
    """Validate a reducer's signature.

    Args:
        func: The function being registered.
        intent_type: Expected intent type from the decorator argument.
        intent_param_index: Index of the intent parameter (state comes first).
        decorator_name: Name of decorator for error messages.

    Returns:
        The name of the intent parameter.

    Raises:
        TypeError: If validation fails.
    """
    hints = typing.get_type_hints(func)
    params = list(inspect.signature(func).parameters.keys())

    if len(params) < intent_param_index + 1:
        raise TypeError(f"{func.__name__}: must have intent parameter")

    intent_param = params[intent_param_index]
    if intent_param not in hints:
        raise TypeError(f"{func.__name__}: missing type hint for '{intent_param}'")

    hint_type = hints[intent_param]
    if hint_type != intent_type:
        raise TypeError(
            f"{func.__name__}: @{decorator_name}({intent_type.__name__}) "
            f"doesn't match type hint {getattr(hint_type, '__name__', hint_type)}"
        )

    return intent_param


def reducer(intent_type: type):
    """Decorator marking a pure ``(state, intent) -> state`` function.

    Example:
        @reducer(RemoveItem)
        def remove_item(state: CartState, intent: RemoveItem) -> CartState:
            ...

        router = ReducerRouter("cart", CartState).on(remove_item)

    Raises:
        TypeError: If type hint is missing or doesn't match intent_type.
    """

    def decorator(func: Callable) -> Callable:
        validate_reducer(func, intent_type)
        func._intent_type = intent_type
        return func

    return decorator


class ReducerRouter(Generic[S]):
    """Routes intents to the reducer registered for their exact type.

    A reducer returns the next state. Returning the very same state object
    signals that the intent changed nothing.

    Example::

        cart_router = (ReducerRouter("cart", CartState)
            .on(add_item)
            .on(RemoveItem, remove_item))

        state = cart_router.reduce(state, AddItem(1, "Shoe", 50.0))
    """

    def __init__(self, name: str, state_factory: StateFactory[S]) -> None:
        """Create a router for one store slice.

        Args:
            name: Slice name, used in logs and error messages.
            state_factory: Callable returning the slice's initial state.
        """
        self.name = name
        self._state_factory = state_factory
        self._reducers: dict[type, Reducer[S]] = {}

    def on(self, intent_type_or_reducer, reducer_fn: Callable = None) -> ReducerRouter[S]:
        """Register a reducer for an intent type.

        Two calling patterns:
            router.on(AddItem, add_item)  # Explicit intent type
            router.on(add_item)           # Derive type from @reducer

        Raises:
            TypeError: On a duplicate registration, or a single-argument call
                with a function that is not decorated with @reducer.
        """
        if reducer_fn is None:
            reducer_fn = intent_type_or_reducer
            if not hasattr(reducer_fn, "_intent_type"):
                raise TypeError(
                    f"{reducer_fn.__name__}: must be decorated with @reducer "
                    "to use single-argument .on()"
                )
            intent_type = reducer_fn._intent_type
        else:
            intent_type = intent_type_or_reducer

        if intent_type in self._reducers:
            raise TypeError(f"{self.name}: duplicate reducer for {intent_type.__name__}")

        self._reducers[intent_type] = reducer_fn
        return self

    @property
    def intent_types(self) -> tuple[type, ...]:
        return tuple(self._reducers)

    def handles(self, intent: object) -> bool:
        return type(intent) in self._reducers

    def initial_state(self) -> S:
        return self._state_factory()

    def reduce(self, state: S, intent: object) -> S:
        """Apply one intent. Intents this slice doesn't handle leave it unchanged."""
        reducer_fn = self._reducers.get(type(intent))
        if reducer_fn is None:
            return state
        return reducer_fn(state, intent)

    def with_intents(self, intents: Iterable[object], state: S = None) -> S:
        """Fold a sequence of intents over ``state`` (or a fresh initial state)."""
        if state is None:
            state = self.initial_state()
        for intent in intents:
            state = self.reduce(state, intent)
        return state
