from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from handlerspec.context import SpecState

T = TypeVar("T")
F = TypeVar("F")


class Factory(ABC, Generic[T, F]):
    """Default construction inputs for a model, plus how to persist them.

    Subclasses provide ``fields`` and ``save``; tests call ``create`` with an
    optional transform that overrides part of the defaults::

        class UserFactory(Factory[User, UserFields]):
            def fields(self) -> UserFields:
                return UserFields(name="ada", admin=False)

            def save(self, state, fields):
                return state.eval(lambda db: db.insert_user(fields))

        admin = UserFactory().create(state, lambda f: replace(f, admin=True))
    """

    @abstractmethod
    def fields(self) -> F: ...

    @abstractmethod
    def save(self, state: SpecState, fields: F) -> T: ...

    def create(self, state: SpecState, transform: Callable[[F], F] | None = None) -> T:
        values = self.fields()
        if transform is not None:
            values = transform(values)
        return self.save(state, values)

    def reload(self, state: SpecState, value: T) -> T:
        return value
