"""
Query specifications for the catalog and account stores.

A specification is a predicate over one aggregate type that can be evaluated
two ways: against an aggregate already in memory, or as a SQLAlchemy filter
over the matching row class. The ``count_matching`` port operation takes one,
so services can ask for counts without the repositories growing a method per
question.

Specifications combine with ``&``, ``|`` and ``~``. Chains of the same
operator are flattened, so ``a & b & c`` is one conjunction of three parts.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Tuple, TypeVar

from sqlalchemy import and_, not_, or_


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """A predicate over aggregates of type T with a SQL twin."""

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """Evaluate against an in-memory aggregate."""

    @abstractmethod
    def to_sql_filter(self):
        """SQLAlchemy expression selecting the rows this specification accepts."""

    def __and__(self, other: "Specification[T]") -> "AllOf[T]":
        return AllOf(self, other)

    def __or__(self, other: "Specification[T]") -> "AnyOf[T]":
        return AnyOf(self, other)

    def __invert__(self) -> "Specification[T]":
        if isinstance(self, Not):
            return self.inner
        return Not(self)


class _Composite(Specification[T]):
    """Shared storage for the n-ary combinators."""

    def __init__(self, *parts: Specification[T]):
        if not parts:
            raise ValueError(f"{type(self).__name__} needs at least one specification")
        flattened: List[Specification[T]] = []
        for part in parts:
            # a & (b & c) keeps one flat conjunction
            if type(part) is type(self):
                flattened.extend(part.parts)
            else:
                flattened.append(part)
        self.parts: Tuple[Specification[T], ...] = tuple(flattened)


class AllOf(_Composite[T]):
    """Satisfied when every part is."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(part.is_satisfied_by(candidate) for part in self.parts)

    def to_sql_filter(self):
        return and_(*(part.to_sql_filter() for part in self.parts))


class AnyOf(_Composite[T]):
    """Satisfied when at least one part is."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(part.is_satisfied_by(candidate) for part in self.parts)

    def to_sql_filter(self):
        return or_(*(part.to_sql_filter() for part in self.parts))


class Not(Specification[T]):
    """Satisfied when the wrapped specification is not."""

    def __init__(self, inner: Specification[T]):
        self.inner = inner

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.inner.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return not_(self.inner.to_sql_filter())
