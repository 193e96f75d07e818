"""
Contacts API - Result Types
============================

What:  A two-variant result (`Ok` / `Err`) returned by the validator and the
       repository instead of raising for expected client errors.
How:   Route handlers check `isinstance(result, Err)` and map `result.error`
       to a status code; `Ok.value` carries the payload otherwise.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from contacts_api.exceptions import ContactsAPIError

T = TypeVar("T")
E = TypeVar("E", bound=ContactsAPIError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[ContactsAPIError]]
