import typing
from dataclasses import dataclass
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import Field

if typing.TYPE_CHECKING:
    BookId = typing.NewType("BookId", str)
    InternalUserId = typing.NewType("InternalUserId", str)
    ExternalIdpId = typing.NewType("ExternalIdpId", str)
else:
    _BookIdStr = Annotated[str, Field(min_length=1, max_length=64)]
    BookId = typing.NewType("BookId", _BookIdStr)

    _InternalUserIdStr = Annotated[str, Field(pattern=r"^usr_[a-f0-9\-]+$")]
    InternalUserId = typing.NewType("InternalUserId", _InternalUserIdStr)

    _ExternalIdpIdStr = Annotated[str, Field(min_length=1)]
    ExternalIdpId = typing.NewType("ExternalIdpId", _ExternalIdpIdStr)


CategoryFilter = Literal["Fiction", "Non-Fiction"]
ReadingStatusValue = Literal["want_to_read", "read", "none"]

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: Exception


LookupResult = Success[T] | Failure


def unwrap_or(result: "LookupResult[T]", default: T) -> T:
    if isinstance(result, Success):
        return result.value
    return default
