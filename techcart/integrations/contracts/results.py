"""
Action result contract.

Cart and auth operations never raise into the caller; they report one of
three outcomes and the caller decides how to present it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResultStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    UNAUTHENTICATED = "UNAUTHENTICATED"


@dataclass(frozen=True)
class ActionResult:
    status: ResultStatus
    detail: Optional[str] = None

    @classmethod
    def success(cls, detail: Optional[str] = None) -> "ActionResult":
        return cls(ResultStatus.SUCCESS, detail)

    @classmethod
    def failure(cls, detail: str) -> "ActionResult":
        return cls(ResultStatus.FAILURE, detail)

    @classmethod
    def unauthenticated(cls) -> "ActionResult":
        return cls(ResultStatus.UNAUTHENTICATED)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS
