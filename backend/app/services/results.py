"""
User Registry Backend — Handler Result Types
==============================================

What:  The value every request handler returns: Success or Failure.
Why:   The transport layer maps a result to an HTTP response with a pure
       function of its kind; it never has to know which exceptions the core
       can raise.
How:   Success carries a wire-ready payload and its status code (200 for
       fetch/update/delete, 201 for create). Failure carries an ErrorKind,
       a client-safe message, and optional details.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from app.exceptions import ErrorKind
from app.schemas.user import ErrorResponse


@dataclass(frozen=True)
class Success:
    payload: Union[Dict[str, Any], List[Dict[str, Any]]]
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True

    def body(self) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        return self.payload


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    details: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def status_code(self) -> int:
        return self.kind.http_status

    def body(self) -> Dict[str, Any]:
        return ErrorResponse(error=self.message, details=self.details).to_wire()


HandlerResult = Union[Success, Failure]
