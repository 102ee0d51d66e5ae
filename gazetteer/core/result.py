"""
Resultado das operações de consulta.

"Não encontrado" e "entrada inválida" são respostas esperadas, então as
operações retornam ``Ok`` ou ``Err`` em vez de levantar exceções. A camada
HTTP só precisa encaminhar ``to_payload()`` no corpo da resposta.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

from pydantic import BaseModel


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TIMEZONE = "timezone"
    INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class Ok:
    value: Any

    @property
    def is_ok(self) -> bool:
        return True

    def to_payload(self) -> Dict[str, Any]:
        if isinstance(self.value, BaseModel):
            return self.value.model_dump(mode="json", exclude_none=True)
        return self.value


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return False

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


Result = Union[Ok, Err]
