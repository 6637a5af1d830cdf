"""
Client-side value types.

Immutable records exchanged between the API client, the controller and
the widgets.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Cliente:
    """A client record as listed by the API."""

    id: int
    nome: str
    idade: int
    uf: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Cliente":
        return cls(
            id=int(data["id"]),
            nome=str(data["Nome"]),
            idade=int(data["Idade"]),
            uf=str(data["UF"]),
        )


@dataclass(frozen=True)
class ClientePayload:
    """Validated body for create and update requests."""

    nome: str
    idade: int
    uf: str

    def to_json(self) -> dict[str, Any]:
        return {"Nome": self.nome, "Idade": self.idade, "UF": self.uf}


@dataclass(frozen=True)
class FormData:
    """Raw text of the three form inputs."""

    nome: str = ""
    idade: str = ""
    uf: str = ""

    @classmethod
    def from_cliente(cls, cliente: Cliente) -> "FormData":
        return cls(nome=cliente.nome, idade=str(cliente.idade), uf=cliente.uf)
