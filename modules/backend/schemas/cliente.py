"""
Cliente Schemas.

Pydantic schemas for client request/response validation. Python attribute
names are lowercase; the JSON field names are Nome, Idade and UF.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.backend.models.cliente import IDADE_MAX, IDADE_MIN, NOME_MAX_LENGTH, UF_LENGTH


class ClienteIn(BaseModel):
    """Body of POST /clientes and PUT /clientes/{id}."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    nome: str = Field(
        ...,
        alias="Nome",
        min_length=1,
        max_length=NOME_MAX_LENGTH,
        description="Nome completo",
        examples=["Ana Silva"],
    )
    idade: int = Field(
        ...,
        alias="Idade",
        ge=IDADE_MIN,
        le=IDADE_MAX,
        description="Idade em anos",
        examples=[30],
    )
    uf: str = Field(
        ...,
        alias="UF",
        min_length=UF_LENGTH,
        max_length=UF_LENGTH,
        pattern=r"^[A-Za-z]{2}$",
        description="Sigla da unidade federativa",
        examples=["SP"],
    )

    @field_validator("uf")
    @classmethod
    def _uppercase_uf(cls, value: str) -> str:
        return value.upper()


class ClienteOut(BaseModel):
    """Client record as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    nome: str = Field(serialization_alias="Nome", validation_alias="nome")
    idade: int = Field(serialization_alias="Idade", validation_alias="idade")
    uf: str = Field(serialization_alias="UF", validation_alias="uf")
