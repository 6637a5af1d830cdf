"""
Cliente Model.

One row per client record. Column names keep the capitalised spelling
used on the wire (Nome, Idade, UF).
"""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base

IDADE_MIN = 0
IDADE_MAX = 150
UF_LENGTH = 2
NOME_MAX_LENGTH = 255


class Cliente(Base):
    """Client record: full name, age and two-letter state code."""

    __tablename__ = "clientes"
    __table_args__ = (
        CheckConstraint(
            f'"Idade" >= {IDADE_MIN} AND "Idade" <= {IDADE_MAX}',
            name="ck_clientes_idade_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column("Nome", String(NOME_MAX_LENGTH), nullable=False)
    idade: Mapped[int] = mapped_column("Idade", Integer, nullable=False)
    uf: Mapped[str] = mapped_column("UF", String(UF_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<Cliente(id={self.id}, nome={self.nome!r}, uf={self.uf!r})>"
