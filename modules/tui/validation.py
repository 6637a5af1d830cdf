"""
Form Validation.

Client-side gate run before any create or update request is sent.
"""

import re

from modules.tui.models import ClientePayload, FormData

IDADE_MIN = 0
IDADE_MAX = 150
UF_LENGTH = 2

# Optional sign and ASCII digits; rejects "1_0" and non-ASCII digits
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")

MSG_NOME_REQUIRED = "Nome é obrigatório"
MSG_IDADE_REQUIRED = "Idade é obrigatória"
MSG_IDADE_INVALID = f"Digite uma idade válida ({IDADE_MIN}-{IDADE_MAX})"
MSG_UF_REQUIRED = "UF é obrigatória"
MSG_UF_LENGTH = f"UF deve ter exatamente {UF_LENGTH} caracteres"


class FormValidationError(ValueError):
    """Raised with the user-facing message of the first failing field."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


def _parse_idade(raw: str) -> int:
    if not _INTEGER_TEXT.fullmatch(raw):
        raise FormValidationError("idade", MSG_IDADE_INVALID)
    idade = int(raw)
    if not IDADE_MIN <= idade <= IDADE_MAX:
        raise FormValidationError("idade", MSG_IDADE_INVALID)
    return idade


def validate_form(form: FormData) -> ClientePayload:
    """
    Check the form fields in order (Nome, Idade, UF).

    Returns the payload to submit: trimmed name, integer age and
    upper-cased state code.

    Raises:
        FormValidationError: On the first invalid field
    """
    nome = form.nome.strip()
    if not nome:
        raise FormValidationError("nome", MSG_NOME_REQUIRED)

    idade_raw = form.idade.strip()
    if not idade_raw:
        raise FormValidationError("idade", MSG_IDADE_REQUIRED)
    idade = _parse_idade(idade_raw)

    uf = form.uf.strip()
    if not uf:
        raise FormValidationError("uf", MSG_UF_REQUIRED)
    if len(uf) != UF_LENGTH:
        raise FormValidationError("uf", MSG_UF_LENGTH)

    return ClientePayload(nome=nome, idade=idade, uf=uf.upper())
