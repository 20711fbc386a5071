"""Contrato do item de submissão aceito pela API externa de tarefas.

O lote de entrada tem exatamente um item, em uma de duas formas:
- lista com um elemento: [ {...} ]
- objeto com a chave "0": {"0": {...}}
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from utils.errors import InvalidRequest

INVALID_BODY_MESSAGE = "body data not correct"


class TaskRequestItem(BaseModel):
    """Item único de submissão.

    Campos desconhecidos são preservados e repassados à API externa.
    """

    model_config = ConfigDict(extra="allow")

    language_code: StrictStr = Field(..., description="Código de idioma da busca.")
    location_code: StrictStr | StrictInt | StrictFloat = Field(
        ...,
        description="Código de localização (string ou número).",
    )
    keyword: StrictStr = Field(..., description="Termo de busca.")
    depth: StrictInt | StrictFloat = Field(..., description="Profundidade da busca.")
    postback_data: Literal["advanced"] = Field(
        ...,
        description="Modo de entrega do postback exigido pela API.",
    )
    webhook: StrictStr | None = Field(
        default=None,
        description="Webhook de destino que substitui o padrão.",
    )
    extra: Any = Field(default=None, description="Passthrough opaco devolvido na entrega.")

    @field_validator("webhook", mode="before")
    @classmethod
    def reject_null_webhook(cls, value: Any) -> Any:
        """webhook pode ser omitido, mas não enviado como null."""
        if value is None:
            raise ValueError("webhook deve ser string quando presente")
        return value

    def to_task_payload(self, postback_url: str) -> dict[str, Any]:
        """Item como enviado à API externa, com o postback_url anexado."""
        payload = self.model_dump(exclude_unset=True)
        payload["postback_url"] = postback_url
        return payload


def _single_item(body: Any) -> Any:
    if isinstance(body, list) and len(body) == 1:
        return body[0]
    if isinstance(body, dict) and set(body) == {"0"}:
        return body["0"]
    raise InvalidRequest(INVALID_BODY_MESSAGE)


def parse_task_batch(body: Any) -> TaskRequestItem:
    """Valida o lote de submissão e retorna o item único.

    Raises:
        InvalidRequest: Se o lote não tem exatamente um item ou o item é inválido.
    """
    item = _single_item(body)
    if not isinstance(item, dict):
        raise InvalidRequest(INVALID_BODY_MESSAGE)
    try:
        return TaskRequestItem.model_validate(item)
    except PydanticValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"][:1]) for err in exc.errors()})
        raise InvalidRequest(f"{INVALID_BODY_MESSAGE}: {', '.join(fields)}") from exc
