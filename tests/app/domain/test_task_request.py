"""Testes do contrato do item de submissão."""

from __future__ import annotations

import pytest

from app.domain import TaskRequestItem, parse_task_batch
from utils.errors import InvalidRequest


def _item(**overrides: object) -> dict:
    item: dict[str, object] = {
        "language_code": "pt",
        "location_code": 1001773,
        "keyword": "pizzaria",
        "depth": 100,
        "postback_data": "advanced",
    }
    item.update(overrides)
    return item


class TestParseTaskBatch:
    """Testes de parse_task_batch."""

    def test_list_with_single_item(self) -> None:
        """Lista de um elemento é aceita."""
        parsed = parse_task_batch([_item()])

        assert isinstance(parsed, TaskRequestItem)
        assert parsed.keyword == "pizzaria"

    def test_object_with_key_zero(self) -> None:
        """Objeto {"0": item} é aceito."""
        parsed = parse_task_batch({"0": _item(location_code="Sao Paulo")})

        assert parsed.location_code == "Sao Paulo"

    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            [_item(), _item()],
            {"0": _item(), "1": _item()},
            {"keyword": "x"},
            ["not-an-object"],
            "text",
        ],
    )
    def test_wrong_shapes_are_rejected(self, body: object) -> None:
        """Formatos fora do lote de um item são rejeitados."""
        with pytest.raises(InvalidRequest, match="body data not correct"):
            parse_task_batch(body)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"postback_data": "regular"},
            {"language_code": 1},
            {"keyword": None},
            {"depth": "100"},
            {"location_code": None},
            {"webhook": 123},
            {"webhook": None},
        ],
    )
    def test_invalid_fields_are_rejected(self, overrides: dict) -> None:
        """Campos com tipo errado são rejeitados."""
        with pytest.raises(InvalidRequest):
            parse_task_batch([_item(**overrides)])

    def test_missing_field_is_rejected(self) -> None:
        """Campo obrigatório ausente é rejeitado."""
        item = _item()
        del item["depth"]
        with pytest.raises(InvalidRequest, match="depth"):
            parse_task_batch([item])

    def test_null_webhook_is_rejected(self) -> None:
        """webhook enviado como null é rejeitado; omitido continua aceito."""
        with pytest.raises(InvalidRequest, match="webhook"):
            parse_task_batch([_item(webhook=None)])

        assert parse_task_batch([_item()]).webhook is None

    def test_optional_fields(self) -> None:
        """webhook e extra são opcionais; extra aceita qualquer JSON."""
        parsed = parse_task_batch([_item(webhook="https://dest/hook", extra=[1, {"a": None}])])

        assert parsed.webhook == "https://dest/hook"
        assert parsed.extra == [1, {"a": None}]


class TestToTaskPayload:
    """Testes de TaskRequestItem.to_task_payload."""

    def test_forwards_item_with_postback_url(self) -> None:
        """Payload repassa o item e acrescenta postback_url."""
        parsed = parse_task_batch([_item(device="mobile", extra={"ref": 1})])

        payload = parsed.to_task_payload("https://relay/postback/abc")

        assert payload == {
            **_item(device="mobile", extra={"ref": 1}),
            "postback_url": "https://relay/postback/abc",
        }

    def test_unset_optional_fields_are_not_forwarded(self) -> None:
        """webhook/extra não enviados não aparecem no payload."""
        payload = parse_task_batch([_item()]).to_task_payload("u")

        assert "webhook" not in payload
        assert "extra" not in payload
