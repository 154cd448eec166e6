"""Testes de canonicalização de chatId e extração de fileName."""

from __future__ import annotations

import pytest

from api.normalizers.green_api import (
    MAX_FILE_NAME_LENGTH,
    GreenApiRequestNormalizer,
    extract_file_name,
    normalize_chat_id,
)
from api.validators.green_api import ValidationError
from app.protocols.models import (
    CredentialsRequest,
    SendFileByUrlRequest,
    SendMessageRequest,
)


class TestNormalizeChatId:
    """normalize_chat_id."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("77771234567", "77771234567@c.us"),
            ("  77771234567  ", "77771234567@c.us"),
            ("77771234567@c.us", "77771234567@c.us"),
            (" 1@c.us\n", "1@c.us"),
        ],
    )
    def test_valid_inputs(self, raw: str, expected: str) -> None:
        assert normalize_chat_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "@c.us",
            "+77771234567",
            "7777-123",
            "abc@c.us",
            "7777@g.us",
            "7777 1234",
            "٣٤٥",  # dígitos não ASCII
        ],
    )
    def test_invalid_inputs(self, raw: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            normalize_chat_id(raw)
        assert exc_info.value.field == "chatId"
        assert "invalid chat identifier" in exc_info.value.message

    def test_is_idempotent(self) -> None:
        once = normalize_chat_id("79001234567")
        assert normalize_chat_id(once) == once


class TestExtractFileName:
    """extract_file_name."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/docs/report.pdf", "report.pdf"),
            ("https://example.com/file.png?size=large#top", "file.png"),
            ("https://example.com/a/my%20photo.jpg", "my photo.jpg"),
            ("http://example.com/only", "only"),
            # Sequência percent inválida em UTF-8: usa o segmento bruto
            ("https://example.com/bad%FFname.txt", "bad%FFname.txt"),
        ],
    )
    def test_extracts_last_segment(self, url: str, expected: str) -> None:
        assert extract_file_name(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/",
            "https://example.com",
            "https://example.com/dir/",
            "https://example.com/dir/.",
            "https://example.com/dir/..",
        ],
    )
    def test_rejects_urls_without_file_name(self, url: str) -> None:
        with pytest.raises(ValidationError, match="cannot extract file name"):
            extract_file_name(url)

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/dir/evil%2Fname.txt",
            "https://example.com/dir/evil%5Cname.txt",
            "https://example.com/dir/evil\\name.txt",
        ],
    )
    def test_rejects_path_separators(self, url: str) -> None:
        with pytest.raises(ValidationError, match="invalid file name"):
            extract_file_name(url)

    def test_rejects_encoded_dot_segment(self) -> None:
        with pytest.raises(ValidationError, match="cannot extract file name"):
            extract_file_name("https://example.com/dir/%2E%2E")

    def test_accepts_max_length(self) -> None:
        name = "a" * MAX_FILE_NAME_LENGTH
        assert extract_file_name(f"https://example.com/{name}") == name

    def test_rejects_too_long(self) -> None:
        name = "a" * (MAX_FILE_NAME_LENGTH + 1)
        with pytest.raises(ValidationError, match="filename too long") as exc_info:
            extract_file_name(f"https://example.com/{name}")
        assert exc_info.value.field == "urlFile"


class TestGreenApiRequestNormalizer:
    """Fluxo completo de validação + normalização."""

    def setup_method(self) -> None:
        self.normalizer = GreenApiRequestNormalizer()

    def test_credentials_are_trimmed(self) -> None:
        result = self.normalizer.normalize_credentials(
            CredentialsRequest(idInstance=" 1101 ", apiTokenInstance=" tok ")
        )
        assert result.id_instance == "1101"
        assert result.api_token_instance == "tok"
        assert result.chat_id is None

    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({"apiTokenInstance": "tok"}, "idInstance"),
            ({"idInstance": "1101"}, "apiTokenInstance"),
            ({"idInstance": "  ", "apiTokenInstance": "tok"}, "idInstance"),
        ],
    )
    def test_missing_credentials(self, payload: dict[str, str], field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.normalizer.normalize_credentials(CredentialsRequest(**payload))
        assert exc_info.value.field == field

    def test_send_message_normalizes_chat_id(self) -> None:
        result = self.normalizer.normalize_send_message(
            SendMessageRequest(
                idInstance="1101",
                apiTokenInstance="tok",
                chatId="79001234567",
                message="  Olá  ",
            )
        )
        assert result.chat_id == "79001234567@c.us"
        assert result.message == "Olá"

    def test_send_message_checks_fields_in_order(self) -> None:
        """Primeira violação vence: credenciais antes de chatId e message."""
        with pytest.raises(ValidationError) as exc_info:
            self.normalizer.normalize_send_message(
                SendMessageRequest(apiTokenInstance="tok", chatId="bad", message="")
            )
        assert exc_info.value.field == "idInstance"

    def test_send_message_requires_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.normalizer.normalize_send_message(
                SendMessageRequest(
                    idInstance="1101", apiTokenInstance="tok", chatId="7900", message=" "
                )
            )
        assert exc_info.value.field == "message"

    def test_send_file_by_url_derives_file_name(self) -> None:
        result = self.normalizer.normalize_send_file_by_url(
            SendFileByUrlRequest(
                idInstance="1101",
                apiTokenInstance="tok",
                chatId="79001234567@c.us",
                urlFile=" https://cdn.example.com/files/price%20list.pdf ",
            )
        )
        assert result.url_file == "https://cdn.example.com/files/price%20list.pdf"
        assert result.file_name == "price list.pdf"
        assert result.chat_id == "79001234567@c.us"

    def test_send_file_by_url_rejects_ftp(self) -> None:
        with pytest.raises(ValidationError, match="invalid file URL") as exc_info:
            self.normalizer.normalize_send_file_by_url(
                SendFileByUrlRequest(
                    idInstance="1101",
                    apiTokenInstance="tok",
                    chatId="7900",
                    urlFile="ftp://example.com/a.txt",
                )
            )
        assert exc_info.value.field == "urlFile"
