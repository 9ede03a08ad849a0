"""Unit tests for the LLM extractor, with the chat call faked out."""

import json

import pytest

from resume_revamp.errors import ExtractionError
from resume_revamp.parser_llm import (
    FileSource,
    LLMResumeExtractor,
    TextSource,
    build_messages,
    decode_response,
)


@pytest.mark.unit
def test_decode_fenced_equals_bare(payload_json):
    assert decode_response(f"```json\n{payload_json}\n```") == decode_response(payload_json)


@pytest.mark.unit
def test_decode_repairs_shape(payload_json):
    record = decode_response(payload_json)
    assert record.experience[1].description == ("Built the weekly revenue dashboard.",)
    assert record.contact.linkedin is None


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", "   ", "```json\n```"])
def test_decode_empty_reply(raw):
    with pytest.raises(ExtractionError, match="No data returned from AI"):
        decode_response(raw)


@pytest.mark.unit
def test_decode_invalid_json():
    with pytest.raises(ExtractionError, match="not valid JSON"):
        decode_response("{'fullName': 'single quotes'}")


@pytest.mark.unit
def test_decode_missing_email(payload):
    payload["contact"]["email"] = ""
    with pytest.raises(ExtractionError, match="email"):
        decode_response(json.dumps(payload))


@pytest.mark.unit
def test_build_messages_with_job_description():
    messages = build_messages("resume body", "Staff Data Engineer at Acme")
    assert messages[0]["role"] == "system"
    assert "Staff Data Engineer at Acme" in messages[0]["content"]
    assert "resume body" in messages[1]["content"]


@pytest.mark.unit
def test_build_messages_blank_job_description():
    messages = build_messages("resume body", "   ")
    assert "tailor" not in messages[0]["content"]


@pytest.mark.unit
def test_extract_from_text(fake_chat, payload_json):
    chat = fake_chat(reply=payload_json)
    extractor = LLMResumeExtractor(model="test-model", chat=chat)

    record = extractor.extract(TextSource("Jamie Rivera, data engineer"), "ETL role")

    assert record.full_name == "Jamie Rivera"
    assert len(chat.calls) == 1
    assert chat.calls[0]["model"] == "test-model"
    assert chat.calls[0]["json_mode"] is True
    assert "Jamie Rivera, data engineer" in chat.calls[0]["messages"][1]["content"]


@pytest.mark.unit
def test_extract_plain_text_upload(fake_chat, payload_json):
    chat = fake_chat(reply=payload_json)
    extractor = LLMResumeExtractor(model="test-model", chat=chat)

    extractor.extract(FileSource(b"Plain text resume", "text/plain", "cv.txt"))

    assert "Plain text resume" in chat.calls[0]["messages"][1]["content"]


@pytest.mark.unit
def test_extract_wraps_client_errors(fake_chat):
    chat = fake_chat(error=ConnectionError("refused"))
    extractor = LLMResumeExtractor(model="test-model", chat=chat)
    with pytest.raises(ExtractionError, match="refused"):
        extractor.extract(TextSource("anything"))


@pytest.mark.unit
def test_extract_rejects_unsupported_upload(fake_chat, payload_json):
    chat = fake_chat(reply=payload_json)
    extractor = LLMResumeExtractor(model="test-model", chat=chat)
    with pytest.raises(ExtractionError, match="unsupported"):
        extractor.extract(FileSource(b"\x89PNG", "image/png", "scan.png"))
    assert chat.calls == []


@pytest.mark.unit
@pytest.mark.parametrize("key, value", [("experience", 5), ("projects", 7), ("skills", {"a": 1})])
def test_decode_wrong_container_type(payload, key, value):
    payload[key] = value
    with pytest.raises(ExtractionError, match=key):
        decode_response(json.dumps(payload))


@pytest.mark.unit
def test_decode_top_level_array():
    with pytest.raises(ExtractionError):
        decode_response("[1, 2, 3]")


@pytest.mark.unit
def test_extract_corrupt_pdf(fake_chat, payload_json):
    chat = fake_chat(reply=payload_json)
    extractor = LLMResumeExtractor(model="test-model", chat=chat)
    with pytest.raises(ExtractionError, match="cv.pdf") as info:
        extractor.extract(FileSource(b"this is not a pdf", "application/pdf", "cv.pdf"))
    assert info.value.__cause__ is not None
    assert chat.calls == []
