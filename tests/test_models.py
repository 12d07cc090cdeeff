"""
Unit tests for the data models

Tests for reply validation, field aliases and attachment content blocks.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from pydantic import ValidationError

from core.models import AnalysisResult, AppState, Attachment, CodeError


VALID_REPLY = {
    "language": "Java",
    "errors": [
        {"type": "Syntax Error", "line": "3", "description": "Missing semicolon", "fix": "int a = 10;"},
        {"type": "Logic Error", "line": 4, "description": "= assigns, == compares", "fix": "if (a == 10) {"},
    ],
    "correctSyntax": "int a = 10;\nif (a == 10) { }",
    "explanation": "Java statements end with a semicolon.",
    "formattedCode": "int a = 10;\nif (a == 10) {\n}",
    "learningTips": ["End statements with ;", "Use == to compare"],
}


class TestAnalysisResult:
    """Test validation of the tutor reply"""

    def test_parses_camel_case_keys(self):
        result = AnalysisResult.model_validate(VALID_REPLY)

        assert result.language == "Java"
        assert result.correct_syntax.startswith("int a = 10;")
        assert result.formatted_code.endswith("}")
        assert result.learning_tips == ["End statements with ;", "Use == to compare"]
        assert result.simplified_logic is None
        assert result.output is None

    def test_error_order_is_preserved(self):
        result = AnalysisResult.model_validate(VALID_REPLY)

        assert [e.type for e in result.errors] == ["Syntax Error", "Logic Error"]

    def test_numeric_line_becomes_text(self):
        result = AnalysisResult.model_validate(VALID_REPLY)

        assert result.errors[1].line == "4"

    @pytest.mark.parametrize("field", ["language", "errors", "correctSyntax", "explanation", "formattedCode"])
    def test_required_fields(self, field):
        data = dict(VALID_REPLY)
        del data[field]

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(data)

    @pytest.mark.parametrize("field", ["language", "correctSyntax", "explanation", "formattedCode"])
    def test_required_text_must_not_be_blank(self, field):
        data = dict(VALID_REPLY, **{field: "   "})

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(data)

    def test_empty_errors_is_allowed(self):
        result = AnalysisResult.model_validate(dict(VALID_REPLY, errors=[]))

        assert result.errors == []

    def test_optional_fields(self):
        data = dict(VALID_REPLY, simplifiedLogic="x = 10", output="Hello World", learningTips=None)

        result = AnalysisResult.model_validate(data)

        assert result.simplified_logic == "x = 10"
        assert result.output == "Hello World"
        assert result.learning_tips == []

    def test_blank_optional_text_is_dropped(self):
        result = AnalysisResult.model_validate(dict(VALID_REPLY, simplifiedLogic="", output="  "))

        assert result.simplified_logic is None
        assert result.output is None

    def test_result_is_immutable(self):
        result = AnalysisResult.model_validate(VALID_REPLY)

        with pytest.raises(ValidationError):
            result.language = "Python"


class TestCodeError:
    def test_line_defaults_to_empty(self):
        error = CodeError(type="Syntax Error", description="Missing bracket", fix="}")

        assert error.line == ""

    def test_wrong_type_rejected(self):
        with pytest.raises(ValidationError):
            CodeError(type="Syntax Error", description=["not", "text"], fix="")


class TestAttachment:
    def test_image_block_is_data_url(self):
        attachment = Attachment(name="shot.png", mime_type="image/png", data="QUJD")

        block = attachment.to_content_block()

        assert block == {"type": "image_url", "image_url": {"url": "data:image/png;base64,QUJD"}}

    def test_document_block_is_media(self):
        attachment = Attachment(name="hw.pdf", mime_type="application/pdf", data="QUJD")

        block = attachment.to_content_block()

        assert block == {"type": "media", "mime_type": "application/pdf", "data": "QUJD"}

    def test_app_state_values(self):
        assert {s.value for s in AppState} == {"IDLE", "ANALYZING", "EXECUTING", "RESULTS", "ERROR"}
