"""
Unit tests for the Report Service

Tests for the markdown shown in the result card and terminal panel.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.models import AnalysisResult, CodeError
from services.report_service import (
    SUCCESS_BANNER,
    TERMINAL_PLACEHOLDER,
    format_error,
    format_error_banner,
    format_errors,
    format_explanation,
    format_language_badge,
    format_terminal,
    format_tips,
)


def make_result(**overrides):
    data = {
        "language": "Java",
        "errors": [],
        "correctSyntax": "int a = 10;",
        "explanation": "Statements end with a semicolon.",
        "formattedCode": "int a = 10;",
    }
    data.update(overrides)
    return AnalysisResult.model_validate(data)


class TestFormatErrors:
    def test_no_errors_shows_success_banner(self):
        assert format_errors(make_result()) == SUCCESS_BANNER
        assert "Great Job!" in SUCCESS_BANNER

    def test_errors_are_numbered_in_order(self):
        result = make_result(errors=[
            {"type": "Syntax Error", "line": "1", "description": "Missing semicolon", "fix": "int a = 10;"},
            {"type": "Logic Error", "line": "2", "description": "Assignment in condition", "fix": "if (a == 10)"},
        ])

        report = format_errors(result)

        assert "Errors Found" in report
        assert report.index("1. Syntax Error") < report.index("2. Logic Error")
        assert "Line 2" in report
        assert "`if (a == 10)`" in report
        assert not report.endswith("---")

    def test_fix_with_backticks_stays_one_span(self):
        fix = "console.log(`a=${a}`);"
        text = format_error(1, CodeError(type="Syntax Error", description="Missing quote", fix=fix))

        assert text.endswith(f"**Fix:** ``{fix}``")

    def test_fix_starting_with_backtick_is_padded(self):
        text = format_error(1, CodeError(type="Shell", description="Quote it", fix="`ls`"))

        assert text.endswith("**Fix:** `` `ls` ``")

    def test_multiline_fix_is_fenced(self):
        fix = "if (a == 10) {\n  print(```)\n}"
        text = format_error(1, CodeError(type="Logic Error", description="Compare", fix=fix))

        assert text.endswith(f"````\n{fix}\n````")

    def test_description_is_escaped(self):
        text = format_error(1, CodeError(type="Type <T>", description="Use List<String> here", fix="x"))

        assert "List&lt;String&gt;" in text
        assert "Type &lt;T&gt;" in text

    def test_error_without_line_or_fix(self):
        text = format_error(1, CodeError(type="Style", description="Use braces"))

        assert "Line" not in text
        assert "Fix" not in text


class TestOtherSections:
    def test_language_badge(self):
        assert "Java" in format_language_badge(make_result())

    def test_explanation(self):
        assert "semicolon" in format_explanation(make_result())

    def test_tips(self):
        tips = format_tips(make_result(learningTips=["Use ==", "End with ;"]))

        assert "- Use ==" in tips
        assert "- End with ;" in tips

    def test_no_tips(self):
        assert format_tips(make_result()) == ""


class TestTerminal:
    def test_placeholder_when_no_output(self):
        assert format_terminal(None) == TERMINAL_PLACEHOLDER

    def test_output_is_shown_verbatim(self):
        assert format_terminal("Hello\nWorld") == "Hello\nWorld"

    def test_error_banner(self):
        assert format_error_banner(None) == ""
        assert "went wrong" in format_error_banner("Something went wrong")
