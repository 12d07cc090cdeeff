import json
import logging
from typing import Optional

from langchain_core.messages import SystemMessage, HumanMessage
from pydantic import ValidationError

from core.errors import MalformedResponseError
from core.llm_factory import create_default_llm
from core.models import AnalysisResult, Attachment

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = "You are a helpful coding assistant for students. Be encouraging and clear."

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "language": {"type": "string", "description": "The detected programming language (Java, Python, C++, etc.)"},
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "description": "Short error type (e.g., Syntax Error)"},
                    "line": {"type": "string", "description": "Line number or location"},
                    "description": {"type": "string", "description": "Simple beginner-friendly explanation of what is wrong"},
                    "fix": {"type": "string", "description": "The corrected code line"},
                },
                "required": ["type", "description", "fix"],
            },
        },
        "correctSyntax": {"type": "string", "description": "The corrected code snippet focusing on syntax"},
        "explanation": {"type": "string", "description": "A simple, tutor-style explanation of why the errors happened (max 3 lines)"},
        "simplifiedLogic": {"type": "string", "description": "A cleaner, simpler version of the logic (optional)"},
        "formattedCode": {"type": "string", "description": "The full, properly indented and formatted code"},
        "learningTips": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Short 1-line memory shortcuts for the user",
        },
        "output": {"type": "string", "description": "The console output the corrected code would print (optional)"},
    },
    "required": ["language", "errors", "correctSyntax", "explanation", "formattedCode"],
}


def _clean_json_output(content: str) -> str:
    """Strips a markdown fence wrapped around the whole reply."""
    content = content.strip()
    if content.startswith("```") and content.endswith("```"):
        content = content[3:-3]
        # Drop the language tag on the opening fence line
        first_line, _, rest = content.partition("\n")
        if not first_line.strip().startswith("{"):
            content = rest
    return content.strip()


def parse_analysis_reply(content) -> AnalysisResult:
    """
    Turn the raw model reply into an AnalysisResult.

    Raises:
        MalformedResponseError: reply is empty, not JSON, or fails validation
    """
    if isinstance(content, list):
        # Multimodal replies may come back as a list of content parts
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    if not content or not content.strip():
        raise MalformedResponseError("No response from the model")

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        try:
            data = json.loads(_clean_json_output(content))
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Reply is not a JSON object")

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Reply does not match the analysis schema: {e}") from e


class CodeAnalyzer:
    """
    The Tutor: finds mistakes in student code and explains how to fix them.
    """

    def __init__(self, llm=None):
        self._llm = llm

    @property
    def llm(self):
        # Built on first use
        if self._llm is None:
            self._llm = create_default_llm(json_mode=True)
        return self._llm

    def analyze(self, code: str = "", attachment: Optional[Attachment] = None) -> AnalysisResult:
        """
        Ask the model for a structured analysis of the code and/or attachment.

        Raises:
            ValueError: neither code nor attachment was given
            MissingCredentialsError: no API key configured
            MalformedResponseError: the reply could not be parsed
        """
        if not code.strip() and attachment is None:
            raise ValueError("Code or an attachment is required")

        source = attachment.name if attachment else f"{len(code.splitlines())} lines"
        logger.info(f"🔍 Analyzing code ({source})")

        messages = [
            SystemMessage(content=SYSTEM_INSTRUCTION),
            HumanMessage(content=self._build_content(code, attachment)),
        ]

        response = self.llm.invoke(messages)
        result = parse_analysis_reply(response.content)

        logger.info(f"✅ Analysis complete: {result.language}, {len(result.errors)} error(s)")
        return result

    def _build_content(self, code: str, attachment: Optional[Attachment]) -> list:
        content = [{"type": "text", "text": self._create_prompt(code, attachment)}]
        if attachment is not None:
            content.append(attachment.to_content_block())
        return content

    def _create_prompt(self, code: str, attachment: Optional[Attachment]) -> str:
        if attachment is not None:
            subject = f"The code is in the attached file '{attachment.name}' (it may be a photo or a document)."
            if code.strip():
                subject += f"\nExtra context from the student:\n{code}"
        else:
            subject = f"User Code:\n{code}"

        return f"""
        You are a friendly, world-class Computer Science tutor for beginners.
        Analyze the following code snippet.

        Your goals:
        1. Detect the language (Java, C, C++, Python, JavaScript).
        2. Find syntax errors (missing semicolons, brackets, types) and logic risks (null pointers, loops).
        3. Explain clearly in simple English (no heavy jargon).
        4. Provide a corrected version.
        5. Provide a simplified logic version if the code is overly complex.
        6. Return the final code formatted beautifully.
        7. If the corrected code prints anything, include the output it would produce.

        Output strictly one JSON object matching this schema:
        {json.dumps(ANALYSIS_RESPONSE_SCHEMA, indent=2)}

        {subject}
        """
