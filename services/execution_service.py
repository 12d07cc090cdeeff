import logging
from typing import Optional

from langchain_core.messages import SystemMessage, HumanMessage

from core.llm_factory import create_default_llm
from core.models import Attachment

logger = logging.getLogger(__name__)

NO_OUTPUT_FALLBACK = "No output generated."
EXECUTION_ERROR_OUTPUT = "Error: Could not execute code. Please try again."


class CodeExecutor:
    """
    Simulated runner: the model predicts the console output of the code.
    Nothing is executed locally.
    """

    def __init__(self, llm=None):
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = create_default_llm()
        return self._llm

    def execute(self, code: str = "", attachment: Optional[Attachment] = None) -> str:
        """
        Return the simulated console output.

        Never raises: any failure becomes EXECUTION_ERROR_OUTPUT, unlike
        CodeAnalyzer.analyze which propagates its errors.
        """
        try:
            if not code.strip() and attachment is None:
                raise ValueError("Code or an attachment is required")

            logger.info("▶️ Simulating code execution")
            content = [{"type": "text", "text": self._create_prompt(code, attachment)}]
            if attachment is not None:
                content.append(attachment.to_content_block())

            messages = [
                SystemMessage(content="You are a code execution engine. Output console text only."),
                HumanMessage(content=content),
            ]
            response = self.llm.invoke(messages)
            output = self._clean_output(response.content)
        except Exception as e:
            logger.error(f"Execution simulation failed: {e}")
            return EXECUTION_ERROR_OUTPUT

        if not output:
            return NO_OUTPUT_FALLBACK
        return output

    def _create_prompt(self, code: str, attachment: Optional[Attachment]) -> str:
        if attachment is not None:
            subject = f"The code is in the attached file '{attachment.name}'."
            if code.strip():
                subject += f"\nExtra context:\n{code}"
        else:
            subject = f"Code:\n{code}"

        return f"""
        Act as a compiler and runtime for the following code.

        Rules:
        1. If the code has mistakes, silently fix them first and run the corrected version.
        2. Return ONLY the exact text the program prints to the console.
        3. Do not use markdown code fences.
        4. Do not add explanations, headings or any other prose.

        {subject}
        """

    def _clean_output(self, text) -> str:
        if isinstance(text, list):
            text = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in text
            )
        text = (text or "").strip()
        if text.startswith("```"):
            # Drop the opening fence together with any language tag
            text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.endswith("```"):
            text = text[:-3]
        return text.strip()
