"""
Markdown builders for the result card, terminal panel and status views.
Render-only: no state changes happen here.
"""
import html
import re
from typing import Optional

from core.models import AnalysisResult, CodeError

SUCCESS_BANNER = "### ✅ Great Job!\nNo syntax errors were found in your code."
TERMINAL_PLACEHOLDER = "..."

IDLE_MD = (
    "### 💻 Ready to Debug\n"
    "Paste your code on the left and hit the fix button to see magic happen."
)
ANALYZING_MD = "### 🪄 Scanning for bugs...\nChecking syntax, logic, and style."
EXECUTING_MD = "### ▶️ Running your code...\nSimulating the console output."

HOW_IT_WORKS_MD = """## How it works
Debug your code in 3 simple steps.

**📄 1. Paste Code**
Paste your broken code into the editor, or upload a file or a photo of it. We support Java, Python, C++, C, and JavaScript.

**🔍 2. Instant Analysis**
Our AI scans for syntax errors, logic flaws, and bad practices instantly.

**✅ 3. Learn & Fix**
Get corrected code, clear explanations, and simplified logic suggestions.
"""


def format_language_badge(result: AnalysisResult) -> str:
    return f"**Detected:** {format_code(result.language)}"


def _escape_text(text: str) -> str:
    return html.escape(text, quote=False)


def _longest_backtick_run(text: str) -> int:
    return max((len(run) for run in re.findall(r"`+", text)), default=0)


def format_code(code: str) -> str:
    """Literal code: inline span for one line, fenced block otherwise."""
    run = _longest_backtick_run(code)
    if "\n" in code:
        fence = "`" * max(3, run + 1)
        return f"{fence}\n{code}\n{fence}"
    ticks = "`" * (run + 1)
    if code.startswith("`") or code.endswith("`"):
        code = f" {code} "
    return f"{ticks}{code}{ticks}"


def format_error(idx: int, error: CodeError) -> str:
    header = f"**{idx}. {_escape_text(error.type)}**"
    if error.line:
        header += f" • Line {_escape_text(error.line)}"
    lines = [header, "", _escape_text(error.description)]
    if error.fix:
        if "\n" in error.fix:
            lines.extend(["", "**Fix:**", "", format_code(error.fix)])
        else:
            lines.extend(["", f"**Fix:** {format_code(error.fix)}"])
    return "\n".join(lines)


def format_errors(result: AnalysisResult) -> str:
    """Numbered error list, or the success banner when nothing was found."""
    if not result.errors:
        return SUCCESS_BANNER

    lines = ["### ⚠️ Errors Found", ""]
    for idx, error in enumerate(result.errors, 1):
        lines.append(format_error(idx, error))
        lines.append("")
        lines.append("---")
        lines.append("")
    return "\n".join(lines[:-3])


def format_explanation(result: AnalysisResult) -> str:
    return f"### 💡 Why This Error Happened\n\n{result.explanation}"


def format_tips(result: AnalysisResult) -> str:
    if not result.learning_tips:
        return ""
    lines = ["### 🎓 Quick Tips to Remember", ""]
    lines.extend(f"- {tip}" for tip in result.learning_tips)
    return "\n".join(lines)


def format_terminal(output: Optional[str]) -> str:
    """Console text for the terminal panel; placeholder when nothing ran yet."""
    if output is None:
        return TERMINAL_PLACEHOLDER
    return output


def format_error_banner(message: Optional[str]) -> str:
    return f"❌ {message}" if message else ""
