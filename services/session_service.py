"""
Per-browser-session view model for the debug helper.

Holds the code buffer, the optional attachment and the current AppState,
and performs the state transitions around analysis and simulated runs:

    IDLE/RESULTS/ERROR --analyze--> ANALYZING --> RESULTS | ERROR
    IDLE --run--> EXECUTING --> IDLE  (output shown via output_visible)
    RESULTS/ERROR/IDLE --reset--> IDLE
"""
import logging
from pathlib import Path
from typing import Optional, Union

from core.models import AnalysisResult, AppState, Attachment
from services.attachment_service import encode_file
from services.execution_service import EXECUTION_ERROR_OUTPUT

logger = logging.getLogger(__name__)

SAMPLE_CODE = """public class Main {
  public static void main(String[] args) {
    int a = 10
    if(a = 10) {
      System.out.println("Hello World")
    }
  }
}"""

ANALYSIS_ERROR_MESSAGE = (
    "Oops! Something went wrong analyzing your code. "
    "Please check your internet or try again."
)

_ANALYZE_FROM = {AppState.IDLE, AppState.RESULTS, AppState.ERROR}


class DebugSession:
    """State controller driving which request is in flight and what the view shows."""

    def __init__(self, code: str = SAMPLE_CODE):
        self.code = code
        self.attachment: Optional[Attachment] = None
        self.state = AppState.IDLE
        self.result: Optional[AnalysisResult] = None
        self.error_message: Optional[str] = None
        self.output: Optional[str] = None
        self.output_visible = False

    @property
    def is_busy(self) -> bool:
        return self.state in (AppState.ANALYZING, AppState.EXECUTING)

    @property
    def can_submit(self) -> bool:
        return bool(self.code.strip()) or self.attachment is not None

    # --- input ---

    def load_file(self, path: Union[str, Path], mime_type: Optional[str] = None) -> None:
        """
        Take an uploaded file. Source files replace the code buffer and drop
        any attachment; other files become the attachment and only clear
        the buffer if it still holds the sample.
        """
        encoded = encode_file(path, mime_type)
        if encoded.is_source:
            self.code = encoded.text
            self.attachment = None
            return

        self.attachment = encoded.attachment
        if self.code == SAMPLE_CODE:
            self.code = ""

    def remove_attachment(self) -> None:
        self.attachment = None

    # --- analysis ---

    def start_analysis(self) -> bool:
        """Enter ANALYZING. Returns False (state unchanged) if not allowed."""
        if self.state not in _ANALYZE_FROM or not self.can_submit:
            logger.warning(f"Analyze ignored in state {self.state.value}")
            return False
        self.state = AppState.ANALYZING
        self.error_message = None
        return True

    def finish_analysis(self, analyzer) -> AppState:
        """Run the analysis request and settle in RESULTS or ERROR."""
        if self.state is not AppState.ANALYZING:
            return self.state
        try:
            self.result = analyzer.analyze(self.code, self.attachment)
            self.state = AppState.RESULTS
        except Exception as e:
            logger.error(f"Analysis failed: {type(e).__name__}: {e}")
            self.error_message = ANALYSIS_ERROR_MESSAGE
            self.state = AppState.ERROR
        return self.state

    def analyze(self, analyzer) -> AppState:
        if self.start_analysis():
            self.finish_analysis(analyzer)
        return self.state

    # --- simulated execution ---

    def start_execution(self) -> bool:
        """Enter EXECUTING. Only allowed from IDLE with something to run."""
        if self.state is not AppState.IDLE or not self.can_submit:
            logger.warning(f"Run ignored in state {self.state.value}")
            return False
        self.state = AppState.EXECUTING
        self.output = None
        self.output_visible = True
        return True

    def finish_execution(self, executor) -> AppState:
        """Fetch the simulated output and return to IDLE whatever happens."""
        if self.state is not AppState.EXECUTING:
            return self.state
        try:
            self.output = executor.execute(self.code, self.attachment)
        except Exception as e:
            logger.error(f"Execution failed: {type(e).__name__}: {e}")
            self.output = EXECUTION_ERROR_OUTPUT
        self.state = AppState.IDLE
        return self.state

    def run(self, executor) -> AppState:
        if self.start_execution():
            self.finish_execution(executor)
        return self.state

    def close_output(self) -> None:
        self.output_visible = False

    # --- reset ---

    def reset(self) -> None:
        """Back to IDLE, dropping result, attachment and shown output."""
        if self.is_busy:
            logger.warning(f"Reset ignored while {self.state.value}")
            return
        self.state = AppState.IDLE
        self.result = None
        self.error_message = None
        self.attachment = None
        self.output = None
        self.output_visible = False
