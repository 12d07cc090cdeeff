import gradio as gr
import logging
import sys
from pathlib import Path

# --- SETUP PATHS ---
sys.path.insert(0, str(Path(__file__).parent))

# --- IMPORTS ---
from core.models import AppState
from core.settings import settings
from services.analysis_service import CodeAnalyzer
from services.execution_service import CodeExecutor
from services.session_service import DebugSession, SAMPLE_CODE
from services.report_service import (
    ANALYZING_MD,
    EXECUTING_MD,
    HOW_IT_WORKS_MD,
    IDLE_MD,
    format_error_banner,
    format_errors,
    format_explanation,
    format_language_badge,
    format_terminal,
    format_tips,
)

# --- LOGGING SETUP ---
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Chat models are created on first use
analyzer = CodeAnalyzer()
executor = CodeExecutor()


# --- VIEW RENDERING ---
def render_view(session: DebugSession) -> tuple:
    """
    Build the component updates for the current session.
    Order matches VIEW_OUTPUTS below.
    """
    busy = session.is_busy
    result = session.result if session.state is AppState.RESULTS else None

    if session.state is AppState.ANALYZING:
        status = ANALYZING_MD
    elif session.state is AppState.EXECUTING:
        status = EXECUTING_MD
    else:
        status = IDLE_MD

    if session.attachment is not None:
        attachment_md = f"📎 **Attached:** `{session.attachment.name}` ({session.attachment.mime_type})"
    else:
        attachment_md = ""

    return (
        session,
        gr.update(value=session.code),
        gr.update(value=attachment_md, visible=session.attachment is not None),
        gr.update(visible=session.attachment is not None and not busy),
        gr.update(interactive=not busy and session.can_submit),
        gr.update(interactive=session.state is AppState.IDLE and session.can_submit),
        gr.update(
            value=format_error_banner(session.error_message),
            visible=session.state is AppState.ERROR,
        ),
        gr.update(visible=session.state is AppState.ERROR),
        gr.update(visible=session.output_visible),
        gr.update(value=format_terminal(session.output)),
        gr.update(value=status, visible=result is None),
        gr.update(visible=result is not None),
        gr.update(value=format_language_badge(result) if result else ""),
        gr.update(value=format_errors(result) if result else ""),
        gr.update(value=result.correct_syntax if result else ""),
        gr.update(value=format_explanation(result) if result else ""),
        gr.update(visible=bool(result and result.simplified_logic)),
        gr.update(value=result.simplified_logic if result and result.simplified_logic else ""),
        gr.update(value=result.formatted_code if result else ""),
        gr.update(visible=bool(result and result.output)),
        gr.update(value=result.output if result and result.output else ""),
        gr.update(visible=bool(result and result.learning_tips)),
        gr.update(value=format_tips(result) if result else ""),
        gr.update(interactive=not busy),
    )


# --- EVENT HANDLERS ---
def handle_code_edit(session: DebugSession, code: str):
    """Keep the buffer in sync and refresh button availability."""
    if not session.is_busy:
        session.code = code or ""
    view = render_view(session)
    # Leave the editor alone while the student is typing
    return (view[0], gr.update()) + view[2:]


def handle_upload(session: DebugSession, code: str, file_path):
    """File picker or camera capture: classify and store the file."""
    if not session.is_busy:
        session.code = code or ""
        if not file_path:
            # Picker or camera was cleared
            session.remove_attachment()
        else:
            try:
                session.load_file(file_path)
            except OSError as e:
                logger.error(f"Could not read upload {file_path}: {e}")
                gr.Warning("Could not read that file. Please try another one.")
    return render_view(session)


def handle_remove_attachment(session: DebugSession):
    if not session.is_busy:
        session.remove_attachment()
    return render_view(session)


def handle_analyze(session: DebugSession, code: str):
    """Analyze: show the busy view first, then the settled view."""
    if not session.is_busy:
        session.code = code or ""
    if not session.start_analysis():
        yield render_view(session)
        return
    yield render_view(session)
    session.finish_analysis(analyzer)
    yield render_view(session)


def handle_run(session: DebugSession, code: str):
    """Simulated run: always lands back in IDLE with the terminal open."""
    if not session.is_busy:
        session.code = code or ""
    if not session.start_execution():
        yield render_view(session)
        return
    yield render_view(session)
    session.finish_execution(executor)
    yield render_view(session)


def handle_close_output(session: DebugSession):
    session.close_output()
    return render_view(session)


def handle_reset(session: DebugSession):
    session.reset()
    return render_view(session) + (None, None)


# --- THEME ---
debug_helper_theme = gr.themes.Soft(
    primary_hue="blue",
    secondary_hue="slate",
    neutral_hue="slate",
    spacing_size="md",
    radius_size="md",
)

debug_helper_css = """
.gradio-container {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif !important;
    max-width: 1200px !important;
    margin: 0 auto !important;
}

.main-header {
    border-bottom: 1px solid #f1f5f9;
    padding: 1rem 0;
    margin-bottom: 1.5rem;
}

.modal {
    border: 1px solid #e2e8f0;
    border-radius: 16px !important;
    padding: 1.5rem !important;
    box-shadow: 0 20px 40px rgba(15, 23, 42, 0.15);
}

.error-banner {
    background: #fef2f2;
    color: #b91c1c;
    border: 1px solid #fecaca;
    border-radius: 8px;
    padding: 0.75rem 1rem !important;
}

.terminal {
    background: #0f172a !important;
    border-radius: 12px !important;
    border: 1px solid #334155;
}

.terminal .prose, .terminal-title {
    color: #cbd5e1 !important;
}

.status-card {
    border: 2px dashed #e5e7eb;
    border-radius: 12px;
    padding: 3rem 1rem !important;
    text-align: center;
    color: #6b7280;
}

.primary-button {
    box-shadow: 0 10px 20px rgba(37, 99, 235, 0.2);
}
"""


# --- GRADIO INTERFACE ---
with gr.Blocks(title=f"{settings.APP_NAME} - For CS Students", fill_height=True) as demo:

    session_state = gr.State(DebugSession())

    # HEADER
    with gr.Row(elem_classes=["main-header"]):
        gr.HTML(f"""
            <div style="display: flex; align-items: center; gap: 10px;">
                <span style="background: #2563eb; color: white; padding: 6px 10px; border-radius: 8px;">🐞</span>
                <div>
                    <h1 style="margin: 0; font-size: 1.4rem; font-weight: 700;">{settings.APP_NAME}</h1>
                    <p style="margin: 0; font-size: 0.75rem; color: #64748b;">For CS Students</p>
                </div>
            </div>
        """)
        how_btn = gr.Button("How it works", variant="secondary", size="sm", scale=0)

    # ONBOARDING MODAL
    with gr.Column(visible=False, elem_classes=["modal"]) as how_modal:
        gr.Markdown(HOW_IT_WORKS_MD)
        got_it_btn = gr.Button("Got it, let's debug!", variant="primary")

    with gr.Row():

        # LEFT COLUMN: Input
        with gr.Column(scale=5):
            gr.Markdown(
                "## Paste your broken code\n"
                "Don't worry about errors. We'll find them, explain them, and fix them for you."
            )
            code_input = gr.Code(
                value=SAMPLE_CODE,
                language=None,
                label="editor",
                lines=18,
                interactive=True,
            )

            with gr.Accordion("📎 Upload a file or snap a photo", open=False):
                file_input = gr.File(
                    label="Source file, image or PDF",
                    type="filepath",
                )
                camera_input = gr.Image(
                    label="Camera",
                    sources=["webcam"],
                    type="filepath",
                )

            with gr.Row():
                attachment_md = gr.Markdown(visible=False)
                remove_attachment_btn = gr.Button("✖ Remove", size="sm", visible=False, scale=0)

            with gr.Row():
                fix_btn = gr.Button(
                    "🪄 Fix My Code",
                    variant="primary",
                    size="lg",
                    elem_classes=["primary-button"],
                )
                run_btn = gr.Button("▶️ Run", variant="secondary", size="lg")

            error_banner = gr.Markdown(visible=False, elem_classes=["error-banner"])
            start_over_btn = gr.Button("Start Over", size="sm", visible=False)

            # TERMINAL
            with gr.Column(visible=False, elem_classes=["terminal"]) as terminal_panel:
                with gr.Row():
                    gr.Markdown("**>_ Console Output**", elem_classes=["terminal-title"])
                    close_terminal_btn = gr.Button("✖", size="sm", scale=0)
                terminal_output = gr.Code(value="...", language=None, label=None, interactive=False)

        # RIGHT COLUMN: Results
        with gr.Column(scale=7):
            status_md = gr.Markdown(IDLE_MD, elem_classes=["status-card"])

            with gr.Column(visible=False) as results_panel:
                with gr.Row():
                    language_badge = gr.Markdown()
                    reset_btn = gr.Button("Analyze New Code", size="sm", scale=0)

                with gr.Tabs():
                    with gr.Tab("⚠️ Errors"):
                        errors_md = gr.Markdown()
                    with gr.Tab("✅ Correct Syntax"):
                        correct_code = gr.Code(language=None, label="Correct Syntax", interactive=False)
                    with gr.Tab("💡 Explanation"):
                        explanation_md = gr.Markdown()
                    with gr.Tab("✨ Simplified Logic", visible=False) as simplified_tab:
                        gr.Markdown("A cleaner way to write the same logic.")
                        simplified_code = gr.Code(language=None, label="Better Logic", interactive=False)
                    with gr.Tab("📦 Final Code"):
                        final_code = gr.Code(language=None, label="Final Result", interactive=False)
                    with gr.Tab(">_ Output", visible=False) as output_tab:
                        output_code = gr.Code(language=None, label="Output of Fixed Code", interactive=False)
                    with gr.Tab("🎓 Tips", visible=False) as tips_tab:
                        tips_md = gr.Markdown()

    VIEW_OUTPUTS = [
        session_state,
        code_input,
        attachment_md,
        remove_attachment_btn,
        fix_btn,
        run_btn,
        error_banner,
        start_over_btn,
        terminal_panel,
        terminal_output,
        status_md,
        results_panel,
        language_badge,
        errors_md,
        correct_code,
        explanation_md,
        simplified_tab,
        simplified_code,
        final_code,
        output_tab,
        output_code,
        tips_tab,
        tips_md,
        reset_btn,
    ]

    # Event handlers
    how_btn.click(fn=lambda: gr.update(visible=True), outputs=how_modal)
    got_it_btn.click(fn=lambda: gr.update(visible=False), outputs=how_modal)

    code_input.input(
        fn=handle_code_edit,
        inputs=[session_state, code_input],
        outputs=VIEW_OUTPUTS,
    )
    file_input.upload(
        fn=handle_upload,
        inputs=[session_state, code_input, file_input],
        outputs=VIEW_OUTPUTS,
    )
    file_input.clear(
        fn=handle_upload,
        inputs=[session_state, code_input, file_input],
        outputs=VIEW_OUTPUTS,
    )
    camera_input.input(
        fn=handle_upload,
        inputs=[session_state, code_input, camera_input],
        outputs=VIEW_OUTPUTS,
    )
    remove_attachment_btn.click(
        fn=handle_remove_attachment,
        inputs=session_state,
        outputs=VIEW_OUTPUTS,
    )
    fix_btn.click(
        fn=handle_analyze,
        inputs=[session_state, code_input],
        outputs=VIEW_OUTPUTS,
    )
    run_btn.click(
        fn=handle_run,
        inputs=[session_state, code_input],
        outputs=VIEW_OUTPUTS,
    )
    close_terminal_btn.click(
        fn=handle_close_output,
        inputs=session_state,
        outputs=VIEW_OUTPUTS,
    )
    for trigger in (reset_btn, start_over_btn):
        trigger.click(
            fn=handle_reset,
            inputs=session_state,
            outputs=VIEW_OUTPUTS + [file_input, camera_input],
        )


def main():
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} with provider '{settings.LLM_PROVIDER}'")
    demo.launch(
        server_name=settings.HOST,
        server_port=settings.PORT,
        share=settings.SHARE,
        theme=debug_helper_theme,
        css=debug_helper_css,
    )


if __name__ == "__main__":
    main()
