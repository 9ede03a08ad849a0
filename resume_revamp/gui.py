import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(layout="wide", page_title="ResumeRevamp AI")

import logging

import streamlit.components.v1 as components

from resume_revamp import config, editor
from resume_revamp.exporter import ExportKind, export_docx, export_pdf
from resume_revamp.generator_rule import TemplateType, render_resume
from resume_revamp.llm_client import get_llm_client
from resume_revamp.parser_llm import LLMResumeExtractor
from resume_revamp.pipeline import IngestionPipeline, Stage

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("resume_revamp.gui")

# Available models for each provider
MODEL_OPTIONS = {
    "OpenAI": ["gpt-4o-mini", "gpt-4o", "gpt-4.1-mini"],
    "Ollama": ["llama3.1:8b", "llama3.1:70b", "qwen2.5:14b", "mistral:7b"],
}
PROVIDER_KEYS = {"OpenAI": "openai", "Ollama": "ollama"}

# Initialize session state variables
if "pipeline" not in st.session_state:
    st.session_state.pipeline = IngestionPipeline(LLMResumeExtractor())
if "exports" not in st.session_state:
    # kind -> (record the file was built from, ExportResult)
    st.session_state.exports = {}
if "processed_upload" not in st.session_state:
    st.session_state.processed_upload = None
if "selected_provider" not in st.session_state:
    st.session_state.selected_provider = (
        "Ollama" if config.LLM_PROVIDER == "ollama" else "OpenAI"
    )
if "selected_model" not in st.session_state:
    st.session_state.selected_model = config.get_model_for_provider()

pipeline: IngestionPipeline = st.session_state.pipeline


st.markdown("""
<style>
div.stButton > button {
    border-radius: 8px !important;
    font-weight: 500 !important;
    width: 100% !important;
}
div.stButton > button[kind="primary"] {
    background: linear-gradient(90deg, #2563eb 0%, #1d4ed8 100%) !important;
    border: none !important;
}
div.stDownloadButton > button {
    background: linear-gradient(90deg, #10ac84 0%, #1dd1a1 100%) !important;
    color: white !important;
    border: none !important;
    border-radius: 8px !important;
    width: 100% !important;
}
div.stFileUploader {
    border: 2px dashed #bfdbfe !important;
    border-radius: 12px !important;
    padding: 0.5rem !important;
}
.hero {
    text-align: center;
    padding: 2rem 1rem 1rem;
}
.hero h2 { font-size: 2.6rem; font-weight: 800; margin-bottom: 0.5rem; }
.hero p { font-size: 1.15rem; color: #64748b; }
.app-footer {
    text-align: center;
    padding: 1.5rem;
    color: #94a3b8;
    font-size: 0.85rem;
}
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# --- Model selection (sidebar) ---
def build_extractor() -> LLMResumeExtractor:
    provider = PROVIDER_KEYS[st.session_state.selected_provider]
    model = st.session_state.selected_model

    def chat(**kwargs):
        # client is built per request so a missing key fails the extraction, not the page
        return get_llm_client(provider).chat(**kwargs)

    return LLMResumeExtractor(model=model, chat=chat)


with st.sidebar:
    st.markdown("### 🤖 AI Model Configuration")
    provider = st.selectbox(
        "Provider",
        options=list(MODEL_OPTIONS.keys()),
        index=list(MODEL_OPTIONS.keys()).index(st.session_state.selected_provider),
        help="Choose between the OpenAI API or local Ollama models",
    )
    if provider != st.session_state.selected_provider:
        st.session_state.selected_provider = provider
        # Reset to first model of new provider
        st.session_state.selected_model = MODEL_OPTIONS[provider][0]
    options = MODEL_OPTIONS[provider]
    st.session_state.selected_model = st.selectbox(
        "Model",
        options=options,
        index=options.index(st.session_state.selected_model)
        if st.session_state.selected_model in options else 0,
    )


# --- Ingestion ---
def run_ingestion(start) -> None:
    """Run an ingestion step with an indeterminate progress box."""
    pipeline.extractor = build_extractor()
    with st.status("⏳ Preparing...", expanded=False) as status_ui:
        unsubscribe = pipeline.subscribe(
            lambda s: status_ui.update(label=f"🤖 {s.message}") if s.busy else None
        )
        try:
            state = start()
        finally:
            unsubscribe()
        if state.stage is Stage.EDITABLE:
            status_ui.update(label="✅ Resume ready for editing", state="complete")
        else:
            status_ui.update(label="❌ Processing failed", state="error")
    st.session_state.exports = {}
    st.rerun()


def render_upload_view() -> None:
    st.markdown("""
    <div class="hero">
        <h2>Transform your resume with AI</h2>
        <p>Upload your old resume, and the AI will parse, rewrite, and format it
        into professional templates you can edit and export.</p>
    </div>
    """, unsafe_allow_html=True)

    col_upload, col_text = st.columns(2, gap="large")

    with col_upload:
        uploaded = st.file_uploader("Upload PDF Resume", type="pdf", key="resume_upload")
        st.text_area(
            "Target Job Description (Optional)",
            key="job_description",
            placeholder="Paste the job description here for keyword optimization...",
            height=100,
        )

    with col_text:
        text = st.text_area(
            "Or Paste Text",
            key="resume_text",
            placeholder="Paste your raw resume text here...",
            height=180,
        )
        submit = st.button(
            "Analyze & Revamp", type="primary", disabled=not text, key="submit_text"
        )
        st.markdown("<p style='text-align:center;color:#94a3b8'>or</p>", unsafe_allow_html=True)
        st.button("Use Sample Resume", key="load_sample", on_click=pipeline.load_sample)

    state = pipeline.state
    if state.stage is Stage.ERROR:
        st.error(state.message)

    job_description = st.session_state.get("job_description", "")

    # New file in the uploader → ingest it once
    upload_id = (uploaded.name, uploaded.size) if uploaded else None
    if uploaded and upload_id != st.session_state.processed_upload:
        st.session_state.processed_upload = upload_id
        run_ingestion(lambda: pipeline.submit_file(
            uploaded.getvalue, uploaded.name, uploaded.type or "application/pdf",
            job_description,
        ))
    elif not uploaded:
        st.session_state.processed_upload = None

    if submit and text:
        run_ingestion(lambda: pipeline.submit_text(text, job_description))


# --- Editor callbacks ---
def _from_widget(fn, key, *args):
    """on_change: apply fn(record, *args, <widget value>)."""
    pipeline.edit(fn, *args, st.session_state[key])


def _structural(fn, *args):
    pipeline.edit(fn, *args, structural=True)


def _text(label, value, key, fn, *args, area=False, **kwargs):
    widget = st.text_area if area else st.text_input
    widget(
        label, value=value or "", key=key, on_change=_from_widget,
        args=(fn, key, *args), **kwargs,
    )


def render_editor(record, gen: int) -> None:
    st.markdown("#### Personal Info")
    _text("Full Name", record.full_name, f"{gen}-full_name", editor.set_field, "full_name")
    _text("Job Title", record.job_title, f"{gen}-job_title", editor.set_field, "job_title")
    _text("Professional Summary", record.summary, f"{gen}-summary",
          editor.set_field, "summary", area=True, height=120)

    st.markdown("#### Contact")
    cols = st.columns(2)
    for n, name in enumerate(("email", "phone", "location", "linkedin", "website")):
        with cols[n % 2]:
            _text(name.title(), getattr(record.contact, name), f"{gen}-contact-{name}",
                  editor.set_contact, name)

    head, add = st.columns([5, 1])
    head.markdown("#### Skills")
    add.button("➕", key=f"{gen}-add-skill", help="Add skill",
               on_click=_structural, args=(editor.add_skill,))
    for i, skill in enumerate(record.skills):
        field, remove = st.columns([5, 1])
        with field:
            _text(f"Skill {i + 1}", skill, f"{gen}-skill-{i}", editor.set_skill, i,
                  label_visibility="collapsed")
        remove.button("🗑️", key=f"{gen}-rm-skill-{i}", help="Remove skill",
                      on_click=_structural, args=(editor.remove_skill, i))

    st.markdown("#### Experience")
    for i, exp in enumerate(record.experience):
        with st.expander(f"{exp.role or 'Untitled role'} · {exp.company}", expanded=False):
            for name in ("role", "company", "dates", "location"):
                _text(name.title(), getattr(exp, name), f"{gen}-exp-{i}-{name}",
                      editor.set_experience, i, name)
            _text("Bullet points (one per line)", "\n".join(exp.description),
                  f"{gen}-exp-{i}-description", editor.set_experience_description, i,
                  area=True, height=140)
            st.button("Remove position", key=f"{gen}-rm-exp-{i}",
                      on_click=_structural, args=(editor.remove_experience, i))
    st.button("+ Add Position", key=f"{gen}-add-exp",
              on_click=_structural, args=(editor.add_experience,))

    st.markdown("#### Education")
    for i, edu in enumerate(record.education):
        with st.expander(f"{edu.degree} · {edu.school}", expanded=False):
            for name in ("degree", "school", "dates", "location"):
                _text(name.title(), getattr(edu, name), f"{gen}-edu-{i}-{name}",
                      editor.set_education, i, name)
            st.button("Remove education", key=f"{gen}-rm-edu-{i}",
                      on_click=_structural, args=(editor.remove_education, i))
    st.button("+ Add Education", key=f"{gen}-add-edu",
              on_click=_structural, args=(editor.add_education,))


# --- Exports ---
EXPORT_LABELS = {
    ExportKind.DOCX: ("📥 Export DOCX", "⏳ Generating DOCX..."),
    ExportKind.PDF: ("🖨️ Export PDF", "⏳ Generating PDF..."),
}


def export_control(kind: ExportKind, export) -> None:
    label, busy_label = EXPORT_LABELS[kind]
    state = pipeline.state
    slot = st.empty()
    in_flight = kind in state.exports_in_flight
    if slot.button(busy_label if in_flight else label, key=f"export-{kind.value}",
                   disabled=in_flight):
        slot.button(busy_label, key=f"export-{kind.value}-busy", disabled=True)
        result = pipeline.run_export(kind, export)
        if result is not None:
            st.session_state.exports[kind] = (pipeline.state.record, result)
        st.rerun()

    built = st.session_state.exports.get(kind)
    if built and built[0] is state.record:
        _, result = built
        st.download_button(
            label=f"⬇️ {result.filename}",
            data=result.data,
            file_name=result.filename,
            mime=result.mime,
            key=f"download-{kind.value}",
        )


def render_editor_view() -> None:
    state = pipeline.state
    record = state.record
    html = render_resume(record, state.template, print_mode=state.print_mode)

    col_back, col_docx, col_pdf = st.columns([2, 1, 1])
    with col_back:
        st.button("← Start Over", key="start_over", on_click=pipeline.start_over)
    with col_docx:
        export_control(ExportKind.DOCX, export_docx)
    with col_pdf:
        export_control(ExportKind.PDF, lambda r: export_pdf(r, html))

    if state.alert:
        st.error(state.alert)
        st.button("Dismiss", key="dismiss_alert", on_click=pipeline.dismiss_alert)

    col_edit, col_preview = st.columns([2, 3], gap="large")
    with col_edit:
        st.markdown("#### Choose Template")
        templates = list(TemplateType)
        st.selectbox(
            "Template",
            options=templates,
            index=templates.index(state.template),
            format_func=lambda t: t.value,
            key="template_choice",
            on_change=lambda: pipeline.select_template(st.session_state.template_choice),
            label_visibility="collapsed",
        )
        st.toggle(
            "Print layout",
            value=state.print_mode,
            key="print_mode",
            on_change=lambda: pipeline.set_print_mode(st.session_state.print_mode),
            help="Preview with A4 print margins; the PDF export captures what is shown",
        )
        with st.container(height=900):
            render_editor(record, state.generation)

    with col_preview:
        components.html(html, height=1200, scrolling=True)


st.title("✨ ResumeRevamp AI")

if pipeline.state.stage is Stage.EDITABLE and pipeline.state.record is not None:
    render_editor_view()
else:
    render_upload_view()

st.markdown("---")
st.markdown("""
<div class="app-footer">
    <strong>ResumeRevamp AI</strong> | Extract, rewrite, restyle and export your résumé
</div>
""", unsafe_allow_html=True)
