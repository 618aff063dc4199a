# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import logging
import streamlit as st
import pandas as pd
import config
from errors import DecoderUnavailableError
from parsers.pdf import init_pdf_decoder
from ui.session import View, init_session, show_view, load_resume_file, run_analysis, reset_analysis

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

BADGE = {"high": "🔴", "medium": "🟡", "low": "🟢"}

# -------------------- CONFIG --------------------
st.set_page_config(page_title="Resume Job Match Analyzer", page_icon="🎯", layout="wide")
st.title("🎯 Resume Job Match Analyzer")
st.markdown("AI-powered recruiter analysis to optimize your job applications")


@st.cache_resource
def get_pdf_decoder():
    """One decoder per process; None when no PDF backend could be set up."""
    try:
        return init_pdf_decoder()
    except DecoderUnavailableError as e:
        logger.error(f"PDF support disabled: {e}")
        return None


# -------------------- SESSION STATE --------------------
state = st.session_state
init_session(state)
decoder = get_pdf_decoder()


def _go(view: View):
    show_view(state, view)


def _sync_resume():
    state.resume_text = state.resume_input


def _sync_jd():
    state.job_description = state.jd_input


def _on_upload():
    uploaded = state.get("resume_file")
    if uploaded is None:
        return
    error = load_resume_file(state, uploaded.name, uploaded.getvalue(), uploaded.type, decoder)
    if error:
        state.upload_error = error
    else:
        state.upload_error = None
        state.resume_input = state.resume_text


# -------------------- NAVIGATION --------------------
nav = st.columns([1, 1, 4])
nav[0].button("📤 Upload & Input", on_click=_go, args=(View.UPLOAD,),
              type="primary" if state.view == View.UPLOAD else "secondary")
if state.analysis is not None:
    nav[1].button("📈 Analysis Results", on_click=_go, args=(View.RESULTS,),
                  type="primary" if state.view == View.RESULTS else "secondary")


def render_upload():
    if "resume_input" not in state:
        state.resume_input = state.resume_text
    if "jd_input" not in state:
        state.jd_input = state.job_description

    left, right = st.columns(2)

    with left:
        with st.container(border=True):
            st.subheader("📄 Your Resume")
            st.file_uploader("Upload Resume File (TXT/PDF)", type=["txt", "pdf"],
                             key="resume_file", on_change=_on_upload)
            if decoder is None:
                st.caption("⚠️ PDF support is unavailable. Paste your resume text below.")
            if state.get("upload_error"):
                st.error(state.upload_error)
            st.text_area("Or paste your resume content here...", key="resume_input",
                         height=260, on_change=_sync_resume)
            st.caption(f"{len(state.resume_input)} characters")

    with right:
        with st.container(border=True):
            st.subheader("💼 Job Description")
            st.text_area("Paste the complete job description here...", key="jd_input",
                         height=340, on_change=_sync_jd)
            st.caption(f"{len(state.jd_input)} characters")

    if state.analysis is None:
        # the run blocks inside the spinner, so the spinner is the busy indicator
        if st.button("🔍 Analyze Resume vs Job Description", key="analyze",
                     type="primary", use_container_width=True):
            state.resume_text = state.resume_input
            state.job_description = state.jd_input
            with st.spinner("⏳ Analyzing resume against the job description..."):
                error = run_analysis(state)
            if error:
                st.error(f"❌ {error}")
            else:
                st.rerun()


def render_results(a):
    # --- Match Score ---
    with st.container(border=True):
        c1, c2 = st.columns([3, 1])
        c1.markdown("**Overall Match Score**")
        c1.markdown(f"## {a.matchPercentage}")
        c1.caption(f"Current hiring chance: {a.hiringChanceAnalysis.currentChance}")
        c2.metric("Score", a.matchScore)

    # --- Growth Potential ---
    with st.container(border=True):
        st.markdown("### 🚀 Growth Potential")
        chances = pd.DataFrame({
            "Metric": ["Current hiring chance", "Potential with improvements", "Estimated time"],
            "Value": [
                a.hiringChanceAnalysis.currentChance,
                a.hiringChanceAnalysis.potentialChance,
                a.hiringChanceAnalysis.timeToImprove,
            ],
        })
        st.table(chances)

    # --- Strengths ---
    st.markdown("### ✅ Your Strengths")
    for s in a.strengths:
        with st.container(border=True):
            st.markdown(f"**{s.title}**")
            st.write(s.description)
            if s.relevance:
                st.caption(f"✓ {s.relevance}")

    # --- Weaknesses ---
    st.markdown("### ⚠️ Areas for Improvement")
    for w in a.weaknesses:
        with st.container(border=True):
            st.markdown(f"**{w.title}** &nbsp; {BADGE.get(w.severity, '⚪')} `{w.severity.upper()}`")
            st.write(w.description)
            if w.impact:
                st.caption(f"Impact: {w.impact}")

    # --- Improvement Suggestions ---
    st.markdown("### ⚡ Improvement Recommendations")
    for sug in a.improvementSuggestions:
        with st.container(border=True):
            st.markdown(f"**{sug.area}** &nbsp; {BADGE.get(sug.priority, '⚪')} `{sug.priority}`")
            st.markdown(f"**Current Issue:** {sug.currentIssue}")
            st.markdown(f"**Action:** {sug.recommendation}")
            if sug.impact:
                st.caption(f"Expected Impact: {sug.impact}")

    # --- Missing Keywords ---
    st.markdown("### 🔑 Keywords to Add")
    st.markdown(" ".join(f"`{k}`" for k in a.keywordMissing) or "—")

    # --- Resume Tips ---
    st.markdown("### 🛠️ Resume Optimization Tips")
    for idx, tip in enumerate(a.resumeOptimizationTips, start=1):
        st.markdown(f"{idx}. {tip}")

    # --- Competitive Advantage ---
    st.markdown("### 🏆 Stand Out from Competitors")
    st.info(a.competitorAdvantage)

    # --- Interview Prep ---
    st.markdown("### 🎤 Interview Preparation")
    for idx, q in enumerate(a.interviewPrep, start=1):
        with st.container(border=True):
            st.markdown(f"**Q{idx}:** {q}")

    st.button("Analyze Another Position", on_click=reset_analysis, args=(state,),
              type="primary", use_container_width=True)


# ==================== VIEWS ====================
if state.view == View.RESULTS and state.analysis is not None:
    render_results(state.analysis)
else:
    render_upload()
