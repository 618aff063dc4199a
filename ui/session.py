"""Session state and user actions for the dashboard, kept free of Streamlit calls.

`state` is any mutable mapping; the dashboard passes `st.session_state`.
Actions return a user-facing message on failure and None on success.
"""
import logging
from enum import Enum
from typing import Callable, MutableMapping, Optional

from errors import AnalyzerError
from matching.llm_gemini import analyze_resume
from parsers.pdf import PdfDecoder
from parsers.resume_file import read_resume_file

logger = logging.getLogger(__name__)


class View(str, Enum):
    UPLOAD = "upload"
    RESULTS = "results"


DEFAULTS = {
    "resume_text": "",
    "job_description": "",
    "analysis": None,
    "view": View.UPLOAD,
    "analysis_in_progress": False,
}


def init_session(state: MutableMapping) -> None:
    for key, value in DEFAULTS.items():
        if key not in state:
            state[key] = value


def show_view(state: MutableMapping, view: View) -> View:
    """Switch views; results are only reachable once an analysis exists."""
    if view is View.RESULTS and state.get("analysis") is None:
        view = View.UPLOAD
    state["view"] = view
    return view


def load_resume_file(state: MutableMapping, filename: str, data: bytes,
                     content_type: Optional[str], decoder: Optional[PdfDecoder]) -> Optional[str]:
    try:
        text = read_resume_file(filename, data, content_type, decoder)
    except AnalyzerError as e:
        logger.error(f"Error processing file {filename!r}: {e}")
        return e.user_message
    state["resume_text"] = text
    return None


def run_analysis(state: MutableMapping,
                 analyze: Callable[[str, str], object] = analyze_resume) -> Optional[str]:
    """Run one analysis for the current inputs. A previous analysis survives any failure."""
    state["analysis_in_progress"] = True
    try:
        result = analyze(state.get("resume_text", ""), state.get("job_description", ""))
    except AnalyzerError as e:
        logger.error(f"Analysis failed: {type(e).__name__}: {e}")
        return e.user_message
    finally:
        state["analysis_in_progress"] = False

    state["analysis"] = result
    show_view(state, View.RESULTS)
    return None


def reset_analysis(state: MutableMapping) -> None:
    state["analysis"] = None
    show_view(state, View.UPLOAD)
