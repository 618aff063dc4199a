"""Tests for dashboard session actions and the two-view state"""
from unittest.mock import Mock, patch

from errors import AnalysisSchemaError, ConfigurationError, NetworkError, ResponseFormatError
from parsers.pdf import TextItem
from ui.session import View, init_session, load_resume_file, reset_analysis, run_analysis, show_view


def new_state(**overrides):
    state = {}
    init_session(state)
    state.update(overrides)
    return state


def test_init_keeps_existing_values():
    state = {"resume_text": "kept"}
    init_session(state)
    assert state["resume_text"] == "kept"
    assert state["view"] is View.UPLOAD
    assert state["analysis"] is None
    assert state["analysis_in_progress"] is False


def test_results_view_requires_analysis():
    state = new_state()
    assert show_view(state, View.RESULTS) is View.UPLOAD
    state["analysis"] = object()
    assert show_view(state, View.RESULTS) is View.RESULTS
    assert show_view(state, View.UPLOAD) is View.UPLOAD


def test_successful_analysis_switches_to_results():
    result = object()
    analyze = Mock(return_value=result)
    state = new_state(resume_text="resume", job_description="job")

    assert run_analysis(state, analyze) is None

    analyze.assert_called_once_with("resume", "job")
    assert state["analysis"] is result
    assert state["view"] is View.RESULTS
    assert state["analysis_in_progress"] is False


def test_in_progress_flag_set_during_call():
    state = new_state(resume_text="r", job_description="j")
    seen = []
    run_analysis(state, lambda r, j: seen.append(state["analysis_in_progress"]))
    assert seen == [True]
    assert state["analysis_in_progress"] is False


def test_failure_keeps_previous_analysis():
    previous = object()
    state = new_state(resume_text="r", job_description="j", analysis=previous, view=View.RESULTS)

    message = run_analysis(state, Mock(side_effect=NetworkError("500")))

    assert message == NetworkError.user_message
    assert state["analysis"] is previous
    assert state["view"] is View.RESULTS
    assert state["analysis_in_progress"] is False


@patch("matching.llm_gemini.requests.post")
def test_unparseable_answer_keeps_previous_analysis(mock_post, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": "Great match, 80%!"}]}}]}
    mock_post.return_value = response
    previous = object()
    state = new_state(resume_text="resume", job_description="job", analysis=previous, view=View.RESULTS)

    message = run_analysis(state)

    mock_post.assert_called_once()
    assert message == ResponseFormatError.user_message
    assert state["analysis"] is previous
    assert state["view"] is View.RESULTS
    assert state["analysis_in_progress"] is False


def test_schema_failure_has_own_message():
    state = new_state(resume_text="r", job_description="j")
    message = run_analysis(state, Mock(side_effect=AnalysisSchemaError("missing fields")))
    assert message == AnalysisSchemaError.user_message
    assert message != NetworkError.user_message
    assert state["analysis"] is None


def test_configuration_failure_reported():
    state = new_state(resume_text="r", job_description="j")
    assert "GEMINI_API_KEY" in run_analysis(state, Mock(side_effect=ConfigurationError()))
    assert state["view"] is View.UPLOAD


def test_reset_returns_to_upload():
    state = new_state(analysis=object(), view=View.RESULTS)
    reset_analysis(state)
    assert state["analysis"] is None
    assert state["view"] is View.UPLOAD


def test_load_text_file_sets_resume():
    state = new_state()
    assert load_resume_file(state, "cv.txt", b"Jane Doe", "text/plain", None) is None
    assert state["resume_text"] == "Jane Doe"


def test_load_pdf_file_uses_decoder():
    decoder = Mock()
    decoder.name = "mock"
    decoder.read_pages.return_value = [[TextItem("Jane Doe", 10)]]
    state = new_state()
    assert load_resume_file(state, "cv.pdf", b"%PDF", "application/pdf", decoder) is None
    assert state["resume_text"] == "Jane Doe"


def test_failed_load_leaves_text_untouched():
    decoder = Mock()
    decoder.name = "mock"
    decoder.read_pages.side_effect = RuntimeError("corrupt")
    state = new_state(resume_text="typed by hand")

    message = load_resume_file(state, "cv.pdf", b"junk", "application/pdf", decoder)

    assert "paste the text manually" in message
    assert state["resume_text"] == "typed by hand"
