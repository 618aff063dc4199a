from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, UploadFile, File, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
import config
from errors import (
    AnalysisSchemaError,
    AnalyzerError,
    ConfigurationError,
    DecodeError,
    DecoderUnavailableError,
    InputValidationError,
    NetworkError,
    ResponseFormatError,
)
from schemas import AnalysisResult, AnalyzeIn, ExtractedResumeOut
from parsers.pdf import init_pdf_decoder
from parsers.resume_file import read_resume_file
from matching.llm_gemini import analyze_resume

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

STATUS_FOR = {
    InputValidationError: 400,
    DecodeError: 422,
    DecoderUnavailableError: 422,
    ConfigurationError: 503,
    AnalysisSchemaError: 502,
    ResponseFormatError: 502,
    NetworkError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the PDF decoder once; the API still serves text uploads without it."""
    try:
        app.state.pdf_decoder = init_pdf_decoder()
    except DecoderUnavailableError as e:
        logger.error(f"PDF support disabled: {e}")
        app.state.pdf_decoder = None
    yield
    logger.info("Application shutting down.")


app = FastAPI(title="Resume Job Match Analyzer", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _http_error(e: AnalyzerError) -> HTTPException:
    status = STATUS_FOR.get(type(e), 500)
    return HTTPException(status_code=status, detail=e.user_message)


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@app.get("/health")
def health(request: Request):
    return {"status": "ok", "pdf_support": getattr(request.app.state, "pdf_decoder", None) is not None}


@app.post("/resume/extract", response_model=ExtractedResumeOut)
async def extract_resume(request: Request, resume: UploadFile = File(...)):
    """Return the text of an uploaded TXT or PDF resume."""
    data = await resume.read()
    decoder = getattr(request.app.state, "pdf_decoder", None)
    try:
        text = await run_in_threadpool(
            read_resume_file, resume.filename or "", data, resume.content_type, decoder
        )
    except AnalyzerError as e:
        logger.warning(f"Extraction failed for {resume.filename!r}: {e}")
        raise _http_error(e)
    return ExtractedResumeOut(filename=resume.filename or "", text=text, characters=len(text))


@app.post("/analyze", response_model=AnalysisResult)
def analyze(body: AnalyzeIn):
    """Analyze a resume against a job description."""
    try:
        return analyze_resume(body.resume_text, body.job_description)
    except AnalyzerError as e:
        raise _http_error(e)
