from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_pipeline, get_store
from models.requests import TextAnalyzeRequest
from models.responses import AnalysisResponse, HealthResponse
from models.schemas.analysis_record import FileInfo
from services import resume_analyzer
from services.document_reader import extract_text, resolve_mime_type
from services.errors import DecodeError
from services.request_pipeline import RequestPipeline
from services.resume_store import ResumeStore, persist_record

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

# Failure codes not listed here are upstream problems (503)
STATUS_BY_CODE = {
    "INVALID_INPUT": 400,
    "INSUFFICIENT_CONTENT": 400,
    "CONTENT_TOO_LARGE": 400,
    "SECURITY_ERROR": 400,
    "RATE_LIMITED": 429,
    "INTERNAL_ERROR": 500,
}


def _respond(
    response: AnalysisResponse,
    background_tasks: BackgroundTasks,
    store: ResumeStore,
) -> JSONResponse:
    if response.success and response.record is not None:
        background_tasks.add_task(persist_record, store, response.record)
        status_code = 200
    else:
        status_code = STATUS_BY_CODE.get(response.error_code or "", 503)
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


@router.get("/health", response_model=HealthResponse)
async def health(pipeline: RequestPipeline = Depends(get_pipeline)):
    return pipeline.health()


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit("10/minute")
async def analyze(
    request: Request,
    background_tasks: BackgroundTasks,
    resume_file: UploadFile = File(...),
    tone: str | None = Form(None),
    language: str | None = Form(None),
    style: str | None = Form(None),
    audience: str | None = Form(None),
    pipeline: RequestPipeline = Depends(get_pipeline),
    store: ResumeStore = Depends(get_store),
):
    content = await resume_file.read()
    mime_type = resolve_mime_type(resume_file.filename, resume_file.content_type)

    try:
        resume_text = extract_text(content, mime_type)
    except DecodeError as e:
        failure = AnalysisResponse(success=False, error_code=e.code, user_message=str(e))
        return JSONResponse(status_code=400, content=failure.model_dump(mode="json"))

    file_info = FileInfo(
        file_name=resume_file.filename or "unknown",
        file_size=len(content),
        mime_type=mime_type,
    )
    raw_config = {"tone": tone, "language": language, "style": style, "audience": audience}
    response = await resume_analyzer.analyze(
        resume_text, raw_config, pipeline=pipeline, file_info=file_info
    )
    return _respond(response, background_tasks, store)


@router.post("/analyze/text", response_model=AnalysisResponse)
@limiter.limit("10/minute")
async def analyze_text(
    request: Request,
    body: TextAnalyzeRequest,
    background_tasks: BackgroundTasks,
    pipeline: RequestPipeline = Depends(get_pipeline),
    store: ResumeStore = Depends(get_store),
):
    response = await resume_analyzer.analyze(
        body.resume_text, body.config_values(), pipeline=pipeline
    )
    return _respond(response, background_tasks, store)
