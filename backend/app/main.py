import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from calculator import storage
from narrator import (
    available_languages, calculate, format_display, format_expression,
    messages_for, select_tips,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="KidCalc API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalculateRequest(BaseModel):
    expression: str
    language: Optional[str] = None


class StepInfo(BaseModel):
    step_number: int
    text: str
    kind: str


class TipInfo(BaseModel):
    key: str
    text: str


class ErrorInfo(BaseModel):
    kind: str
    message: str


class SummaryInfo(BaseModel):
    runtime_ms: float
    total_steps: int
    timestamp: str
    language: str
    status: str


class CalculateResponse(BaseModel):
    expression: str
    display_expression: str
    value: Optional[float] = None
    final_answer: Optional[str] = None
    steps: list[StepInfo]
    tips: list[TipInfo]
    error: Optional[ErrorInfo] = None
    summary: SummaryInfo


class FormatResponse(BaseModel):
    display_expression: str
    display: str


class HistoryEntry(BaseModel):
    expression: str
    result: float
    display_expression: str
    display_result: str
    timestamp: str


class Settings(BaseModel):
    language: str = storage.DEFAULT_SETTINGS["language"]
    show_tips: bool = storage.DEFAULT_SETTINGS["show_tips"]


def _language(requested: Optional[str]) -> str:
    if requested is None:
        return storage.get_settings()["language"]
    if requested not in available_languages():
        raise HTTPException(status_code=400, detail=f"Unknown language: {requested}")
    return requested


@app.post("/api/calculate", response_model=CalculateResponse)
def calculate_expression(req: CalculateRequest):
    expression = req.expression.strip()
    if not expression:
        raise HTTPException(status_code=400, detail="Expression cannot be empty.")

    result = calculate(expression, _language(req.language))
    if result["error"] is None:
        storage.add_history(expression, result["value"])
    return result


@app.get("/api/tips", response_model=list[TipInfo])
def tips(expression: str, language: Optional[str] = None):
    messages = messages_for(_language(language))
    return [t.as_dict() for t in select_tips(expression, messages)]


@app.get("/api/format", response_model=FormatResponse)
def format_(expression: str = ""):
    return {
        "display_expression": format_expression(expression),
        "display": format_display(expression),
    }


@app.get("/api/history", response_model=list[HistoryEntry])
def history():
    return storage.get_history()


@app.delete("/api/history", status_code=204)
def clear_history():
    storage.clear_history()
    return Response(status_code=204)


@app.get("/api/settings", response_model=Settings)
def get_settings():
    return storage.get_settings()


@app.put("/api/settings", response_model=Settings)
def put_settings(settings: Settings):
    if settings.language not in available_languages():
        raise HTTPException(status_code=400, detail=f"Unknown language: {settings.language}")
    storage.save_settings(settings.model_dump())
    logger.info("Settings updated: %s", settings.model_dump())
    return settings


@app.get("/api/languages", response_model=list[str])
def languages():
    return available_languages()
