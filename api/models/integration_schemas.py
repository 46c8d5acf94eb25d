from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from services.advice_schemas import AdviceTask, CareerAdvice


class AuthUrlResponse(BaseModel):
    url: str


class ManualTokenRequest(BaseModel):
    token: Optional[str] = Field(None, description="Notion internal integration secret")


class NotionExportRequest(BaseModel):
    advice: CareerAdvice
    title: Optional[str] = None


class ReadmeResponse(BaseModel):
    content: str


class LinkedInUpdateRequest(BaseModel):
    headline: Optional[str] = None
    about: Optional[str] = None


class LinkedInUpdateResponse(BaseModel):
    success: bool
    message: str


class AdviceRequest(BaseModel):
    task: AdviceTask = AdviceTask.ADVICE


class NotionExportResult(BaseModel):
    title: str
    success: bool
    page_id: Optional[str] = None
    error: Optional[str] = None


class AdviceRunResponse(BaseModel):
    task: AdviceTask
    advice: Optional[Dict[str, Any]] = None
    linkedin_optimization: Optional[Dict[str, Any]] = None
    tool_calls: List[Dict[str, Any]] = Field(default_factory=list)
    notion_exports: List[NotionExportResult] = Field(default_factory=list)
