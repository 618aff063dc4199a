from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# Strength matched against the job description
class Strength(_Frozen):
    title: str
    description: str
    relevance: str = ""


# Missing skill or experience
class Weakness(_Frozen):
    title: str
    description: str
    impact: str = ""
    severity: str = "medium"

    @field_validator("severity")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.strip().lower()


# Concrete action for one resume section
class ImprovementSuggestion(_Frozen):
    area: str
    currentIssue: str
    recommendation: str
    impact: str = ""
    priority: str = "medium"

    @field_validator("priority")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.strip().lower()


class HiringChanceAnalysis(_Frozen):
    currentChance: str
    potentialChance: str
    timeToImprove: str


# Full assessment returned by the model; display-only, never mutated
class AnalysisResult(_Frozen):
    matchScore: int = Field(ge=0, le=100)
    matchPercentage: str
    strengths: List[Strength]
    weaknesses: List[Weakness]
    keywordMissing: List[str]
    improvementSuggestions: List[ImprovementSuggestion]
    hiringChanceAnalysis: HiringChanceAnalysis
    resumeOptimizationTips: List[str]
    competitorAdvantage: str
    interviewPrep: List[str]

    @field_validator("matchScore", mode="before")
    @classmethod
    def _round_score(cls, v):
        # models sometimes answer 72.5
        if isinstance(v, float):
            return int(v + 0.5)
        return v


# Request body for POST /analyze
class AnalyzeIn(BaseModel):
    resume_text: str
    job_description: str


# Response body for POST /resume/extract
class ExtractedResumeOut(BaseModel):
    filename: str
    text: str
    characters: int
