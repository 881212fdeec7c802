# src/campaign_ai/core/schemas.py
"""
Request models, the campaign result schema and the response envelopes
returned by the HTTP entry points.
"""
from dataclasses import dataclass
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Score = Annotated[float, Field(ge=0, le=100)]


# --- Requests ---


class CampaignRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field("", description="Topic or idea the campaign is about")
    platform: Optional[str] = Field("", description="Target platform")
    target_audience: Optional[str] = Field("", alias="targetAudience", description="Target audience")
    tone: Optional[str] = Field("", description="Tone of voice")


class RefineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field("content", description="Content category being refined, e.g. 'caption' or 'hashtags'")
    topic: Optional[str] = ""
    content: Optional[str] = ""
    instruction: str = Field("", description="What change to make")


# --- Campaign schema ---


class HookIntelligence(BaseModel):
    retentionProbability: Score
    emotionalTriggerStrength: Score
    curiosityGap: Score
    impactScore: Score
    pacingStrength: Score
    overallScore: Score


class StoryboardScene(BaseModel):
    scene: int
    visual: str
    camera: str
    lighting: str
    duration: str


class VideoStoryboard(BaseModel):
    scenes: List[StoryboardScene]
    overlayText: str
    ctaEnding: str


class Campaign(BaseModel):
    primaryHook: str
    cinematicReelScript: str
    instagramCaption: str
    linkedInCaption: str
    youtubeCaption: str
    twitterCaption: str
    hashtags: List[str]
    cta: str
    engagementPredictionScore: Score
    contentStrategyAdvice: str
    hookIntelligence: HookIntelligence
    videoStoryboard: VideoStoryboard


@dataclass
class CampaignResult:
    """Parsed model output plus the untouched response text.

    ``raw_data`` is exactly what the model returned, extra keys included.
    ``campaign`` is the validated view of it, or None when validation was
    skipped in lenient mode.
    """

    raw_data: Any
    response_text: str
    campaign: Optional[Campaign] = None

    def as_dict(self) -> dict:
        return {"rawData": self.raw_data, "responseText": self.response_text}


# --- Response envelopes ---


class ErrorDetail(BaseModel):
    kind: str
    message: str


class Success(BaseModel):
    ok: Literal[True] = True
    data: Any


class Failure(BaseModel):
    ok: Literal[False] = False
    error: ErrorDetail
