from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from enum import Enum


class MissingFieldError(ValueError):
    """Raised when a request lacks the field a pipeline needs"""


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


# Tagged form used for the overall verdict shown on the dashboard
SENTIMENT_SYMBOLS = {
    Sentiment.POSITIVE: "✅ Positive",
    Sentiment.NEGATIVE: "❌ Negative",
    Sentiment.NEUTRAL: "⚠️ Neutral",
}


# Request models keep the text fields optional so a missing field is reported
# as a 400 by the generators instead of a schema error.
class FlashcardsRequest(BaseModel):
    notes: Optional[str] = None


class QuizRequest(BaseModel):
    text: Optional[str] = None


class NewsSummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ticker: Optional[str] = None
    from_date: Optional[str] = Field(default=None, alias="from")
    to_date: Optional[str] = Field(default=None, alias="to")


class Flashcard(BaseModel):
    front: str
    back: str


class QuizQuestion(BaseModel):
    question: str
    options: List[str]
    correct: int
    explanation: str


class Article(BaseModel):
    """A NewsAPI article; provider fields beyond the declared ones are kept"""
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    publishedAt: Optional[str] = None
    url: Optional[str] = None
    sentiment: Optional[Sentiment] = None


class ChartDatum(BaseModel):
    name: Sentiment
    value: int


class SentimentTally(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    def add(self, sentiment: Sentiment) -> None:
        if sentiment == Sentiment.POSITIVE:
            self.positive += 1
        elif sentiment == Sentiment.NEGATIVE:
            self.negative += 1
        else:
            self.neutral += 1

    def majority(self) -> Sentiment:
        """Strict majority of Positive or Negative; anything else is Neutral"""
        if self.positive > self.negative and self.positive > self.neutral:
            return Sentiment.POSITIVE
        if self.negative > self.positive and self.negative > self.neutral:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def chart_data(self) -> List[ChartDatum]:
        return [
            ChartDatum(name=Sentiment.POSITIVE, value=self.positive),
            ChartDatum(name=Sentiment.NEGATIVE, value=self.negative),
            ChartDatum(name=Sentiment.NEUTRAL, value=self.neutral),
        ]


class NewsSummaryResponse(BaseModel):
    summary: str
    sentiment: str
    keyPoints: List[str] = Field(default_factory=list)
    articles: List[Article] = Field(default_factory=list)
    chartData: List[ChartDatum] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    agents_status: Dict[str, str]
