import asyncio
import re
import time
from typing import Any, Dict, List, Optional
import structlog

from llmdesk.models import (
    Article, MissingFieldError, NewsSummaryRequest, NewsSummaryResponse, Sentiment,
    SentimentTally, SENTIMENT_SYMBOLS
)
from llmdesk.utils.config import Settings, settings
from llmdesk.utils.hf_client import HuggingFaceClient, hf_client
from llmdesk.utils.news_client import NewsClient, news_client

logger = structlog.get_logger()

NEGATIVE_LABEL = re.compile(r"NEGATIVE|LABEL_0", re.IGNORECASE)
POSITIVE_LABEL = re.compile(r"POSITIVE|LABEL_2", re.IGNORECASE)


def map_label(label: Optional[str]) -> Sentiment:
    """Map a raw classifier label onto Positive/Negative/Neutral"""
    if not label:
        return Sentiment.NEUTRAL
    if NEGATIVE_LABEL.search(label):
        return Sentiment.NEGATIVE
    if POSITIVE_LABEL.search(label):
        return Sentiment.POSITIVE
    return Sentiment.NEUTRAL


def build_context(articles: List[Dict[str, Any]]) -> str:
    """Concatenate article titles and descriptions into one summarizer input"""
    return "\n".join(
        f"Article {i}: {article.get('title') or ''}. {article.get('description') or ''}"
        for i, article in enumerate(articles, 1)
    )


class NewsSentimentPipeline:
    """Fetches ticker news, scores each article and summarizes the set"""

    def __init__(self, news: NewsClient = news_client, inference: HuggingFaceClient = hf_client,
                 config: Settings = settings):
        self.news = news
        self.inference = inference
        self.concurrency = max(1, config.sentiment_concurrency)

    async def run(self, request: NewsSummaryRequest) -> NewsSummaryResponse:
        ticker = request.ticker
        if not ticker:
            raise MissingFieldError("Ticker required")

        start_time = time.time()
        articles = await self.news.fetch_articles(ticker, request.from_date, request.to_date)

        if not articles:
            logger.info("No news found", ticker=ticker)
            return NewsSummaryResponse(
                summary=f"No news found for {ticker}",
                sentiment=SENTIMENT_SYMBOLS[Sentiment.NEUTRAL],
            )

        sentiments = await self._classify_all(articles)

        tally = SentimentTally()
        for article, sentiment in zip(articles, sentiments):
            article["sentiment"] = sentiment
            tally.add(sentiment)

        summary = await self.inference.summarize(build_context(articles))
        overall = tally.majority()

        logger.info("News summary completed",
                    ticker=ticker,
                    articles=len(articles),
                    positive=tally.positive,
                    negative=tally.negative,
                    neutral=tally.neutral,
                    sentiment=overall.value,
                    processing_time=round(time.time() - start_time, 3))

        return NewsSummaryResponse(
            summary=summary,
            sentiment=SENTIMENT_SYMBOLS[overall],
            keyPoints=[article.get("title") or "" for article in articles],
            articles=[Article(**article) for article in articles],
            chartData=tally.chart_data(),
        )

    async def _classify(self, article: Dict[str, Any]) -> Sentiment:
        text = f"{article.get('title') or ''} {article.get('description') or ''}"
        return map_label(await self.inference.classify_sentiment(text))

    async def _classify_all(self, articles: List[Dict[str, Any]]) -> List[Sentiment]:
        if self.concurrency == 1:
            return [await self._classify(article) for article in articles]

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(article):
            async with semaphore:
                return await self._classify(article)

        # gather keeps results in article order
        return list(await asyncio.gather(*(bounded(article) for article in articles)))


# Global pipeline instance
news_pipeline = NewsSentimentPipeline()
