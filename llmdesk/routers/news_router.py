from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
import structlog
from llmdesk.models import NewsSummaryRequest, NewsSummaryResponse, MissingFieldError
from llmdesk.agents.news_sentiment import NewsSentimentPipeline, news_pipeline
from llmdesk.utils.pdf_exporter import pdf_exporter

logger = structlog.get_logger()
router = APIRouter(prefix="/summarize", tags=["News Sentiment"])


def get_news_pipeline() -> NewsSentimentPipeline:
    return news_pipeline


@router.post("", response_model=NewsSummaryResponse)
async def summarize_news(
    request: NewsSummaryRequest,
    pipeline: NewsSentimentPipeline = Depends(get_news_pipeline)
):
    """
    Summarize recent news for a stock ticker

    Scores each article's sentiment, aggregates a majority verdict and
    returns chart-ready tallies alongside the article list.
    """
    try:
        return await pipeline.run(request)

    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"News summarization failed: {e}", ticker=request.ticker)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/pdf")
async def export_news_pdf(
    request: NewsSummaryRequest,
    pipeline: NewsSentimentPipeline = Depends(get_news_pipeline)
):
    """Run the news summary and download it as a PDF report"""
    try:
        result = await pipeline.run(request)
        ticker = request.ticker
        pdf_bytes = pdf_exporter.export_news_report(result, ticker, request.from_date, request.to_date)

        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{pdf_exporter.generate_filename(ticker)}"'}
        )

    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"News report export failed: {e}", ticker=request.ticker)
        raise HTTPException(status_code=500, detail=str(e))
