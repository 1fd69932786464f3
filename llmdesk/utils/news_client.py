import httpx
from typing import Any, Dict, List, Optional
import structlog
from llmdesk.utils.config import Settings, settings

logger = structlog.get_logger()


class NewsClient:
    """NewsAPI client for ticker headline searches"""

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_url = config.news_api_url
        self.api_key = config.news_api_key
        self.page_size = config.news_page_size
        self.language = config.news_language
        self.timeout = config.http_timeout
        self.transport = transport

    async def fetch_articles(self, ticker: str, from_date: Optional[str] = None,
                             to_date: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return at most ``page_size`` articles mentioning ``ticker``"""
        if not self.api_key:
            raise Exception("NEWS_API_KEY is not configured")

        params = {
            "q": ticker,
            "pageSize": self.page_size,
            "language": self.language,
            "apiKey": self.api_key,
        }
        if from_date:
            params["from"] = from_date
        if to_date:
            params["to"] = to_date

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(self.api_url, params=params)

        data = response.json()
        if response.status_code != 200:
            # NewsAPI reports errors in the body; treat them as an empty result
            logger.warning("News search returned an error",
                           status_code=response.status_code,
                           code=data.get("code"),
                           message=data.get("message"))

        articles = data.get("articles") or []
        return articles[:self.page_size]


# Global news client instance
news_client = NewsClient()
