import httpx
from functools import reduce
from typing import Any, Dict, Optional
import structlog
from llmdesk.utils.config import Settings, settings

logger = structlog.get_logger()


class HuggingFaceClient:
    """Hugging Face inference API wrapper for the sentiment and summarization models.

    Both calls are best-effort: failures are logged and reported as a missing
    result instead of raising.
    """

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = config.hf_api_key
        self.sentiment_url = config.hf_sentiment_url
        self.summarizer_url = config.hf_summarizer_url
        self.timeout = config.http_timeout
        self.transport = transport

    async def _infer(self, url: str, inputs: str) -> Any:
        if not self.api_key:
            raise Exception("HF_API_KEY is not configured")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"inputs": inputs}
            )

        if response.status_code != 200:
            raise Exception(f"Inference API error {response.status_code}: {response.text}")
        return response.json()

    async def classify_sentiment(self, text: str) -> Optional[str]:
        """Return the highest-scoring raw label, or None if the classifier failed"""
        try:
            data = await self._infer(self.sentiment_url, text)

            # Text classification answers [[{label, score}, ...]] or [{label, score}, ...]
            scores = data[0] if isinstance(data, list) and data and isinstance(data[0], list) else data
            if not isinstance(scores, list) or not scores:
                logger.warning("Unexpected classifier response", response=data)
                return None

            # On equal scores the later label wins
            best: Dict[str, Any] = reduce(
                lambda a, b: a if a.get("score", 0) > b.get("score", 0) else b, scores
            )
            return best.get("label")

        except Exception as e:
            logger.warning("Sentiment classification failed", error=str(e))
            return None

    async def summarize(self, text: str) -> str:
        """Return the summary text, or an empty string if the summarizer failed"""
        try:
            data = await self._infer(self.summarizer_url, text)
            if isinstance(data, list) and data and isinstance(data[0], dict):
                return data[0].get("summary_text") or ""
            logger.warning("Unexpected summarizer response", response=data)
            return ""

        except Exception as e:
            logger.warning("Summarization failed", error=str(e))
            return ""


# Global Hugging Face client instance
hf_client = HuggingFaceClient()
