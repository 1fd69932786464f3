import httpx
from typing import Optional
import structlog
from llmdesk.utils.config import Settings, settings

logger = structlog.get_logger()


class OllamaClient:
    """Ollama client wrapper for the locally hosted generation model"""

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = config.ollama_base_url.rstrip("/")
        self.model = config.ollama_model
        self.timeout = config.http_timeout
        self.transport = transport

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout or self.timeout, transport=self.transport)

    async def generate_completion(self, prompt: str) -> str:
        """Send one non-streaming generate request and return the raw model text"""
        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.base_url}/api/generate",
                    json={
                        "model": self.model,
                        "prompt": prompt,
                        "stream": False
                    }
                )

                if response.status_code == 200:
                    result = response.json()
                    return result.get("response") or ""
                else:
                    raise Exception(f"Ollama error {response.status_code}: {response.text}")

        except Exception as e:
            logger.error("Ollama API error", error=str(e), model=self.model)
            raise

    async def health_check(self) -> bool:
        """Check if Ollama server is running and model is available"""
        try:
            async with self._client(timeout=10.0) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                if response.status_code != 200:
                    return False

                models = response.json().get("models", [])
                model_names = [model.get("name", "") for model in models]
                return any(self.model in name for name in model_names)

        except Exception as e:
            logger.error("Ollama health check failed", error=str(e))
            return False


# Global Ollama client instance
ollama_client = OllamaClient()
