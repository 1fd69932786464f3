from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings using Pydantic BaseSettings"""

    # Ollama Configuration
    ollama_base_url: str = "http://127.0.0.1:11434"
    ollama_model: str = "llama3"

    # NewsAPI Configuration
    news_api_url: str = "https://newsapi.org/v2/everything"
    news_api_key: Optional[str] = None
    news_page_size: int = 5
    news_language: str = "en"

    # Hugging Face Inference Configuration
    hf_api_key: Optional[str] = None
    hf_sentiment_url: str = "https://api-inference.huggingface.co/models/cardiffnlp/twitter-roberta-base-sentiment"
    hf_summarizer_url: str = "https://api-inference.huggingface.co/models/facebook/bart-large-cnn"

    # Number of classifier calls allowed in flight; 1 keeps them sequential
    sentiment_concurrency: int = 1

    # Outbound HTTP
    http_timeout: float = 60.0

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
