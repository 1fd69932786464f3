#!/usr/bin/env python3
"""
Development startup script for LLM Desk API
"""
import uvicorn
from llmdesk.utils.config import settings

if __name__ == "__main__":
    print("Starting LLM Desk...")
    print(f"Server will run on: http://{settings.api_host}:{settings.api_port}")
    print(f"API Documentation: http://{settings.api_host}:{settings.api_port}/docs")
    print(f"Debug mode: {settings.debug}")
    print(f"Ollama URL: {settings.ollama_base_url}")
    print(f"Ollama Model: {settings.ollama_model}")
    print(f"NewsAPI key set: {bool(settings.news_api_key)}")
    print(f"Hugging Face key set: {bool(settings.hf_api_key)}")

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
