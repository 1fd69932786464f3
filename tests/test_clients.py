import httpx
import pytest
from llmdesk.utils.config import Settings
from llmdesk.utils.hf_client import HuggingFaceClient
from llmdesk.utils.news_client import NewsClient
from llmdesk.utils.ollama_client import OllamaClient


def respond(*args, **kwargs):
    return httpx.MockTransport(lambda request: httpx.Response(*args, **kwargs))


def hf_client(transport):
    return HuggingFaceClient(Settings(hf_api_key="hf-key"), transport=transport)


@pytest.mark.asyncio
async def test_classifier_accepts_flat_score_list():
    client = hf_client(respond(200, json=[{"label": "LABEL_1", "score": 0.2},
                                          {"label": "LABEL_0", "score": 0.7}]))

    assert await client.classify_sentiment("Shares slump") == "LABEL_0"


@pytest.mark.asyncio
async def test_classifier_picks_highest_score_in_nested_list():
    client = hf_client(respond(200, json=[[{"label": "negative", "score": 0.1},
                                           {"label": "positive", "score": 0.8},
                                           {"label": "neutral", "score": 0.1}]]))

    assert await client.classify_sentiment("Shares soar") == "positive"


@pytest.mark.asyncio
@pytest.mark.parametrize("transport", [
    respond(503, json={"error": "Model is loading", "estimated_time": 20.0}),
    respond(200, json={"error": "unexpected"}),
    respond(200, json=[]),
])
async def test_classifier_failures_return_none(transport):
    assert await hf_client(transport).classify_sentiment("text") is None


@pytest.mark.asyncio
async def test_classifier_network_error_returns_none():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert await hf_client(httpx.MockTransport(handler)).classify_sentiment("text") is None


@pytest.mark.asyncio
async def test_summarizer_reads_summary_text():
    client = hf_client(respond(200, json=[{"summary_text": "Markets rallied."}]))

    assert await client.summarize("Article 1: ...") == "Markets rallied."


@pytest.mark.asyncio
async def test_summarizer_missing_field_returns_empty():
    client = hf_client(respond(200, json=[{"generated_text": "??"}]))

    assert await client.summarize("Article 1: ...") == ""


@pytest.mark.asyncio
async def test_news_error_body_counts_as_no_articles():
    client = NewsClient(
        Settings(news_api_key="bad-key"),
        transport=respond(401, json={"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid"})
    )

    assert await client.fetch_articles("AAPL") == []


@pytest.mark.asyncio
async def test_news_omits_unset_date_range():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"status": "ok", "articles": []})

    client = NewsClient(Settings(news_api_key="key"), transport=httpx.MockTransport(handler))
    await client.fetch_articles("AAPL")

    assert "from" not in seen[0].url.params
    assert "to" not in seen[0].url.params


@pytest.mark.asyncio
async def test_ollama_health_check_finds_model():
    client = OllamaClient(
        Settings(ollama_model="llama3"),
        transport=respond(200, json={"models": [{"name": "llama3:latest"}, {"name": "mistral:7b"}]})
    )

    assert await client.health_check() is True


@pytest.mark.asyncio
async def test_ollama_health_check_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = OllamaClient(Settings(), transport=httpx.MockTransport(handler))

    assert await client.health_check() is False


@pytest.mark.asyncio
async def test_classifier_tie_prefers_later_label():
    client = hf_client(respond(200, json=[[{"label": "LABEL_0", "score": 0.5},
                                           {"label": "LABEL_2", "score": 0.5}]]))

    assert await client.classify_sentiment("Flat day") == "LABEL_2"
