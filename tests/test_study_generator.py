import json
import httpx
import pytest
from llmdesk.agents.study_generator import StudyGenerator
from llmdesk.models import MissingFieldError
from llmdesk.utils.config import Settings
from llmdesk.utils.ollama_client import OllamaClient


def make_generator(model_text=None, status_code=200, calls=None):
    """Build a generator whose Ollama backend answers with ``model_text``"""
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if status_code != 200:
            return httpx.Response(status_code, text="model not found")
        return httpx.Response(200, json={"model": "llama3", "response": model_text, "done": True})

    client = OllamaClient(Settings(ollama_base_url="http://ollama.test"), transport=httpx.MockTransport(handler))
    return StudyGenerator(client)


@pytest.mark.asyncio
async def test_flashcards_from_wellformed_output():
    cards = {"flashcards": [{"front": "Mitochondria", "back": "Powerhouse of the cell"}]}
    calls = []
    generator = make_generator("Here you go:\n" + json.dumps(cards), calls=calls)

    result = await generator.generate_flashcards("Mitochondria produce ATP.")

    assert result == cards
    assert len(calls) == 1
    body = json.loads(calls[0].content)
    assert calls[0].url == "http://ollama.test/api/generate"
    assert body["model"] == "llama3"
    assert body["stream"] is False
    assert "Notes: Mitochondria produce ATP." in body["prompt"]


@pytest.mark.asyncio
async def test_flashcards_fallback_embeds_raw_output():
    generator = make_generator("Mitochondria: powerhouse of the cell")

    result = await generator.generate_flashcards("Mitochondria produce ATP.")

    assert result == {"flashcards": [{"front": "Generated from your notes",
                                      "back": "Mitochondria: powerhouse of the cell"}]}


@pytest.mark.asyncio
async def test_flashcards_fallback_on_empty_response():
    generator = make_generator("")

    result = await generator.generate_flashcards("Some notes")

    assert result["flashcards"][0]["back"] == "No response"


@pytest.mark.asyncio
async def test_flashcards_fallback_when_expected_key_missing():
    generator = make_generator('{"cards": [{"q": "A"}]}')

    result = await generator.generate_flashcards("Some notes")

    assert result["flashcards"][0]["front"] == "Generated from your notes"
    assert result["flashcards"][0]["back"] == '{"cards": [{"q": "A"}]}'


@pytest.mark.asyncio
async def test_quiz_from_wellformed_output():
    quiz = {"quiz": [{"question": "2+2?", "options": ["1", "2", "3", "4"], "correct": 3, "explanation": "Sum"}]}
    calls = []
    generator = make_generator(json.dumps(quiz), calls=calls)

    result = await generator.generate_quiz("Basic arithmetic")

    assert result == quiz
    assert "Text: Basic arithmetic" in json.loads(calls[0].content)["prompt"]


@pytest.mark.asyncio
async def test_quiz_fallback_embeds_raw_output():
    generator = make_generator("Sorry, I cannot do that.")

    result = await generator.generate_quiz("Basic arithmetic")

    question = result["quiz"][0]
    assert len(result["quiz"]) == 1
    assert question["question"] == "What is the main topic of the provided text?"
    assert question["options"] == ["Topic A", "Topic B", "Topic C", "Topic D"]
    assert question["correct"] == 0
    assert question["explanation"] == "Sorry, I cannot do that."


@pytest.mark.asyncio
@pytest.mark.parametrize("notes", [None, ""])
async def test_missing_notes_makes_no_call(notes):
    calls = []
    generator = make_generator("{}", calls=calls)

    with pytest.raises(MissingFieldError, match="Notes are required"):
        await generator.generate_flashcards(notes)

    assert calls == []


@pytest.mark.asyncio
async def test_missing_text_makes_no_call():
    calls = []
    generator = make_generator("{}", calls=calls)

    with pytest.raises(MissingFieldError, match="Text is required"):
        await generator.generate_quiz(None)

    assert calls == []


@pytest.mark.asyncio
async def test_upstream_error_propagates():
    generator = make_generator(status_code=404)

    with pytest.raises(Exception, match="Ollama error 404"):
        await generator.generate_flashcards("Some notes")


@pytest.mark.asyncio
async def test_whitespace_notes_are_forwarded():
    calls = []
    generator = make_generator("no json here", calls=calls)

    result = await generator.generate_flashcards("   ")

    assert len(calls) == 1
    assert result["flashcards"][0]["back"] == "no json here"
