from typing import Dict, Any, Optional
import structlog
from llmdesk.utils.ollama_client import OllamaClient, ollama_client
from llmdesk.utils.json_extract import extract_json, JSONExtractionError
from llmdesk.models import Flashcard, QuizQuestion, MissingFieldError

logger = structlog.get_logger()


FLASHCARDS_PROMPT = """Create flashcards from the following notes. Generate 5-8 flashcards in JSON format with the following structure:
{{
  "flashcards": [
    {{ "front": "Question or term", "back": "Answer or definition" }}
  ]
}}
Focus on key concepts, definitions, and important facts. Make questions clear and answers concise.

Notes: {notes}"""

QUIZ_PROMPT = """Create a quiz from the following text. Generate 4-6 multiple choice questions in JSON format with the following structure:
{{
  "quiz": [
    {{
      "question": "Question text here?",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correct": 0,
      "explanation": "Why this answer is correct"
    }}
  ]
}}

Make questions challenging but fair, with plausible distractors for incorrect options.

Text: {text}"""


class StudyGenerator:
    """Turns notes into flashcards and free text into multiple choice quizzes"""

    def __init__(self, client: OllamaClient = ollama_client):
        self.client = client

    async def generate_flashcards(self, notes: Optional[str]) -> Dict[str, Any]:
        if not notes:
            raise MissingFieldError("Notes are required")

        raw_response = await self.client.generate_completion(FLASHCARDS_PROMPT.format(notes=notes))
        return self._structured_or_fallback(raw_response, "flashcards", self._fallback_flashcards)

    async def generate_quiz(self, text: Optional[str]) -> Dict[str, Any]:
        if not text:
            raise MissingFieldError("Text is required")

        raw_response = await self.client.generate_completion(QUIZ_PROMPT.format(text=text))
        return self._structured_or_fallback(raw_response, "quiz", self._fallback_quiz)

    def _structured_or_fallback(self, raw_response: str, key: str, fallback) -> Dict[str, Any]:
        """Return the model's JSON verbatim when it carries ``key``, else the fallback payload"""
        try:
            data = extract_json(raw_response)
        except JSONExtractionError as e:
            logger.warning("Could not parse model output as JSON", error=str(e), expected=key)
            return fallback(raw_response)

        if not isinstance(data.get(key), list):
            logger.warning("Model JSON is missing the expected field", expected=key, fields=list(data))
            return fallback(raw_response)

        return data

    @staticmethod
    def _fallback_flashcards(raw_response: str) -> Dict[str, Any]:
        card = Flashcard(front="Generated from your notes", back=raw_response or "No response")
        return {"flashcards": [card.model_dump()]}

    @staticmethod
    def _fallback_quiz(raw_response: str) -> Dict[str, Any]:
        question = QuizQuestion(
            question="What is the main topic of the provided text?",
            options=["Topic A", "Topic B", "Topic C", "Topic D"],
            correct=0,
            explanation=raw_response or "Generated from your text"
        )
        return {"quiz": [question.model_dump()]}


# Global study generator instance
study_generator = StudyGenerator()
