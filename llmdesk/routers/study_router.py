from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, Any
import structlog
from llmdesk.models import FlashcardsRequest, QuizRequest, MissingFieldError
from llmdesk.agents.study_generator import StudyGenerator, study_generator

logger = structlog.get_logger()
router = APIRouter(tags=["Study Generator"])


def get_study_generator() -> StudyGenerator:
    return study_generator


@router.post("/flashcards")
async def create_flashcards(
    request: FlashcardsRequest,
    generator: StudyGenerator = Depends(get_study_generator)
) -> Dict[str, Any]:
    """
    Generate flashcards from study notes

    Returns the model's `flashcards` list as-is, or a single card holding
    the raw model output when it could not be parsed.
    """
    try:
        result = await generator.generate_flashcards(request.notes)
        logger.info("Flashcards generated", cards=len(result.get("flashcards", [])))
        return result

    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Flashcards generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/quiz")
async def create_quiz(
    request: QuizRequest,
    generator: StudyGenerator = Depends(get_study_generator)
) -> Dict[str, Any]:
    """Generate a multiple choice quiz from free text"""
    try:
        result = await generator.generate_quiz(request.text)
        logger.info("Quiz generated", questions=len(result.get("quiz", [])))
        return result

    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Quiz generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
