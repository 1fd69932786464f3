# LLM Desk Application
# A FastAPI service that turns notes into flashcards and quizzes with a local
# Ollama model, and summarizes stock news sentiment with hosted models

__version__ = "1.0.0"
__description__ = "Flashcards, quizzes and stock news sentiment summaries"
