"""
Gemini AI service for quiz question generation
"""
import google.generativeai as genai
from pydantic import ValidationError as SchemaError
from skillforge.config import settings
from skillforge.errors import GenerationFailed, ValidationError
from skillforge.schemas.course import Difficulty
from skillforge.schemas.quiz import Question, QuestionBody
from skillforge.services.store import new_id
from skillforge.utils.cache import CacheService, cache_service
import json
import logging
from typing import List, Dict, Any

logger = logging.getLogger(__name__)

# Configure Gemini API
genai.configure(api_key=settings.GEMINI_API_KEY)


class GeminiService:
    """Question generator backed by Gemini"""

    def __init__(self, cache: CacheService = None, model_name: str = None):
        self.model = genai.GenerativeModel(
            model_name or settings.GEMINI_MODEL,
            generation_config={"response_mime_type": "application/json"},
        )
        self.cache = cache or cache_service

    def generate_questions(self, topic: str, difficulty: Difficulty, count: int) -> List[Question]:
        """
        Generate quiz questions about a topic

        Args:
            topic: Subject the questions should cover
            difficulty: Beginner/Intermediate/Advanced
            count: Number of questions, 1..MAX_GENERATED_QUESTIONS

        Returns:
            Questions, each with a freshly assigned id

        Raises:
            ValidationError: count out of range or empty topic
            GenerationFailed: transport, JSON or schema error from the model
        """
        if not topic or not topic.strip():
            raise ValidationError("Topic is required")
        if not 1 <= count <= settings.MAX_GENERATED_QUESTIONS:
            raise ValidationError(
                f"Question count must be between 1 and {settings.MAX_GENERATED_QUESTIONS}"
            )

        difficulty = Difficulty(difficulty)
        cache_key = self.cache.questions_key(topic, difficulty.value, count)

        payload = self.cache.get(cache_key)
        if payload is None:
            payload = self._request(topic, difficulty, count)
            self.cache.set(cache_key, payload)

        # Ids are never cached: every call hands out new ones
        return [Question(id=new_id("gen-q"), **item) for item in payload]

    def _request(self, topic: str, difficulty: Difficulty, count: int) -> List[Dict[str, Any]]:
        """Call the model and return validated question bodies as plain dicts"""
        prompt = self._create_prompt(topic, difficulty, count)

        try:
            response = self.model.generate_content(prompt)
            text = response.text
        except Exception as e:
            logger.error(f"Gemini request failed: {str(e)}")
            raise GenerationFailed("Failed to generate quiz questions. Please check your API key and try again.")

        questions = self._parse_response(text)
        if len(questions) != count:
            logger.warning(f"Expected {count} questions, got {len(questions)}")
        return questions

    def _create_prompt(self, topic: str, difficulty: Difficulty, count: int) -> str:
        return f"""
Generate {count} quiz questions about "{topic}" for a learning platform.
The difficulty level should be "{difficulty.value}".
Include a mix of multiple-choice and short-answer questions. For multiple-choice, provide 4 options.

Return ONLY valid JSON in this exact format (no markdown, no preamble):

{{
  "questions": [
    {{
      "type": "multiple-choice",
      "question": "Question text here?",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correct_answer": "Option C",
      "points": 10
    }},
    {{
      "type": "short-answer",
      "question": "Question text here?",
      "correct_answer": "Expected answer",
      "points": 10
    }}
  ]
}}

The correct_answer of a multiple-choice question must be one of its options.
Omit "options" for short-answer questions.
"""

    def _parse_response(self, response_text: str) -> List[Dict[str, Any]]:
        """Parse the model output into question dicts or raise GenerationFailed"""
        cleaned = (response_text or "").strip()

        # Remove markdown code blocks
        if cleaned.startswith("```json"):
            cleaned = cleaned[7:-3].strip()
        elif cleaned.startswith("```"):
            cleaned = cleaned[3:-3].strip()

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse question JSON: {str(e)}")
            logger.error(f"Response text: {cleaned[:500]}")
            raise GenerationFailed("Question generator returned invalid JSON")

        items = data.get("questions") if isinstance(data, dict) else data
        if not isinstance(items, list) or not items:
            raise GenerationFailed("Question generator returned no questions")

        try:
            questions = [QuestionBody.model_validate(item) for item in items]
        except SchemaError as e:
            logger.error(f"Generated question failed validation: {str(e)}")
            raise GenerationFailed("Question generator returned malformed questions")

        return [q.model_dump(mode="json", exclude_none=True) for q in questions]


# Global instance
gemini_service = GeminiService()
