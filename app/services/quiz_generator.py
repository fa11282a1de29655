"""
LLM quiz generator.
Asks the OpenAI chat API for a mixed MCQ / True-False / Fill-in-the-Blank quiz
or for study aids on a free-form topic, and falls back to fixed content when no
key is configured or the model reply cannot be used.
"""
import re
import json
from typing import List, Dict, Any, Optional
from openai import OpenAI
from app.core.config import settings
from app.core.logging_config import logger
from app.models.schemas import GeneratedQuestion, GeneratedQuiz, StudyAids
from app.utils.exceptions import QuizGenerationError


CODE_FENCE = re.compile(r'```(?:json)?\n?')

STUDY_AID_LISTS = ("memory_techniques", "study_tips", "quick_facts")


def clean_json_response(response: str) -> str:
    """
    Reduce an LLM reply to its JSON payload.

    Strips markdown code fences, then cuts everything before the first
    '[' or '{' and after the last ']' or '}'.
    """
    cleaned = CODE_FENCE.sub('', response)

    starts = [position for position in (cleaned.find('['), cleaned.find('{')) if position >= 0]
    if starts:
        cleaned = cleaned[min(starts):]

    end = max(cleaned.rfind(']'), cleaned.rfind('}'))
    if end >= 0:
        cleaned = cleaned[:end + 1]

    return cleaned.strip()


def validate_questions(raw_questions: Any) -> List[GeneratedQuestion]:
    """
    Normalise parsed LLM output into GeneratedQuestions.

    Raises:
        QuizGenerationError: If the payload is not a non-empty list
    """
    if not isinstance(raw_questions, list) or not raw_questions:
        raise QuizGenerationError("LLM returned no questions")

    questions = []
    for item in raw_questions:
        if not isinstance(item, dict):
            continue
        options = item.get("options") if isinstance(item.get("options"), list) else ["Option A", "Option B"]
        options = [str(option) for option in options]
        answer = item.get("answer") or (options[0] if options else "Answer not available")
        points = item.get("points")
        questions.append(GeneratedQuestion(
            type=item.get("type") or "MCQ",
            question=item.get("question") or "Sample question?",
            options=options,
            answer=str(answer),
            explanation=item.get("explanation") or "Explanation not available",
            points=points if isinstance(points, int) and not isinstance(points, bool) else 10
        ))

    if not questions:
        raise QuizGenerationError("LLM returned no usable questions")
    return questions


def fallback_quiz_questions(topic: str) -> List[GeneratedQuestion]:
    """Fixed quiz used when the LLM is unavailable."""
    return [
        GeneratedQuestion(
            type="MCQ",
            question=f"What is the most important concept in {topic}?",
            options=[
                "Understanding the fundamentals",
                "Memorizing all details",
                "Speed reading through content",
                "Skipping difficult parts"
            ],
            answer="Understanding the fundamentals",
            explanation="Building a strong foundation is crucial for mastering any topic.",
            points=10
        ),
        GeneratedQuestion(
            type="True-False",
            question=f"{topic} requires both theoretical knowledge and practical application.",
            options=["True", "False"],
            answer="True",
            explanation="Most subjects benefit from combining theory with practice.",
            points=5
        ),
        GeneratedQuestion(
            type="Fill-in-the-Blank",
            question=f"The key to mastering {topic} is consistent _______.",
            options=[],
            answer="practice",
            explanation="Regular practice helps reinforce learning and build expertise.",
            points=8
        ),
    ]


def validate_study_aids(raw_aids: Any, topic: str, difficulty: str) -> StudyAids:
    """
    Normalise parsed LLM output into StudyAids.

    Raises:
        QuizGenerationError: If the payload is not an object with at least one aid
    """
    if not isinstance(raw_aids, dict):
        raise QuizGenerationError("LLM returned no study aids")

    lists = {}
    for key in STUDY_AID_LISTS:
        items = raw_aids.get(key)
        lists[key] = [str(item) for item in items if item] if isinstance(items, list) else []

    if not any(lists.values()):
        raise QuizGenerationError("LLM returned empty study aids")

    motivation = raw_aids.get("motivation")
    return StudyAids(
        topic=topic,
        difficulty=difficulty,
        source="llm",
        motivation=str(motivation) if motivation else "",
        **lists
    )


def fallback_study_aids(topic: str, difficulty: str) -> StudyAids:
    """Fixed study aids used when the LLM is unavailable."""
    return StudyAids(
        topic=topic,
        difficulty=difficulty,
        source="fallback",
        memory_techniques=[
            f"Create visual associations for {topic} concepts",
            "Use the acronym method to remember key points",
            "Connect new information to what you already know"
        ],
        study_tips=[
            f"Break {topic} into smaller, manageable chunks",
            "Practice active recall instead of passive reading",
            "Teach the concept to someone else to test understanding"
        ],
        quick_facts=[
            f"{topic} is fundamental to understanding the subject",
            "Regular review helps with long-term retention",
            "Practical application reinforces theoretical knowledge"
        ],
        motivation=f"Mastering {topic} will give you a strong foundation for advanced concepts!"
    )


class QuizGenerator:
    """Generates practice quizzes with the OpenAI chat API."""

    def __init__(self, client: Optional[Any] = None):
        if client is None and settings.openai_api_key:
            client = OpenAI(
                api_key=settings.openai_api_key,
                organization=settings.openai_org_id
            )
        self.client = client

    def _build_prompt(self, topic: str, question_count: int, difficulty: str) -> str:
        return f"""Generate {question_count} practice questions for the topic: "{topic}"
Difficulty level: {difficulty}

Include:
- Multiple Choice Questions with exactly 4 options
- One True/False question
- One Fill-in-the-blank question

Return ONLY a valid JSON array:
[
    {{
        "type": "MCQ|True-False|Fill-in-the-Blank",
        "question": "Question text",
        "options": ["Option A", "Option B", "Option C", "Option D"],
        "answer": "Correct option text",
        "explanation": "Why this is correct",
        "points": 10
    }}
]"""

    def _build_study_aids_prompt(self, topic: str, difficulty: str) -> str:
        return f"""Generate study hints and memory aids for: "{topic}"
Difficulty level: {difficulty}

Return ONLY a valid JSON object:
{{
    "memory_techniques": ["Mnemonic or visual association"],
    "study_tips": ["Concrete way to study this topic"],
    "quick_facts": ["Short fact worth remembering"],
    "motivation": "One encouraging sentence"
}}"""

    def _request_json(self, system_prompt: str, user_prompt: str, max_tokens: int) -> Any:
        """
        Call the model and parse its reply as JSON.

        Raises:
            QuizGenerationError: If the call fails or the reply is not JSON
        """
        try:
            response = self.client.chat.completions.create(
                model=settings.openai_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                temperature=settings.openai_temperature,
                max_tokens=max_tokens
            )
            raw_response = response.choices[0].message.content or ""
        except Exception as e:
            raise QuizGenerationError(f"LLM request failed: {e}") from e

        try:
            return json.loads(clean_json_response(raw_response))
        except json.JSONDecodeError as e:
            raise QuizGenerationError(f"Failed to parse LLM reply: {e}") from e

    def _request_questions(self, topic: str, question_count: int, difficulty: str) -> List[GeneratedQuestion]:
        parsed = self._request_json(
            "You are an expert quiz creator. Generate educational questions. Return only valid JSON.",
            self._build_prompt(topic, question_count, difficulty),
            settings.openai_max_tokens
        )
        return validate_questions(parsed)

    def generate(self, topic: str, question_count: Optional[int] = None, difficulty: str = "Medium") -> GeneratedQuiz:
        """
        Generate a quiz for a topic.

        Args:
            topic: Free-form topic name
            question_count: Number of questions to ask the model for
            difficulty: Difficulty label passed to the model

        Returns:
            GeneratedQuiz with source 'llm', or 'fallback' when the model was not usable
        """
        count = question_count or settings.quiz_question_count

        if self.client is None:
            logger.info(f"[QuizGenerator] No OpenAI key configured, using fallback quiz for '{topic}'")
            return GeneratedQuiz(topic=topic, difficulty=difficulty, source="fallback",
                                 questions=fallback_quiz_questions(topic))

        try:
            logger.info(f"[QuizGenerator] Generating {count} questions for '{topic}' ({difficulty})")
            questions = self._request_questions(topic, count, difficulty)
            logger.info(f"[QuizGenerator] ✅ Generated {len(questions)} questions")
            return GeneratedQuiz(topic=topic, difficulty=difficulty, source="llm", questions=questions)
        except QuizGenerationError as e:
            logger.error(f"[QuizGenerator] ❌ {e}, using fallback quiz")
            return GeneratedQuiz(topic=topic, difficulty=difficulty, source="fallback",
                                 questions=fallback_quiz_questions(topic))

    def generate_study_aids(self, topic: str, difficulty: str = "Medium") -> StudyAids:
        """
        Generate memory techniques, study tips and quick facts for a topic.

        Returns:
            StudyAids with source 'llm', or the fixed 'fallback' set when the model was not usable
        """
        if self.client is None:
            logger.info(f"[QuizGenerator] No OpenAI key configured, using fallback study aids for '{topic}'")
            return fallback_study_aids(topic, difficulty)

        try:
            logger.info(f"[QuizGenerator] Generating study aids for '{topic}' ({difficulty})")
            parsed = self._request_json(
                "You are a study coach expert. Create helpful learning aids. Return only valid JSON.",
                self._build_study_aids_prompt(topic, difficulty),
                settings.study_aids_max_tokens
            )
            return validate_study_aids(parsed, topic, difficulty)
        except QuizGenerationError as e:
            logger.error(f"[QuizGenerator] ❌ {e}, using fallback study aids")
            return fallback_study_aids(topic, difficulty)

    def describe(self) -> Dict[str, Any]:
        """Configuration summary for the health endpoint."""
        return {
            "status": "configured" if self.client is not None else "fallback_only",
            "model": settings.openai_model
        }


# Global generator instance
quiz_generator = QuizGenerator()
