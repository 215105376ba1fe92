"""
Question records and option parsing
"""
import json
import logging
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .errors import MalformedOptionsError

logger = logging.getLogger(__name__)


class QuestionOptions(BaseModel):
    """Ordered option key -> text mapping; malformed when the source was unusable"""
    choices: Dict[str, str] = Field(default_factory=dict)
    malformed: bool = False

    def keys(self):
        return list(self.choices.keys())

    def __contains__(self, key):
        return key in self.choices

    def __len__(self):
        return len(self.choices)


def _decode_options(raw):
    """Turn a native or JSON-encoded options value into a plain dict."""
    value = raw
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8', errors='replace')

    if isinstance(value, str):
        if not value.strip():
            return {}
        try:
            value = json.loads(value)
        except ValueError as e:
            raise MalformedOptionsError(f"options is not valid JSON: {e}")

    if not isinstance(value, dict):
        raise MalformedOptionsError(
            f"options must be a mapping, got {type(value).__name__}"
        )

    choices = {}
    for key, text in value.items():
        if isinstance(text, (dict, list)):
            raise MalformedOptionsError(f"option {key!r} is not plain text")
        choices[str(key)] = '' if text is None else str(text)
    return choices


def parse_options(raw):
    """Parse an options field; never raises, returns a malformed marker instead."""
    if isinstance(raw, QuestionOptions):
        return raw
    if raw is None:
        return QuestionOptions()

    try:
        return QuestionOptions(choices=_decode_options(raw))
    except MalformedOptionsError as e:
        logger.warning(f"Malformed options replaced by empty set: {e}")
        return QuestionOptions(malformed=True)


class Question(BaseModel):
    """One row of the questions table"""
    id: Union[int, str]
    category: str = ''
    question_text: str = ''
    options: QuestionOptions = Field(default_factory=QuestionOptions)
    correct_answer: Optional[str] = None
    discussion: Optional[str] = None

    @field_validator('options', mode='before')
    @classmethod
    def _parse_options(cls, value):
        return parse_options(value)

    @field_validator('category', 'question_text', mode='before')
    @classmethod
    def _text_or_empty(cls, value):
        return '' if value is None else str(value)

    @field_validator('correct_answer', mode='before')
    @classmethod
    def _answer_key(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def answerable(self):
        return len(self.options) > 0

    def is_correct(self, option_key):
        """Unanswered or unknown keys are simply incorrect."""
        return option_key is not None and option_key == self.correct_answer
