"""
Read-only access to the hosted questions table (Supabase REST)
"""
import logging
from typing import List

import requests
from pydantic import ValidationError

from .config import StoreConfig
from .errors import ConfigurationError, EmptyResultError, FetchError
from .question import Question

logger = logging.getLogger(__name__)


class QuestionStore:
    """Fetches the full exam from the questions table in one request"""

    def __init__(self, config: StoreConfig, http=None):
        if not config.base_url or not config.api_key:
            raise ConfigurationError("Question store needs both an endpoint and an API key")
        self.config = config
        self.session = http or requests.Session()
        self.session.headers.update({
            'apikey': config.api_key,
            'Authorization': f'Bearer {config.api_key}',
            'Content-Type': 'application/json',
        })

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url}/rest/v1/{self.config.table}"

    def fetch_questions(self) -> List[Question]:
        """
        Fetch up to `limit` questions, in table order.

        Raises FetchError when the store is unreachable or refuses the request,
        EmptyResultError when it answers with no usable rows.
        """
        params = {'select': '*', 'limit': self.config.limit}
        try:
            response = self.session.get(self.endpoint, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.error(f"Question fetch failed: {e}")
            raise FetchError(str(e) or 'Terjadi kesalahan jaringan') from e

        if not response.ok:
            logger.error(f"Question fetch returned HTTP {response.status_code}")
            raise FetchError(f"Gagal koneksi: {response.status_code}")

        try:
            rows = response.json()
        except ValueError as e:
            raise FetchError(f"Respons server bukan JSON yang valid: {e}") from e

        if not isinstance(rows, list):
            raise FetchError("Respons server tidak berisi daftar soal")

        questions = []
        for row in rows[:self.config.limit]:
            try:
                questions.append(Question.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid question row: {e.errors()}")

        if not questions:
            raise EmptyResultError("Belum ada soal di database Supabase.")

        logger.info(f"Fetched {len(questions)} questions from {self.endpoint}")
        return questions
