import pytest

from cops_praja.core.config import Config
from cops_praja.core.question import Question


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class DummyStore:
    def __init__(self, questions=None, error=None):
        self.questions = questions or []
        self.error = error
        self.calls = 0

    def fetch_questions(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.questions)


def make_questions(keys, discussion=True):
    return [
        Question(
            id=i + 1,
            category='TWK',
            question_text=f'Soal nomor {i + 1}',
            options={'A': 'Pilihan A', 'B': 'Pilihan B', 'C': 'Pilihan C', 'D': 'Pilihan D'},
            correct_answer=key,
            discussion=f'Jawaban yang benar adalah {key}' if discussion else None,
        )
        for i, key in enumerate(keys)
    ]


class SampleConfig(Config):
    SECRET_KEY = 'test-secret'
    DEBUG = True
    SUPABASE_URL = 'https://example.supabase.co'
    SUPABASE_ANON_KEY = 'anon-key'
    REVIEW_ENABLED = True


@pytest.fixture()
def clock():
    return FakeClock(1000.0)


@pytest.fixture()
def store():
    return DummyStore(make_questions(['A', 'B', 'A', 'C']))


@pytest.fixture()
def app_client(store, clock):
    from app import create_app

    app = create_app(SampleConfig)
    app.config['TESTING'] = True
    app.exam_registry.question_store = store
    app.exam_registry.clock = clock
    return app, app.test_client()
