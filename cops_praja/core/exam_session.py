"""
Exam session state machine: timer, answers, scoring and review
"""
import enum
import logging
import time

from .errors import EmptyResultError, FetchError

logger = logging.getLogger(__name__)

EXAM_DURATION_SECONDS = 90 * 60
POINTS_PER_CORRECT = 5


class ExamState(enum.Enum):
    LOADING = 'loading'
    ACTIVE = 'active'
    EMPTY = 'empty'
    FINISHED = 'finished'
    REVIEWING = 'reviewing'


TRANSITIONS = {
    ExamState.LOADING: {ExamState.ACTIVE, ExamState.EMPTY},
    ExamState.ACTIVE: {ExamState.FINISHED},
    ExamState.FINISHED: {ExamState.REVIEWING},
    ExamState.EMPTY: set(),
    ExamState.REVIEWING: set(),
}


class InvalidTransition(Exception):
    pass


def compute_score(questions, answers, points=POINTS_PER_CORRECT):
    """points x number of questions whose recorded answer matches the key"""
    correct_count = sum(1 for q in questions if q.is_correct(answers.get(q.id)))
    return correct_count * points


def format_time(seconds):
    """Render seconds as HH:MM:SS"""
    seconds = max(0, int(seconds))
    h, rest = divmod(seconds, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


class ExamSession:
    """
    One run through the fetched question list.

    All mutation goes through the methods below; callers serialize access
    (see ExamSessionRegistry). Time is folded in with sync(), which applies
    one tick per whole second elapsed on the injected monotonic clock.
    """

    def __init__(self, duration=EXAM_DURATION_SECONDS, points=POINTS_PER_CORRECT,
                 review_enabled=True, clock=time.monotonic):
        self.duration = duration
        self.points = points
        self.review_enabled = review_enabled
        self.clock = clock

        self.state = ExamState.LOADING
        self.questions = ()
        self.position = 0
        self.answers = {}
        self.remaining = duration
        self.score = None
        self.error_message = None
        self._last_tick_at = None

    # --- state helpers -------------------------------------------------

    def _transition(self, target):
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {target.value}")
        logger.debug(f"Exam state {self.state.value} -> {target.value}")
        self.state = target

    @property
    def is_active(self):
        return self.state is ExamState.ACTIVE

    @property
    def is_finished(self):
        return self.state in (ExamState.FINISHED, ExamState.REVIEWING)

    @property
    def is_reviewing(self):
        return self.state is ExamState.REVIEWING

    @property
    def current_question(self):
        if not self.questions:
            return None
        return self.questions[self.position]

    # --- operations ----------------------------------------------------

    def load(self, store):
        """Fetch the question list once and enter Active or Empty."""
        if self.state is not ExamState.LOADING:
            return

        try:
            questions = store.fetch_questions()
        except FetchError as e:
            logger.error(f"Exam load failed: {e}")
            self.error_message = str(e)
            self._transition(ExamState.EMPTY)
            return
        except EmptyResultError as e:
            logger.info(f"Exam load returned no questions: {e}")
            self._transition(ExamState.EMPTY)
            return

        self.questions = tuple(questions)
        if not self.questions:
            self._transition(ExamState.EMPTY)
            return

        self.position = 0
        self.answers = {}
        self.remaining = self.duration
        self._last_tick_at = self.clock()
        self._transition(ExamState.ACTIVE)
        logger.info(f"Exam started with {len(self.questions)} questions")

    def tick(self):
        if not self.is_active:
            return
        if self.remaining - 1 <= 0:
            self.remaining = 0
            self.finish()
        else:
            self.remaining -= 1

    def sync(self, now=None):
        """Apply the ticks owed since the last applied tick."""
        if not self.is_active:
            return
        now = self.clock() if now is None else now
        elapsed = int(now - self._last_tick_at)
        if elapsed <= 0:
            return
        self._last_tick_at += elapsed
        for _ in range(min(elapsed, self.remaining)):
            self.tick()
            if not self.is_active:
                break

    def select_answer(self, option_key):
        if not self.is_active:
            return
        question = self.current_question
        if option_key not in question.options:
            return
        self.answers[question.id] = option_key

    def navigate(self, delta):
        if not self.questions:
            return
        self.position = min(max(self.position + delta, 0), len(self.questions) - 1)

    def finish(self):
        """Score the exam once; later calls return the same score."""
        if not self.is_active:
            return self.score
        self.score = compute_score(self.questions, self.answers, self.points)
        self._transition(ExamState.FINISHED)
        logger.info(f"Exam finished: score={self.score} remaining={self.remaining}s")
        return self.score

    def start_review(self):
        if self.state is not ExamState.FINISHED or not self.review_enabled:
            return False
        self._transition(ExamState.REVIEWING)
        self.position = 0
        return True

    # --- rendering -----------------------------------------------------

    def option_views(self, question=None):
        question = question or self.current_question
        if question is None:
            return []
        recorded = self.answers.get(question.id)
        reviewing = self.is_reviewing
        views = []
        for key, text in question.options.choices.items():
            selected = recorded == key
            correct = reviewing and key == question.correct_answer
            views.append({
                'key': key,
                'text': text,
                'selected': selected,
                'correct': correct,
                'incorrect': reviewing and selected and not correct,
            })
        return views

    def question_view(self):
        question = self.current_question
        if question is None:
            return None
        return {
            'id': question.id,
            'category': question.category,
            'text': question.question_text,
            'answered': question.id in self.answers,
            'options_malformed': question.options.malformed,
            'options': self.option_views(question),
            'discussion': question.discussion if self.is_reviewing else None,
        }

    def snapshot(self):
        """JSON-ready view of the session"""
        total = len(self.questions)
        return {
            'state': self.state.value,
            'error': self.error_message,
            'total': total,
            'position': self.position,
            'progress_percent': round((self.position + 1) / total * 100, 1) if total else 0,
            'answered_count': len(self.answers),
            'remaining_seconds': self.remaining,
            'time_left_display': format_time(self.remaining),
            'score': self.score,
            'max_score': total * self.points,
            'review_enabled': self.review_enabled,
            'question': self.question_view(),
        }
