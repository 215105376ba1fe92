"""
In-memory exam sessions, one per browser session
"""
import logging
import threading
import time
import uuid
from collections import OrderedDict

from .exam_session import ExamSession

logger = logging.getLogger(__name__)

IDLE_GRACE_SECONDS = 30 * 60
MAX_SESSIONS = 1000


class ExamSessionRegistry:
    """
    Holds exam sessions in memory and serializes every change to them.

    dispatch() is the only way in: it takes the session's lock, catches the
    timer up, and then runs the requested operation.

    Sessions untouched for longer than the exam duration plus a grace period
    are dropped, and the least recently used one goes once max_sessions is
    reached.
    """

    ACTIONS = ('snapshot', 'select_answer', 'navigate', 'finish', 'start_review')

    def __init__(self, question_store, duration, points, review_enabled=True, clock=time.monotonic,
                 idle_grace=IDLE_GRACE_SECONDS, max_sessions=MAX_SESSIONS):
        self.question_store = question_store
        self.duration = duration
        self.points = points
        self.review_enabled = review_enabled
        self.clock = clock
        self.idle_grace = idle_grace
        self.max_sessions = max_sessions
        # session_id -> (exam, lock, last_seen), oldest first
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, session_id):
        return session_id in self._sessions

    @property
    def idle_timeout(self):
        return self.duration + self.idle_grace

    def _new_session(self):
        return ExamSession(
            duration=self.duration,
            points=self.points,
            review_enabled=self.review_enabled,
            clock=self.clock,
        )

    def _evict(self, now):
        """Drop idle sessions, then the oldest ones above max_sessions. Caller holds _lock."""
        expired = 0
        while self._sessions:
            session_id, (_, _, last_seen) = next(iter(self._sessions.items()))
            if now - last_seen <= self.idle_timeout:
                break
            del self._sessions[session_id]
            expired += 1

        evicted = 0
        while self._sessions and len(self._sessions) >= self.max_sessions:
            self._sessions.popitem(last=False)
            evicted += 1

        if expired or evicted:
            logger.info(f"Dropped exam sessions: idle={expired} over_capacity={evicted} live={len(self._sessions)}")

    def _get_or_create(self, session_id):
        now = self.clock()
        with self._lock:
            entry = self._sessions.pop(session_id, None)
            self._evict(now)
            if entry is None:
                exam, lock = self._new_session(), threading.Lock()
            else:
                exam, lock, _ = entry
            self._sessions[session_id] = (exam, lock, now)
            return exam, lock

    def new_session_id(self):
        return str(uuid.uuid4())

    def dispatch(self, session_id, action='snapshot', *args):
        """Run one operation on a session and return its snapshot."""
        if action not in self.ACTIONS:
            raise ValueError(f"Unknown exam action: {action}")

        exam, lock = self._get_or_create(session_id)
        with lock:
            exam.load(self.question_store)
            exam.sync()
            result = None
            if action != 'snapshot':
                result = getattr(exam, action)(*args)
            snapshot = exam.snapshot()
        return snapshot, result

    def reset(self, session_id):
        """Drop the session and load a fresh one in its place."""
        with self._lock:
            self._sessions.pop(session_id, None)
        logger.info(f"Exam session reset: {session_id}")
        return self.dispatch(session_id)[0]
