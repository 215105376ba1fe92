from cops_praja.core.session_registry import ExamSessionRegistry
from tests.conftest import DummyStore, FakeClock, make_questions


def make_registry(clock, **kwargs):
    store = DummyStore(make_questions(['A', 'B']))
    kwargs.setdefault('idle_grace', 600)
    return ExamSessionRegistry(store, duration=5400, points=5, clock=clock, **kwargs)


def test_idle_sessions_are_dropped():
    clock = FakeClock()
    registry = make_registry(clock)
    registry.dispatch('old')
    clock.advance(3000)
    registry.dispatch('recent')

    clock.advance(5400 + 600 - 3000 + 1)
    registry.dispatch('new')

    assert 'old' not in registry
    assert 'recent' in registry
    assert len(registry) == 2


def test_active_session_is_kept_while_touched():
    clock = FakeClock()
    registry = make_registry(clock)
    registry.dispatch('s1', 'select_answer', 'A')
    for _ in range(10):
        clock.advance(1000)
        registry.dispatch('s1')
        registry.dispatch(registry.new_session_id())

    snapshot, _ = registry.dispatch('s1')
    assert snapshot['answered_count'] == 1
    assert 's1' in registry


def test_capacity_drops_least_recently_used():
    clock = FakeClock()
    registry = make_registry(clock, max_sessions=3)
    for session_id in ('a', 'b', 'c'):
        registry.dispatch(session_id)
        clock.advance(1)
    registry.dispatch('a')
    registry.dispatch('d')

    assert len(registry) == 3
    assert 'b' not in registry
    assert all(s in registry for s in ('a', 'c', 'd'))


def test_reset_does_not_grow_registry():
    registry = make_registry(FakeClock())
    registry.dispatch('s1')
    for _ in range(20):
        registry.dispatch('s1', 'finish')
        registry.reset('s1')

    assert len(registry) == 1
    assert registry.question_store.calls == 21
