import pytest

from quizcore.events import RoundCompleted
from quizcore.rounds import IMPROVEMENT_EPSILON


def test_passing_round_completing_level_unlocks_next(ctx, recorder):
    recorder.listen(RoundCompleted)
    level = ctx.catalog.get_level("general", 1)
    # Two answered in an earlier round, eight now
    for q in level.questions[:2]:
        ctx.tracker.mark_correct("general", q.id)
    before = ctx.tracker.get_category_percent("general")
    for q in level.questions[2:]:
        ctx.tracker.mark_correct("general", q.id)

    outcome = ctx.evaluator.evaluate("general", 1, correct_this_round=8, unlock_threshold=8, percent_before=before, round_size=10)

    assert outcome.success
    assert outcome.level_now_complete
    assert outcome.just_unlocked
    assert ctx.tracker.get_unlocked_level_count("general") == 2
    assert outcome.improved
    assert outcome.percent_after == pytest.approx(10 / 24 * 100)
    assert recorder.of(RoundCompleted)[0].outcome == outcome


def test_failing_round_never_unlocks(ctx):
    for q in ctx.catalog.get_level("general", 1).questions:
        ctx.tracker.mark_correct("general", q.id)

    outcome = ctx.evaluator.evaluate("general", 1, correct_this_round=7, unlock_threshold=8, percent_before=0.0)

    assert not outcome.success
    assert outcome.level_now_complete
    assert not outcome.just_unlocked
    assert ctx.tracker.get_unlocked_level_count("general") == 1


def test_success_without_completion(ctx):
    for q in ctx.catalog.get_level("general", 1).questions[:8]:
        ctx.tracker.mark_correct("general", q.id)

    outcome = ctx.evaluator.evaluate("general", 1, correct_this_round=8, unlock_threshold=8, percent_before=0.0)

    assert outcome.success
    assert not outcome.level_now_complete
    assert not outcome.just_unlocked


def test_improvement_ignores_float_noise(ctx):
    ctx.tracker.mark_correct("general", "g1-1")
    now = ctx.tracker.get_category_percent("general")

    same = ctx.evaluator.evaluate("general", 1, 1, 8, percent_before=now - IMPROVEMENT_EPSILON / 2)
    assert not same.improved
    better = ctx.evaluator.evaluate("general", 1, 1, 8, percent_before=now - 1.0)
    assert better.improved


def test_last_level_completion_caps_watermark(ctx):
    ctx.tracker.force_unlock_up_to("general", 3)
    for q in ctx.catalog.get_level("general", 3).questions:
        ctx.tracker.mark_correct("general", q.id)

    outcome = ctx.evaluator.evaluate("general", 3, correct_this_round=4, unlock_threshold=4, percent_before=0.0)

    assert outcome.level_now_complete
    assert not outcome.just_unlocked
    assert ctx.tracker.get_unlocked_level_count("general") == 3
