import pytest

from virtual_labs.domain.models import Badge
from virtual_labs.services.achievements import LabAchievementEvaluator


def _complete(attempts, participant_id, lab_id, score=80):
    attempts.initialize_attempt(participant_id, lab_id)
    attempts.complete_attempt(participant_id, lab_id, score)


@pytest.mark.asyncio
async def test_no_badges_without_completed_labs(evaluator, attempts):
    attempts.initialize_attempt("s1", "lab-a")
    assert await evaluator.trigger_check("s1") == []


@pytest.mark.asyncio
async def test_first_lab_earns_lab_assistant(evaluator, attempts, badges):
    _complete(attempts, "s1", "lab-a")

    new = await evaluator.trigger_check("s1")

    assert [b.id for b in new] == ["lab_assistant"]
    assert [b.badge_id for b in badges.get_badges("s1")] == ["lab_assistant"]


@pytest.mark.asyncio
async def test_badges_are_awarded_once(evaluator, attempts):
    _complete(attempts, "s1", "lab-a")
    await evaluator.trigger_check("s1")

    assert await evaluator.trigger_check("s1") == []


@pytest.mark.asyncio
async def test_repeated_lab_counts_once(evaluator, attempts):
    for _ in range(3):
        _complete(attempts, "s1", "lab-a")

    new = await evaluator.trigger_check("s1")
    assert [b.id for b in new] == ["lab_assistant"]


@pytest.mark.asyncio
async def test_three_distinct_labs_earn_lab_researcher(evaluator, attempts):
    for lab_id in ("lab-a", "lab-b", "lab-c"):
        _complete(attempts, "s1", lab_id)

    new = await evaluator.trigger_check("s1")
    assert [b.id for b in new] == ["lab_assistant", "lab_researcher"]


@pytest.mark.asyncio
async def test_failed_score_still_counts_as_completed(evaluator, attempts):
    _complete(attempts, "s1", "lab-a", score=10)
    assert [b.id for b in await evaluator.trigger_check("s1")] == ["lab_assistant"]


@pytest.mark.asyncio
async def test_custom_badge_set(attempts, badges):
    custom = [Badge(id="two_labs", name="Two", description="", category="lab", xp_value=10, labs_required=2)]
    evaluator = LabAchievementEvaluator(attempts, badges, badges=custom)
    _complete(attempts, "s1", "lab-a")
    _complete(attempts, "s1", "lab-b")

    assert [b.id for b in await evaluator.trigger_check("s1")] == ["two_labs"]
