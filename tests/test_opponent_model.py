import pytest

from opponent_model import (
    DEFAULT_ALPHA,
    DEFAULT_ESTIMATE,
    SkillModel,
    normalize_score,
    select_index,
    target_score,
)


def test_normalize_positive_and_negative():
    assert normalize_score(10, 10, -5) == 1.0
    assert normalize_score(5, 10, -5) == 0.5
    assert normalize_score(0, 10, -5) == 0.0
    assert normalize_score(-5, 10, -5) == -1.0
    assert normalize_score(-1, 10, -4) == -0.25


def test_normalize_without_positive_moves():
    assert normalize_score(0, 0, -3) == 1.0
    assert normalize_score(-3, 0, -3) == -1.0


@pytest.mark.parametrize("scores", [
    [9, 4, 0, -2, -8],
    [0, 0, -1],
    [-1, -2, -6],
    [3, 3, 3],
    [5],
])
def test_normalized_scores_stay_in_range(scores):
    for s in scores:
        assert -1.0 <= normalize_score(s, scores[0], scores[-1]) <= 1.0


def test_update_moves_toward_observation():
    model = SkillModel()
    assert model.alpha == DEFAULT_ALPHA
    assert model.estimate == DEFAULT_ESTIMATE
    new = model.update(1.0)
    assert new == pytest.approx(0.5 + 0.4 * 0.5)
    assert 0.5 < new <= 1.0

    lower = model.update(-1.0)
    assert -1.0 <= lower < new


@pytest.mark.parametrize("alpha", [0.1, 0.4, 0.9, 1.0])
@pytest.mark.parametrize("observed", [-1.0, -0.3, 0.2, 0.8, 1.0])
def test_update_is_monotone(alpha, observed):
    model = SkillModel(alpha=alpha, estimate=0.5)
    before = model.estimate
    after = model.update(observed)
    if observed > before:
        assert before < after <= observed
    elif observed < before:
        assert observed <= after < before
    else:
        assert after == before


def test_repeated_best_moves_converge_to_one():
    model = SkillModel(alpha=0.4)
    for _ in range(20):
        model.update(1.0)
    assert model.estimate == pytest.approx(1.0, abs=1e-4)


def test_observe_returns_old_observed_new():
    model = SkillModel()
    old, observed, new = model.observe(4, [8, 4, -2])
    assert old == 0.5
    assert observed == 0.5
    assert new == pytest.approx(0.5)


def test_alpha_is_validated():
    model = SkillModel()
    model.alpha = 0.75
    assert model.alpha == 0.75
    with pytest.raises(ValueError):
        model.alpha = 1.5
    with pytest.raises(ValueError):
        SkillModel(alpha=-0.1)


def test_reset_restores_initial_estimate():
    model = SkillModel(estimate=0.2)
    model.update(1.0)
    model.reset()
    assert model.estimate == 0.2


def test_target_projects_back_onto_raw_scores():
    assert target_score(1.0, 10, -4) == 10
    assert target_score(0.5, 10, -4) == 5
    assert target_score(0.25, 10, -4) == 3  # ceil(2.5)
    assert target_score(-1.0, 10, -4) == 4
    assert target_score(-0.5, 10, -4) == 2
    assert target_score(-0.25, 10, -3) == 0  # floor(0.75)


def test_select_exact_match():
    scores = [10, 6, 5, 2, -4]
    assert select_index(scores, 0.5) == 2
    assert select_index(scores, 1.0) == 0
    # target floor(-1 * -4) = 4 falls between 5 and 2
    assert select_index(scores, -1.0) == 3


def test_select_prefers_lower_neighbor():
    scores = [10, 6, 2, -4]
    # target 5 falls between 6 and 2
    assert select_index(scores, 0.5) == 2


def test_select_negative_estimate_projects_through_min_score():
    scores = [10, 6, 2, -4]
    # floor(-0.5 * -4) = 2 is on offer
    assert select_index(scores, -0.5) == 2
    assert SkillModel(estimate=-0.5).choose(scores) == 2
    # floor(-1.0 * -4) = 4 falls between 6 and 2
    assert select_index(scores, -1.0) == 2


def test_select_clamps_to_last_move():
    scores = [10, 6, 2]
    assert select_index(scores, -1.0) == 2
    assert select_index(scores, 0.0) == 2


def test_select_on_all_negative_scores_still_picks_a_move():
    scores = [-1, -3, -5]
    idx = select_index(scores, 0.5)
    assert 0 <= idx < len(scores)
    assert SkillModel(estimate=0.5).choose(scores) == idx


def test_select_first_of_equal_scores():
    assert select_index([4, 4, 4, 1], 1.0) == 0


def test_select_on_empty_list_raises():
    with pytest.raises(ValueError):
        select_index([], 0.5)
