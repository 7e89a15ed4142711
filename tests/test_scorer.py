"""
Tests for similarity and track scoring.
"""
import numpy as np
import pytest

from moodwave.data.schemas import SoundFeatureVector
from moodwave.recommendation.scorer import JUSTIFICATION_TEMPLATES, TrackScorer
from moodwave.recommendation.similarity import SimilarityCalculator


@pytest.fixture
def target():
    return SoundFeatureVector(
        acousticness=0.1, danceability=0.8, energy=0.85, instrumentalness=0.05,
        liveness=0.2, loudness=-5.0, speechiness=0.1, tempo=135.0, valence=0.85
    )


class TestSimilarityCalculator:

    def test_identical_vectors(self, target):
        calculator = SimilarityCalculator()
        assert calculator.similarity(target.to_array(), target.to_array()) == pytest.approx(1.0)

    def test_opposite_corners(self):
        low = np.array([0.0, 0.0, 0.0, 0.0, 0.0, -60.0, 0.0, 40.0, 0.0])
        high = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 0.0, 1.0, 200.0, 1.0])
        assert SimilarityCalculator().similarity(low, high) == pytest.approx(0.0)

    def test_scaling_keeps_tempo_from_dominating(self, target):
        calculator = SimilarityCalculator()
        faster = SoundFeatureVector(**{**target.to_dict(), "tempo": 150.0})
        sadder = SoundFeatureVector(**{**target.to_dict(), "valence": 0.1})
        scores = calculator.compute_batch_similarity(
            target.to_array(), np.array([faster.to_array(), sadder.to_array()])
        )
        assert scores[0] > scores[1]

    def test_cosine_metric_is_bounded(self, target):
        calculator = SimilarityCalculator('cosine')
        candidates = np.array([target.to_array(), SoundFeatureVector.neutral().to_array()])
        scores = calculator.compute_batch_similarity(target.to_array(), candidates)
        assert scores[0] == pytest.approx(1.0)
        assert 0.0 <= scores[1] <= 1.0

    def test_rank_is_stable_for_ties(self, target):
        candidates = np.array([target.to_array()] * 3)
        ranked = SimilarityCalculator().rank_by_similarity(target.to_array(), candidates)
        assert [index for index, _ in ranked] == [0, 1, 2]

    def test_invalid_input(self, target):
        calculator = SimilarityCalculator()
        with pytest.raises(ValueError):
            calculator.compute_batch_similarity(target.to_array(), target.to_array())
        with pytest.raises(ValueError):
            SimilarityCalculator('manhattan')
        assert calculator.compute_batch_similarity(target.to_array(), np.empty((0, 9))).size == 0


class TestTrackScorer:

    def test_perfect_match_without_popularity(self, make_track, target):
        track = make_track("a", popularity=0, features=target)
        scored = TrackScorer().score(track, target, "joy")
        assert scored.match_score == pytest.approx(0.8)
        assert scored.features == target

    def test_popularity_term(self, make_track, target):
        track = make_track("a", popularity=100, features=target)
        assert TrackScorer().score(track, target, "joy").match_score == pytest.approx(1.0)

    def test_closer_tracks_score_higher(self, make_track, target):
        close = make_track("close", popularity=50, features=target, energy=0.8)
        far = make_track("far", popularity=50, features=target, energy=0.1, valence=0.1)
        scored = TrackScorer().score_all([far, close], target, "joy")
        assert [s.track.id for s in scored] == ["far", "close"]
        assert scored[1].match_score > scored[0].match_score

    def test_missing_features_use_neutral_estimate(self, make_track, target):
        track = make_track("bare")
        scored = TrackScorer().score(track, target, "joy")
        assert track.features is None
        assert scored.features == SoundFeatureVector.neutral()
        assert 0.0 <= scored.match_score <= 1.0

    def test_scores_are_reproducible(self, make_track, target):
        tracks = [make_track(str(i), popularity=i * 10, features=target, energy=i / 10) for i in range(10)]
        first = TrackScorer().score_all(tracks, target, "trust")
        second = TrackScorer().score_all(tracks, target, "trust")
        assert first == second

    def test_justification_comes_from_templates(self, make_track, target):
        expected = {template.format(emotion="sadness") for template in JUSTIFICATION_TEMPLATES}
        for i in range(20):
            scored = TrackScorer().score(make_track(f"t{i}", features=target), target, "sadness")
            assert scored.justification in expected

    def test_empty_pool(self, target):
        assert TrackScorer().score_all([], target, "joy") == []

    def test_combine_bounds(self):
        scorer = TrackScorer(popularity_weight=0.5)
        assert scorer.combine(1.0, 250) == 1.0
        assert scorer.combine(0.0, -5) == 0.0
        assert scorer.combine(0.5, 50) == pytest.approx(0.5)

    def test_invalid_popularity_weight(self):
        with pytest.raises(ValueError):
            TrackScorer(popularity_weight=1.5)
