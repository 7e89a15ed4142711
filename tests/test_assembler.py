"""
Tests for playlist assembly.
"""
import random
from datetime import datetime, timezone

import pytest

from moodwave.data.schemas import EmotionProfile, ScoredTrack, SoundFeatureVector
from moodwave.errors import InvalidOptions
from moodwave.playlist.assembler import (
    COUPLE_SEPARATORS,
    EMOTION_ADJECTIVES,
    NAME_SUFFIXES,
    PlaylistAssembler,
    format_date,
    sentiment_polarity,
)
from moodwave.playlist.schemas import AssemblyOptions
from moodwave.recommendation.target import TargetProfileCalculator


FIXED_NOW = datetime(2024, 3, 7, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def assembler():
    return PlaylistAssembler(rng=random.Random(7), clock=lambda: FIXED_NOW)


@pytest.fixture
def options(joyful_profile):
    target = TargetProfileCalculator().compute_target(joyful_profile)

    def _options(length=10, **kwargs):
        return AssemblyOptions(length=length, mood_context=joyful_profile, target=target, **kwargs)
    return _options


@pytest.fixture
def scored(make_track):
    def _scored(count, explicit_every=0):
        items = []
        for i in range(count):
            explicit = bool(explicit_every) and i % explicit_every == 0
            features = SoundFeatureVector.neutral()
            track = make_track(f"t{i}", explicit=explicit, duration_ms=1000 * (i + 1), features=features)
            items.append(ScoredTrack(track, round(0.1 + 0.08 * i, 4), "Matches your joy mood perfectly", features))
        return items
    return _scored


class TestPlaylistAssembler:

    def test_short_pool_is_not_padded(self, assembler, options, scored):
        playlist = assembler.assemble(scored(3), options(length=10))
        assert len(playlist.tracks) == 3

    def test_truncates_to_length_by_score(self, assembler, options, scored):
        playlist = assembler.assemble(scored(10), options(length=4))
        assert [t.id for t in playlist.tracks] == ["t9", "t8", "t7", "t6"]
        scores = [t.mood_score for t in playlist.tracks]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.parametrize("count,length", [(0, 5), (5, 5), (12, 3), (7, 20)])
    def test_never_more_than_requested(self, assembler, options, scored, count, length):
        playlist = assembler.assemble(scored(count), options(length=length))
        assert len(playlist.tracks) == min(count, length)

    def test_equal_scores_keep_input_order(self, assembler, options, make_track):
        features = SoundFeatureVector.neutral()
        items = [ScoredTrack(make_track(f"t{i}", features=features), 0.5, "reason", features)
                 for i in range(5)]
        playlist = assembler.assemble(items, options(length=3))
        assert [t.id for t in playlist.tracks] == ["t0", "t1", "t2"]

    def test_exclude_explicit(self, assembler, options, scored):
        playlist = assembler.assemble(scored(12, explicit_every=2), options(length=12, exclude_explicit=True))
        assert len(playlist.tracks) == 6
        assert not any(t.explicit for t in playlist.tracks)

    def test_all_explicit_pool(self, assembler, options, scored):
        playlist = assembler.assemble(scored(4, explicit_every=1), options(exclude_explicit=True))
        assert playlist.tracks == ()
        assert playlist.description

    def test_empty_pool(self, assembler, options):
        playlist = assembler.assemble([], options())
        assert playlist.tracks == ()
        assert playlist.description
        assert playlist.total_duration_ms == 0
        assert playlist.feature_summary.avg_energy == 0.0
        assert playlist.name

    def test_totals_and_summary(self, assembler, options, make_track):
        loud = SoundFeatureVector(**{**SoundFeatureVector.neutral().to_dict(), "energy": 0.9, "tempo": 140.0})
        soft = SoundFeatureVector(**{**SoundFeatureVector.neutral().to_dict(), "energy": 0.3, "tempo": 80.0})
        items = [
            ScoredTrack(make_track("a", duration_ms=180000, features=loud), 0.9, "reason", loud),
            ScoredTrack(make_track("b", duration_ms=120000, features=soft), 0.8, "reason", soft),
        ]
        playlist = assembler.assemble(items, options())
        assert playlist.total_duration_ms == 300000
        assert playlist.feature_summary.avg_energy == pytest.approx(0.6)
        assert playlist.feature_summary.avg_tempo == pytest.approx(110.0)
        assert playlist.feature_summary.avg_valence == pytest.approx(0.5)

    def test_track_fields(self, assembler, options, scored):
        track = assembler.assemble(scored(1), options()).tracks[0]
        assert track.artist == "Artist One, Artist Two"
        assert track.reason_for_inclusion == "Matches your joy mood perfectly"
        assert track.album == "Album"

    def test_name_uses_vocabulary_time_and_date(self, assembler, options, scored):
        playlist = assembler.assemble(scored(2), options(time_of_day="evening"))
        assert playlist.name.startswith("Evening ")
        assert playlist.name.endswith(" - 3/7/2024")
        words = playlist.name.split(" - ")[0].split()
        assert words[1] in EMOTION_ADJECTIVES["joy"]
        assert words[2] in NAME_SUFFIXES
        assert playlist.created_at == FIXED_NOW

    def test_seeded_names_are_reproducible(self, options, scored):
        names = {
            PlaylistAssembler(rng=random.Random(42), clock=lambda: FIXED_NOW).assemble(scored(2), options()).name
            for _ in range(3)
        }
        assert len(names) == 1

    def test_description_mentions_count_emotion_and_sentiment(self, assembler, options, scored):
        playlist = assembler.assemble(scored(3), options())
        assert "3-track" in playlist.description
        assert "joy" in playlist.description
        assert "positive" in playlist.description

    def test_couple_naming(self, assembler, options, scored):
        playlist = assembler.assemble(scored(2), options(couple_names=("Ana", "Ben")))
        prefix = playlist.name.split("'s ")[0]
        assert prefix in {f"Ana {sep} Ben" for sep in COUPLE_SEPARATORS}
        assert "Joy Connection - 3/7/2024" in playlist.name
        assert "Ana and Ben" in playlist.description

    def test_negative_length_rejected(self, options):
        with pytest.raises(InvalidOptions):
            options(length=-1)


class TestHelpers:

    def test_format_date(self):
        assert format_date(datetime(2024, 12, 1)) == "12/1/2024"

    @pytest.mark.parametrize("sentiment,expected", [(0.5, "positive"), (-0.5, "reflective"), (0.0, "balanced")])
    def test_sentiment_polarity(self, sentiment, expected):
        assert sentiment_polarity(EmotionProfile({}, sentiment=sentiment)) == expected
