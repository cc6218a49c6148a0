"""Unit tests for the aggregate queries.

Expected values follow the sample catalogs described in conftest.
"""

from datetime import date

import polars as pl
import pytest

from streamcat.etl.analytics import (
    DivisivePolicy,
    divergence_by_year,
    divergence_rows,
    divisive_titles,
    family_share,
    score_by_type,
)


def _make_unified(**columns: list) -> pl.DataFrame:
    data = {
        "service": ["netflix"],
        "title": ["A"],
        "type": ["0"],
        "year": [2010],
        "age": ["all"],
        "imdb": ["5.0/10"],
        "rotten_tomatoes": ["50/100"],
        "genres": [None],
    }
    data.update(columns)
    return pl.DataFrame(data, schema_overrides={"genres": pl.String, "year": pl.Int64})


# =============================================================================
# FAMILY SHARE
# =============================================================================


class TestFamilyShare:
    @staticmethod
    def test_per_service(unified: pl.DataFrame) -> None:
        result = family_share(unified)
        assert result["service"].to_list() == ["amazon", "hulu", "netflix", "disney"]
        assert result["total_titles"].to_list() == [3, 2, 2, 1]
        assert result["family_titles"].to_list() == [1, 0, 1, 1]
        assert result["family_pct"].to_list() == pytest.approx([100 / 3, 0.0, 50.0, 100.0])

    @staticmethod
    def test_pct_bounds(unified: pl.DataFrame) -> None:
        pct = family_share(unified)["family_pct"]
        assert pct.min() >= 0
        assert pct.max() <= 100

    @staticmethod
    def test_adult_animation_not_family() -> None:
        df = _make_unified(genres=["Adult Animation"])
        assert family_share(df)["family_titles"].to_list() == [0]

    @staticmethod
    def test_custom_keywords(unified: pl.DataFrame) -> None:
        result = family_share(unified, keywords=["animation"])
        assert result["family_titles"].to_list() == [0, 1, 1, 0]

    @staticmethod
    def test_null_genre_counts_in_denominator() -> None:
        df = _make_unified(
            service=["hulu", "hulu"],
            title=["A", "B"],
            type=["0", "0"],
            year=[2010, 2010],
            age=["all", "all"],
            imdb=["5/10", "5/10"],
            rotten_tomatoes=["5/100", "5/100"],
            genres=["Kids", None],
        )
        assert family_share(df)["family_pct"].to_list() == [50.0]


# =============================================================================
# SCORE BY TYPE
# =============================================================================


class TestScoreByType:
    @staticmethod
    def test_groups(unified: pl.DataFrame) -> None:
        result = score_by_type(unified)
        assert result.select("service", "content_type").rows() == [
            ("amazon", "movie"),
            ("amazon", "tv"),
            ("hulu", "movie"),
            ("hulu", "tv"),
            ("netflix", "movie"),
            ("netflix", "tv"),
            ("disney", "movie"),
        ]

    @staticmethod
    def test_means(unified: pl.DataFrame) -> None:
        result = score_by_type(unified)
        assert result["avg_rt_score"].to_list() == [85.0, None, 50.0, 70.0, 40.0, 60.0, 90.0]
        assert result["scored_titles"].to_list() == [2, 0, 1, 1, 1, 1, 1]

    @staticmethod
    def test_missing_scores_excluded_not_zero() -> None:
        df = _make_unified(
            service=["hulu"] * 3,
            title=["A", "B", "C"],
            type=["0"] * 3,
            year=[2010] * 3,
            age=["all"] * 3,
            imdb=["5/10"] * 3,
            rotten_tomatoes=["80/100", "N/A", None],
            genres=[None] * 3,
        )
        result = score_by_type(df)
        assert result["avg_rt_score"].to_list() == [80.0]

    @staticmethod
    def test_unknown_type_skipped() -> None:
        df = _make_unified(type=["documentary"])
        assert len(score_by_type(df)) == 0


# =============================================================================
# DIVERGENCE
# =============================================================================


class TestDivergenceRows:
    @staticmethod
    def test_eligible_rows(unified: pl.DataFrame) -> None:
        rows = divergence_rows(unified)
        assert rows.select("service", "title").rows() == [
            ("amazon", "Movie A"),
            ("hulu", "Movie A"),
            ("netflix", "Family Fun"),
            ("netflix", "Drama X"),
            ("disney", "Family Fun"),
        ]
        assert rows["difference"].to_list() == pytest.approx([5.0, 10.0, 10.0, 30.0, 20.0])

    @staticmethod
    def test_difference_non_negative(unified: pl.DataFrame) -> None:
        assert divergence_rows(unified, min_year=0)["difference"].min() >= 0

    @staticmethod
    def test_year_before_cutoff_excluded() -> None:
        df = _make_unified(year=[1995])
        assert len(divergence_rows(df)) == 0

    @staticmethod
    def test_cutoff_inclusive() -> None:
        df = _make_unified(year=[2000])
        assert len(divergence_rows(df)) == 1

    @staticmethod
    def test_null_year_excluded() -> None:
        df = _make_unified(year=[None])
        assert len(divergence_rows(df)) == 0

    @staticmethod
    @pytest.mark.parametrize(("imdb", "rt"), [(None, "50/100"), ("N/A", "50/100"), ("5/10", "")])
    def test_unusable_scores_excluded(imdb: str | None, rt: str) -> None:
        df = _make_unified(imdb=[imdb], rotten_tomatoes=[rt])
        assert len(divergence_rows(df)) == 0


class TestDivergenceByYear:
    @staticmethod
    def test_by_year(unified: pl.DataFrame) -> None:
        result = divergence_by_year(unified)
        assert result["year"].to_list() == [2005, 2012, 2018]
        assert result["avg_difference"].to_list() == pytest.approx([7.5, 15.0, 30.0])
        assert result["titles"].to_list() == [2, 2, 1]

    @staticmethod
    def test_year_date(unified: pl.DataFrame) -> None:
        result = divergence_by_year(unified)
        assert result["year_date"].to_list()[0] == date(2005, 1, 1)

    @staticmethod
    def test_min_year_parameter(unified: pl.DataFrame) -> None:
        assert divergence_by_year(unified, min_year=2010)["year"].to_list() == [2012, 2018]

    @staticmethod
    def test_worked_example() -> None:
        df = _make_unified(
            service=["amazon", "hulu"],
            title=["A", "B"],
            type=["0", "0"],
            year=[2005, 2005],
            age=["all", "all"],
            imdb=["7.5/10", "6.0/10"],
            rotten_tomatoes=["80/100", "50/100"],
            genres=[None, None],
        )
        result = divergence_by_year(df)
        assert result.select("year", "avg_difference").rows() == [(2005, pytest.approx(7.5))]


# =============================================================================
# DIVISIVE TITLES
# =============================================================================


class TestDivisiveTitles:
    @staticmethod
    def test_ordering(unified: pl.DataFrame) -> None:
        result = divisive_titles(unified)
        assert result["title"].to_list() == ["Drama X", "Family Fun", "Movie A"]
        assert result["avg_difference"].to_list() == pytest.approx([30.0, 15.0, 7.5])
        assert result["titles"].to_list() == [1, 2, 2]

    @staticmethod
    def test_default_rank_equals_mean(unified: pl.DataFrame) -> None:
        result = divisive_titles(unified)
        assert result["ranking_score"].to_list() == result["avg_difference"].to_list()

    @staticmethod
    def test_title_groups_across_services(unified: pl.DataFrame) -> None:
        result = divisive_titles(unified)
        assert result["title"].n_unique() == len(result)

    @staticmethod
    def test_ties_ordered_by_title() -> None:
        df = _make_unified(
            service=["amazon", "hulu"],
            title=["Zeta", "Alpha"],
            type=["0", "0"],
            year=[2010, 2010],
            age=["all", "all"],
            imdb=["5/10", "5/10"],
            rotten_tomatoes=["40/100", "40/100"],
            genres=[None, None],
        )
        assert divisive_titles(df)["title"].to_list() == ["Alpha", "Zeta"]

    @staticmethod
    def test_min_count(unified: pl.DataFrame) -> None:
        result = divisive_titles(unified, policy=DivisivePolicy(min_count=2))
        assert result["title"].to_list() == ["Family Fun", "Movie A"]

    @staticmethod
    def test_prior_weight_shrinks(unified: pl.DataFrame) -> None:
        result = divisive_titles(unified, policy=DivisivePolicy(prior_weight=2.0))
        scores = dict(zip(result["title"].to_list(), result["ranking_score"].to_list(), strict=True))
        assert scores["Drama X"] == pytest.approx(20.0)
        assert scores["Family Fun"] == pytest.approx(15.0)
        assert scores["Movie A"] == pytest.approx(11.25)

    @staticmethod
    def test_top_n(unified: pl.DataFrame) -> None:
        result = divisive_titles(unified, policy=DivisivePolicy(top_n=1))
        assert result["title"].to_list() == ["Drama X"]

    @staticmethod
    def test_empty_when_nothing_eligible(unified: pl.DataFrame) -> None:
        assert len(divisive_titles(unified, min_year=2100)) == 0


class TestDivisivePolicy:
    @staticmethod
    @pytest.mark.parametrize(
        "kwargs",
        [{"min_count": 0}, {"prior_weight": -0.5}, {"top_n": 0}],
    )
    def test_invalid(kwargs: dict) -> None:
        with pytest.raises(ValueError):
            DivisivePolicy(**kwargs)
