"""Unit tests for row classification expressions."""

import polars as pl
import pytest

from streamcat.etl.transform import MOVIE, TV, content_type_expr, family_expr, service_rank_expr


def _flags(genres: list[str | None], keywords: tuple[str, ...] = ("kids", "family", "children")) -> list[bool]:
    df = pl.DataFrame({"genres": genres}, schema={"genres": pl.String})
    return df.select(family_expr(keywords).alias("f"))["f"].to_list()


class TestFamilyExpr:
    @staticmethod
    def test_substring_match() -> None:
        assert _flags(["Sci-Fi, Kids TV", "Comedy, Family", "Children's Music"]) == [True, True, True]

    @staticmethod
    def test_no_match() -> None:
        assert _flags(["Adult Animation", "Drama"]) == [False, False]

    @staticmethod
    def test_case_insensitive() -> None:
        assert _flags(["FAMILY-friendly"]) == [True]

    @staticmethod
    def test_null_is_not_family() -> None:
        assert _flags([None]) == [False]

    @staticmethod
    def test_custom_keywords() -> None:
        assert _flags(["Animation", "Kids"], keywords=("animation",)) == [True, False]

    @staticmethod
    def test_no_keywords() -> None:
        assert _flags(["Kids"], keywords=()) == [False]

    @staticmethod
    def test_keyword_with_regex_chars() -> None:
        assert _flags(["Kids (3+)"], keywords=("(3+)",)) == [True]


class TestContentTypeExpr:
    @staticmethod
    @pytest.mark.parametrize(
        ("flag", "expected"),
        [
            ("0", "movie"),
            ("1", "tv"),
            ("1.0", "tv"),
            (" Movie ", "movie"),
            ("TV Show", "tv"),
            ("2", None),
            (None, None),
        ],
    )
    def test_mapping(flag: str | None, expected: str | None) -> None:
        df = pl.DataFrame({"type": [flag]}, schema={"type": pl.String})
        assert df.select(content_type_expr().alias("t"))["t"][0] == expected


class TestServiceRankExpr:
    @staticmethod
    def test_fixed_order() -> None:
        df = pl.DataFrame({"service": ["disney", "amazon", "netflix", "hulu", "other"]})
        ranks = df.select(service_rank_expr().alias("r"))["r"].to_list()
        assert ranks == [3, 0, 2, 1, 4]


class TestContentTypeLabels:
    @staticmethod
    def test_labels_match_expression_output() -> None:
        df = pl.DataFrame({"type": ["0", "1"]})
        assert df.select(content_type_expr().alias("t"))["t"].to_list() == [MOVIE, TV]
