"""Tests for core.classifier — keyword priority and the label id table."""

from __future__ import annotations

import pytest

from dataset_sorter.core.classifier import (
    CLASS_INDEX,
    CLASS_PRIORITY,
    FORK,
    GUN,
    KNIFE,
    NO_INDEX,
    SCREWDRIVER,
    UNKNOWN,
    WRENCH,
    classify,
    classify_with_fallback,
    index_for_class,
    index_of,
)


# ── classify ──────────────────────────────────────────────────────


class TestClassify:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("images/gun/001.jpg", GUN),
            ("images/knife/001.jpg", KNIFE),
            ("images/wrench/001.jpg", WRENCH),
            ("images/fork/001.jpg", FORK),
            ("images/screwdriver/001.jpg", SCREWDRIVER),
        ],
    )
    def test_single_keyword(self, path: str, expected: str) -> None:
        assert classify(path) == expected

    def test_case_insensitive(self) -> None:
        assert classify("Images/KNIFE_Set/IMG_01.JPG") == KNIFE
        assert classify("xray\\Gun\\a.png") == GUN

    def test_no_keyword_is_unknown(self) -> None:
        assert classify("images/scissors/001.jpg") == UNKNOWN
        assert classify("") == UNKNOWN

    def test_priority_order(self) -> None:
        assert classify("knife/gun/x.jpg") == GUN
        assert classify("fork_and_knife.jpg") == KNIFE
        assert classify("screwdriver/wrench.jpg") == WRENCH
        assert classify("screwdriver_fork.jpg") == FORK

    def test_priority_table_order(self) -> None:
        assert [cls for _, cls in CLASS_PRIORITY] == [GUN, KNIFE, WRENCH, FORK, SCREWDRIVER]


# ── index_of ──────────────────────────────────────────────────────


class TestIndexOf:
    def test_fixed_mapping(self) -> None:
        assert CLASS_INDEX == {KNIFE: 0, FORK: 1, GUN: 2, WRENCH: 3, SCREWDRIVER: 4}

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("knife/a.xml", 0),
            ("fork/a.xml", 1),
            ("gun/a.xml", 2),
            ("wrench/a.xml", 3),
            ("screwdriver/a.xml", 4),
            ("misc/a.xml", -1),
        ],
    )
    def test_index_of(self, path: str, expected: int) -> None:
        assert index_of(path) == expected

    def test_index_follows_priority(self) -> None:
        # gun wins over knife, so the id is gun's even though knife is 0
        assert index_of("knife_gun.xml") == 2

    def test_unknown_class_has_no_index(self) -> None:
        assert index_for_class(UNKNOWN) == NO_INDEX


# ── two-stage fallback ────────────────────────────────────────────


class TestFallback:
    def test_own_path_wins(self) -> None:
        assert classify_with_fallback("annotations/fork/a.xml", r"C:\data\knife\a.jpg") == FORK

    def test_falls_back_to_recorded_path(self) -> None:
        assert classify_with_fallback("annotations/batch1/a.xml", r"C:\data\Knife\a.jpg") == KNIFE

    def test_both_unknown(self) -> None:
        assert classify_with_fallback("annotations/a.xml", "a.jpg") == UNKNOWN
