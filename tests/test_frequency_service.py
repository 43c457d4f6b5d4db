from __future__ import annotations

from datetime import date

from lottogen.games import GAMES
from lottogen.services.frequency_service import (
    build_exclusion_set,
    count_draw_occurrences,
    count_occurrences,
    draws_to_table_text,
    get_bottom_n,
    get_top_n,
    summarize,
)
from lottogen.services.history_service import HistoricalDraw

HEADER = "PRODUCT,DRAW NUMBER,SEQUENCE NUMBER,DRAW DATE,NUMBER DRAWN 1,NUMBER DRAWN 2,NUMBER DRAWN 3,BONUS NUMBER"


def _draws(*sets: list[int]) -> list[HistoricalDraw]:
    return [HistoricalDraw(date=date(2024, 1, i + 1), numbers=tuple(s), sequence_id=i + 1) for i, s in enumerate(sets)]


def test_scenario_five_draws():
    draws = _draws(
        [1, 2, 3, 4, 5, 6],
        [7, 8, 9, 10, 11, 12],
        [1, 2, 3, 13, 14, 15],
        [1, 2, 16, 17, 18, 19],
        [20, 21, 22, 23, 24, 25],
    )
    counts = count_occurrences(draws_to_table_text(draws))

    assert counts[1] == 3
    assert counts[2] == 3
    assert counts[3] == 2
    assert count_draw_occurrences(draws) == counts


def test_empty_input_gives_empty_table():
    assert count_occurrences("") == {}
    assert count_occurrences("\n\n") == {}


def test_header_row_is_not_counted():
    text = "PRODUCT,DRAW NUMBER,SEQUENCE NUMBER,DRAW DATE,11,12,13\n649,1,0,2024-01-01,1,2,3"
    assert count_occurrences(text) == {1: 1, 2: 1, 3: 1}


def test_header_only_gives_empty_table():
    assert count_occurrences(HEADER) == {}


def test_zero_and_blank_tokens_are_ignored():
    text = f"{HEADER}\n649,1,0,2024-01-01,0,,0,0\n649,2,0,2024-01-08,,0,,"
    assert count_occurrences(text) == {}


def test_non_numeric_tokens_are_skipped():
    text = f"{HEADER}\n649,1,0,2024-01-01,7,x,N/A,0"
    assert count_occurrences(text) == {7: 1}


def test_metadata_columns_are_skipped():
    # draw number 9 and sequence 9 sit in metadata columns
    text = f"{HEADER}\n649,9,9,2024-01-01,1,2,3,4"
    assert count_occurrences(text) == {1: 1, 2: 1, 3: 1}


def test_bonus_column_optional():
    text = f"{HEADER}\n649,1,0,2024-01-01,1,2,3,4"
    assert 4 not in count_occurrences(text)
    assert count_occurrences(text, include_bonus=True)[4] == 1


def test_wrapped_header_is_stripped():
    text = (
        "PRODUCT,DRAW NUMBER,SEQUENCE NUMBER,DRAW DATE,NUMBER DRAWN 1\n"
        ",NUMBER DRAWN 2,BONUS NUMBER\n"
        "649,1,0,2024-01-01,8,9,10\n"
    )
    assert count_occurrences(text) == {8: 1, 9: 1}


def test_totals_match_token_count_minus_blanks():
    draws = _draws([1, 2, 3, 4, 5, 6], [1, 2, 3], [7, 8, 9, 10, 11, 12])
    text = draws_to_table_text(draws)
    # 3 draws x 6 columns, minus the 3 padded blanks of the short draw
    assert sum(count_occurrences(text).values()) == 3 * 6 - 3


def test_top_and_bottom_boundaries():
    table = {1: 5, 2: 3, 3: 9, 4: 1}

    assert get_top_n(table, 0) == []
    assert get_bottom_n(table, 0) == []
    assert set(get_top_n(table, 10)) == set(table)
    assert set(get_bottom_n(table, 10)) == set(table)
    assert get_top_n(table, 2) == [3, 1]
    assert get_bottom_n(table, 2) == [2, 4]


def test_equal_counts_ordered_by_number():
    table = {9: 2, 4: 2, 7: 2}
    assert get_top_n(table, 3) == [4, 7, 9]


def test_exclusion_set_union_within_range():
    game = GAMES["sixFourtyNine"]
    table = {1: 10, 2: 9, 3: 1, 4: 2, 5: 5}

    excluded = build_exclusion_set(table, game, exclude_top=1, exclude_bottom=1, manual=[20, 99])

    assert excluded == [1, 3, 20]


def test_draws_to_table_text_layout():
    draws = [
        HistoricalDraw(date=date(2024, 1, 1), numbers=(1, 2, 3, 4, 5, 6)),
        HistoricalDraw(date=date(2024, 6, 15), numbers=(10, 20, 30, 40, 41, 42, 43), sequence_id=77),
    ]
    lines = draws_to_table_text(draws).split("\n")

    assert len(lines) == 3
    assert "NUMBER DRAWN 7" in lines[0]
    assert lines[1] == "649,1,0,2024-01-01,1,2,3,4,5,6,,0"
    assert lines[2] == "649,77,0,2024-06-15,10,20,30,40,41,42,43,0"
    assert draws_to_table_text([]) == ""


def test_summarize_hot_and_cold():
    draws = _draws([1, 2, 3], [1, 2, 4], [1, 5, 6])
    summary = summarize(draws, top=2)

    assert summary.draws_used == 3
    assert summary.hot_numbers == [1, 2]
    assert summary.cold_numbers == [6, 5]


def test_bottom_ranks_only_drawn_numbers():
    table = count_draw_occurrences([[1, 2, 3, 4, 5, 6], [1, 2, 3, 4, 5, 7]])

    assert get_bottom_n(table, 2) == [6, 7]
    assert 49 not in build_exclusion_set(table, GAMES["sixFourtyNine"], exclude_bottom=2)
