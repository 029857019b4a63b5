from collections import Counter

import pytest

from buttercat_othello.game.board import Color, PieceType
from buttercat_othello.game.hand import (
    Hand,
    IllegalSelectionError,
    PieceSource,
    SupplySlot,
    owner_of,
    slot_ids_for,
)

N, B, C, X = PieceType.NORMAL, PieceType.BUTTER, PieceType.CAT, PieceType.BUTTERCAT


def test_slot_ids_per_color():
    assert list(slot_ids_for(Color.BLACK)) == [0, 1, 2, 3]
    assert list(slot_ids_for(Color.WHITE)) == [4, 5, 6, 7]
    assert owner_of(5) is Color.WHITE
    with pytest.raises(IllegalSelectionError):
        owner_of(8)


def test_select_returns_new_hand():
    hand = Hand.of(Color.BLACK, [N, B, C, X])
    selected = hand.select(2)
    assert selected.selected_slot().piece_type is C
    assert not hand.has_selection()
    assert selected.deselect() == hand


def test_select_rejects_foreign_and_used_slots():
    hand = Hand.of(Color.WHITE, [N, N, N, N])
    with pytest.raises(IllegalSelectionError):
        hand.select(0)

    used = Hand(
        color=Color.BLACK,
        slots=(
            SupplySlot(0, Color.BLACK, N, is_used=True),
            SupplySlot(1, Color.BLACK, N),
            SupplySlot(2, Color.BLACK, N),
            SupplySlot(3, Color.BLACK, N),
        ),
    )
    with pytest.raises(IllegalSelectionError):
        used.select(0)
    assert len(used.available_slots()) == 3


def test_use_selected_refills_only_that_slot(scripted):
    source = scripted(X)
    hand = Hand.of(Color.BLACK, [N, B, C, N]).select(1)
    after = hand.use_selected(source)
    assert after.piece_types() == (N, X, C, N)
    assert not after.has_selection()
    assert all(not slot.is_used for slot in after.slots)
    assert source.drawn == [X]


def test_use_selected_requires_a_selection(scripted):
    with pytest.raises(IllegalSelectionError):
        Hand.of(Color.BLACK, [N, N, N, N]).use_selected(scripted())


def test_has_type_and_initial(scripted):
    hand = Hand.initial(Color.WHITE, scripted(B, C))
    assert hand.piece_types() == (B, C, N, N)
    assert hand.has_type([N])
    assert not hand.has_type([X])


def test_seeded_source_follows_draw_odds():
    source = PieceSource.seeded(1234)
    counts = Counter(source.draw() for _ in range(5000))
    assert set(counts) == {N, B, C, X}
    assert 0.65 < counts[N] / 5000 < 0.75
    for special in (B, C, X):
        assert 0.07 < counts[special] / 5000 < 0.13


def test_seeded_sources_repeat():
    first, again = PieceSource.seeded(7), PieceSource.seeded(7)
    assert [first.draw() for _ in range(20)] == [again.draw() for _ in range(20)]
