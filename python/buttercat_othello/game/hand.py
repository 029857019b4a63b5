"""Per-player piece supply ("hand") and the randomness that refills it."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Protocol, Sequence, Tuple

from .board import Color, PieceType


SLOTS_PER_HAND = 4

# Replenishment odds: 70% normal, 10% for each special piece.
DRAW_WEIGHTS: Tuple[Tuple[PieceType, int], ...] = (
    (PieceType.NORMAL, 70),
    (PieceType.BUTTER, 10),
    (PieceType.CAT, 10),
    (PieceType.BUTTERCAT, 10),
)


class IllegalSelectionError(ValueError):
    """Raised when selecting or using a slot the hand cannot give out."""


class Drawer(Protocol):
    def draw(self) -> PieceType: ...


class PieceSource:
    """Draws replacement piece types using an injectable random generator."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self._types = [piece_type for piece_type, _ in DRAW_WEIGHTS]
        self._weights = [weight for _, weight in DRAW_WEIGHTS]

    @classmethod
    def seeded(cls, seed: int) -> "PieceSource":
        return cls(random.Random(seed))

    def draw(self) -> PieceType:
        return self.rng.choices(self._types, weights=self._weights, k=1)[0]


def slot_ids_for(color: Color) -> range:
    # Black owns ids 0-3, white owns 4-7
    base = 0 if color is Color.BLACK else SLOTS_PER_HAND
    return range(base, base + SLOTS_PER_HAND)


def owner_of(slot_id: int) -> Color:
    for color in (Color.BLACK, Color.WHITE):
        if slot_id in slot_ids_for(color):
            return color
    raise IllegalSelectionError(f"Unknown slot id: {slot_id}")


@dataclass(frozen=True)
class SupplySlot:
    id: int
    color: Color
    piece_type: PieceType
    is_used: bool = False


@dataclass(frozen=True)
class Hand:
    """Immutable hand of four slots. Every operation returns a new hand."""

    color: Color
    slots: Tuple[SupplySlot, ...]
    selected_slot_id: Optional[int] = None

    def __post_init__(self) -> None:
        expected = list(slot_ids_for(self.color))
        if [slot.id for slot in self.slots] != expected:
            raise ValueError(f"{self.color.value} hand must hold slots {expected}")
        if any(slot.color is not self.color for slot in self.slots):
            raise ValueError("Every slot must belong to the hand's color")
        if self.selected_slot_id is not None:
            selected = self.slot(self.selected_slot_id)
            if selected.is_used:
                raise ValueError("A used slot cannot stay selected")

    @classmethod
    def of(cls, color: Color, piece_types: Sequence[PieceType]) -> "Hand":
        """Build a hand with explicit piece types, in slot order."""

        if len(piece_types) != SLOTS_PER_HAND:
            raise ValueError(f"A hand holds exactly {SLOTS_PER_HAND} pieces")
        slots = tuple(
            SupplySlot(id=slot_id, color=color, piece_type=piece_type)
            for slot_id, piece_type in zip(slot_ids_for(color), piece_types)
        )
        return cls(color=color, slots=slots)

    @classmethod
    def initial(cls, color: Color, source: Drawer) -> "Hand":
        return cls.of(color, [source.draw() for _ in range(SLOTS_PER_HAND)])

    def owns(self, slot_id: int) -> bool:
        return slot_id in slot_ids_for(self.color)

    def slot(self, slot_id: int) -> SupplySlot:
        if not self.owns(slot_id):
            raise IllegalSelectionError(
                f"Slot {slot_id} does not belong to the {self.color.value} hand"
            )
        return self.slots[slot_id - slot_ids_for(self.color).start]

    def select(self, slot_id: int) -> "Hand":
        slot = self.slot(slot_id)
        if slot.is_used:
            raise IllegalSelectionError(f"Slot {slot_id} has already been used")
        return replace(self, selected_slot_id=slot_id)

    def deselect(self) -> "Hand":
        if self.selected_slot_id is None:
            return self
        return replace(self, selected_slot_id=None)

    def has_selection(self) -> bool:
        return self.selected_slot_id is not None

    def selected_slot(self) -> Optional[SupplySlot]:
        if self.selected_slot_id is None:
            return None
        return self.slot(self.selected_slot_id)

    def use_selected(self, source: Drawer) -> "Hand":
        """Spend the selected piece and refill its slot straight away."""

        if self.selected_slot_id is None:
            raise IllegalSelectionError("No slot is selected")
        used_id = self.selected_slot_id
        refreshed = tuple(
            replace(slot, piece_type=source.draw(), is_used=False) if slot.id == used_id else slot
            for slot in self.slots
        )
        return Hand(color=self.color, slots=refreshed)

    def has_available_slots(self) -> bool:
        return any(not slot.is_used for slot in self.slots)

    def available_slots(self) -> Tuple[SupplySlot, ...]:
        return tuple(slot for slot in self.slots if not slot.is_used)

    def piece_types(self) -> Tuple[PieceType, ...]:
        return tuple(slot.piece_type for slot in self.slots)

    def has_type(self, piece_types: Iterable[PieceType]) -> bool:
        wanted = set(piece_types)
        return any(slot.piece_type in wanted for slot in self.available_slots())
