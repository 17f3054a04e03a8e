from __future__ import annotations

from typing import FrozenSet, Sequence

# foreground per cell on dark backgrounds: whites, champagne, antique gold
FG_ON_DARK = (
    "#FFFFFF", "#E8DCC8", "#FFF9F0", "#D4AF37", "#F5F0E8", "#FFFFFF", "#E8DCC8", "#FFFBF5", "#C9A227", "#F0EBE3",
    "#FFFFFF", "#D4AF37", "#E8DCC8", "#FFF9F0", "#C9A227", "#FFFFFF", "#E8DCC8", "#D4AF37", "#FFFBF5", "#F0EBE3",
    "#C9A227", "#FFFFFF", "#E8DCC8", "#FFF9F0", "#D4AF37", "#FFFFFF", "#C9A227", "#E8DCC8", "#FFFBF5", "#D4AF37",
    "#FFFFFF", "#E8DCC8", "#D4AF37", "#FFF9F0", "#C9A227", "#F0EBE3",
)

# foreground per cell on light backgrounds: black, navy, wine, charcoal, umber
FG_ON_LIGHT = (
    "#0A1628", "#1C3A5C", "#000000", "#722F37", "#1A1A1A", "#0A1628", "#8B0000", "#1C3A5C", "#2C1810", "#000000",
    "#722F37", "#0A1628", "#1C3A5C", "#000000", "#8B0000", "#1A1A1A", "#0A1628", "#722F37", "#1C3A5C", "#2C1810",
    "#000000", "#0A1628", "#722F37", "#1C3A5C", "#8B0000", "#1A1A1A", "#0A1628", "#000000", "#1C3A5C", "#722F37",
    "#0A1628", "#1C3A5C", "#000000", "#722F37", "#8B0000", "#1A1A1A",
)

BG_PALETTE = (
    "#000000", "#FFFBF5", "#0A1628", "#FFF8F0", "#0D0D0D", "#F8F4EF",
    "#1C3A5C", "#FFFFFF", "#0A0A0A", "#FFFDF8", "#0A1628", "#FAF6F1",
    "#1A1A1A", "#FFFFFF", "#1C3A5C", "#FFFBF5",
)

DARK_BACKGROUNDS: FrozenSet[str] = frozenset(
    {"#000000", "#0A0A0A", "#0D0D0D", "#0A1628", "#1C3A5C", "#1A1A1A"}
)


class BackgroundCycle:
    """Walks the background palette one step per trigger."""

    def __init__(
        self,
        palette: Sequence[str] = BG_PALETTE,
        dark: FrozenSet[str] = DARK_BACKGROUNDS,
        index: int = 0,
    ):
        if not palette:
            raise ValueError("background palette is empty")
        self.palette = tuple(palette)
        self.dark = frozenset(c.upper() for c in dark)
        self.index = index % len(self.palette)

    @property
    def color(self) -> str:
        return self.palette[self.index]

    @property
    def is_dark(self) -> bool:
        return self.color.upper() in self.dark

    def advance(self) -> str:
        self.index = (self.index + 1) % len(self.palette)
        return self.color

    def foreground(self, cell_index: int) -> str:
        table = FG_ON_DARK if self.is_dark else FG_ON_LIGHT
        return table[cell_index % len(table)]
