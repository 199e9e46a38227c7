from __future__ import annotations

from typing import Dict, Iterable, Sequence

from lent.constants import PALETTE


def color_for_index(index: int, palette: Sequence[str] = PALETTE) -> str:
    return palette[index % len(palette)]


def assign_colors(identities: Iterable[str], palette: Sequence[str] = PALETTE) -> Dict[str, str]:
    """Map contributor identities to palette colors in first-seen order.

    More identities than palette entries wrap around, so the eighth
    contributor shares the first one's color.
    """
    colors: Dict[str, str] = {}
    for identity in identities:
        if identity in colors:
            continue
        colors[identity] = color_for_index(len(colors), palette)
    return colors
