from lent.constants import PALETTE
from lent.palette import assign_colors, color_for_index


def test_palette_wraps_after_seven_entries():
    assert len(PALETTE) == 7
    assert color_for_index(7) == PALETTE[0]
    assert color_for_index(9) == PALETTE[2]


def test_assign_colors_in_first_seen_order():
    colors = assign_colors(["b", "a", "b", "c"])
    assert colors == {"b": PALETTE[0], "a": PALETTE[1], "c": PALETTE[2]}


def test_eighth_identity_reuses_first_color():
    identities = [f"user{idx}" for idx in range(8)]
    colors = assign_colors(identities)
    assert colors["user7"] == colors["user0"]
    assert len(set(colors[name] for name in identities[:7])) == 7


def test_custom_palette():
    assert assign_colors(["x", "y", "z"], palette=["red", "blue"]) == {"x": "red", "y": "blue", "z": "red"}
