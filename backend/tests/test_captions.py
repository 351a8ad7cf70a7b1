from services.captions import CAPTION_LINE_WIDTH, reflow_caption


def test_reflow_splits_fixed_width_lines() -> None:
    story = "The keeper climbed the stairs as the last light faded over the Pacific."
    lines = reflow_caption(story).split("\n")
    assert all(len(line) <= CAPTION_LINE_WIDTH for line in lines)
    assert "".join(lines) == story


def test_reflow_collapses_whitespace() -> None:
    assert reflow_caption("a  lighthouse\n at   dusk") == "a lighthouse at dusk"


def test_reflow_blank_is_none() -> None:
    assert reflow_caption(None) is None
    assert reflow_caption("   ") is None
