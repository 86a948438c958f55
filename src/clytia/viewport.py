"""Scroll window for option lists taller than the terminal."""


def calculate_visible_range(
    cursor: int,
    total_items: int,
    max_visible: int,
    scroll_offset: int,
) -> tuple[int, int, int]:
    """Pick which option rows to show so the cursor row stays on screen.

    The window only moves when the cursor leaves it, so scrolling feels
    stable while the cursor moves inside the visible rows. The window never
    starts past the point where the last row would leave empty space below.

    Args:
        cursor: Index of the highlighted option
        total_items: Number of options in the menu
        max_visible: Option rows that fit (at least one is always shown)
        scroll_offset: Index of the first row shown on the previous render

    Returns:
        (scroll_offset, start, end) where rows ``start:end`` are drawn and
        ``scroll_offset`` is kept for the next render
    """
    if total_items == 0:
        return 0, 0, 0

    rows = max(1, max_visible)
    cursor = max(0, min(cursor, total_items - 1))

    if cursor < scroll_offset:
        scroll_offset = cursor
    elif cursor >= scroll_offset + rows:
        scroll_offset = cursor - rows + 1
    scroll_offset = max(0, min(scroll_offset, total_items - rows))

    return scroll_offset, scroll_offset, min(scroll_offset + rows, total_items)


def format_scroll_indicator(hidden_above: int, hidden_below: int) -> tuple[str | None, str | None]:
    """Hint lines for options scrolled out of view, None where nothing is hidden."""
    above = f"  ↑ {hidden_above} more" if hidden_above > 0 else None
    below = f"  ↓ {hidden_below} more" if hidden_below > 0 else None
    return above, below
