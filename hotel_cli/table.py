"""Text table rendering for query results."""

import sys


def cell_text(value):
    if value is None:
        return ""
    return str(value)


def _separator(widths):
    return "".join("-" * (width + 3) for width in widths) + "--\n"


def render(column_labels, rows):
    """Render labelled rows as a boxed text table.

    Every column is ``len(label) + 5`` characters wide and values are
    right-aligned. A cell longer than ``len(label) + 5`` is cut to
    ``len(label) + 2`` characters followed by ``"..."``. The table ends with
    a ``"  -- Rows: N"`` footer and a blank line.

    Rows with fewer cells than there are labels print short; extra cells are
    ignored.
    """
    labels = [cell_text(label) for label in column_labels]
    widths = [len(label) + 5 for label in labels]

    shown = []
    for label, width in zip(labels, widths):
        # unreachable while width is derived from the label
        if len(label) > width:
            label = label[:width]
        shown.append(label)

    hline = _separator(widths)
    parts = [hline]

    for label, width in zip(shown, widths):
        parts.append(f"| {label:>{width}} ")
    parts.append("|\n")
    parts.append(hline)

    count = 0
    for row in rows:
        count += 1
        for label, width, value in zip(labels, widths, row):
            text = cell_text(value)
            if len(text) > len(label) + 5:
                text = text[:len(label) + 2] + "..."
            parts.append(f"| {text:>{width}} ")
        parts.append("|\n")

    parts.append(hline)
    parts.append(f"  -- Rows: {count}\n\n")
    return "".join(parts)


def print_table(column_labels, rows, write=None):
    """Write a blank line and the rendered table to ``write`` (stdout by default)."""
    if write is None:
        write = sys.stdout.write
    write("\n" + render(column_labels, rows))
