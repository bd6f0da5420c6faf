"""Grid layout for celebrant slots."""

from birthday_board.domain.render import LayoutSlot

MAX_PER_ROW = 4
FEW_CELEBRANTS_ORIGIN_Y = 400
MANY_CELEBRANTS_ORIGIN_Y = 320


def row_pitch(photo_size: int) -> int:
    """Vertical distance between row centers for a given photo size."""
    return photo_size + 100


def compute_layout(
    count: int,
    canvas_width: int,
    photo_size: int,
    per_row: int = MAX_PER_ROW,
) -> list[LayoutSlot]:
    """Return one slot per celebrant.

    Each row is spaced by how many celebrants it holds, so a short last row
    stays centered. A board with a single row sits lower than a multi-row
    board.
    """
    if count <= 0:
        return []
    origin_y = (
        FEW_CELEBRANTS_ORIGIN_Y if count <= per_row else MANY_CELEBRANTS_ORIGIN_Y
    )
    pitch = row_pitch(photo_size)
    slots: list[LayoutSlot] = []
    for index in range(count):
        row, column = divmod(index, per_row)
        in_row = min(per_row, count - row * per_row)
        spacing = canvas_width / (in_row + 1)
        slots.append(
            LayoutSlot(
                index=index,
                row=row,
                column=column,
                center_x=spacing * (column + 1),
                center_y=origin_y + row * pitch,
            )
        )
    return slots

