"""Line extractor: turns fetched bytes into complete lines and a new offset."""

NEWLINE = b"\n"


def extract_lines(buffer: bytes, start_offset: int) -> tuple[list[str], int]:
    """Split ``buffer`` into newline-terminated lines.

    ``buffer`` must begin exactly at ``start_offset`` in the remote file.
    Each complete line is returned without its newline and counted into the
    returned offset. Trailing bytes with no newline are left unconsumed so
    the next poll fetches them again along with the rest of the line.
    """
    lines: list[str] = []
    offset = start_offset
    pos = 0

    nl_index = buffer.find(NEWLINE, pos)
    while nl_index != -1:
        lines.append(buffer[pos:nl_index].decode("utf-8", errors="replace"))
        offset += nl_index - pos + len(NEWLINE)
        pos = nl_index + len(NEWLINE)
        nl_index = buffer.find(NEWLINE, pos)

    return lines, offset
