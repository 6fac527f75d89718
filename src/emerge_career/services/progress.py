"""Level/progress arithmetic applied when a goal is completed."""

GOAL_COMPLETION_INCREMENT = 10
MAX_PROGRESS = 100


def apply_progress(level: int, progress: int, increment: int) -> tuple[int, int]:
    """Add ``increment`` to ``progress``, rolling over into the next level.

    Returns:
        The new ``(level, progress)`` pair. Reaching 100 raises the level by
        one and keeps the remainder, so progress stays in 0-99.
    """
    total = (progress or 0) + increment
    if total >= MAX_PROGRESS:
        return (level or 1) + 1, total % MAX_PROGRESS
    return level or 1, total
