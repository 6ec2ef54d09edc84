# arena.py
"""""
Bump allocator that owns every AST node of one parse generation.

Nodes are never freed one by one: `reset()` ends the whole generation at once,
and every node produced before it is considered dead. Each consuming feature
(calculator, plot workspace) keeps its own Arena.
"""""

ARENA_DEFAULT_CAP = 64 * 1024  # 64 KB
ALIGNMENT = 8


def align(size):
    """Round size up to the next multiple of ALIGNMENT."""
    return (size + ALIGNMENT - 1) & ~(ALIGNMENT - 1)


class Arena:
    """Fixed-capacity byte budget handing out 8-aligned offsets."""

    def __init__(self, capacity=ARENA_DEFAULT_CAP):
        if capacity < 0:
            raise ValueError("Arena capacity must not be negative")
        self.capacity = capacity
        self.used = 0
        self.generation = 0

    def alloc(self, size):
        """Reserve size bytes; return the block offset or None when full.

        The arena never grows, a failed allocation leaves it untouched.
        """
        aligned = align(size)
        if self.used + aligned > self.capacity:
            return None
        offset = self.used
        self.used += aligned
        return offset

    def reset(self):
        """Drop every allocation; nodes from the old generation must not be reused."""
        self.used = 0
        self.generation += 1

    def destroy(self):
        self.capacity = 0
        self.used = 0
        self.generation += 1

    @property
    def remaining(self):
        return self.capacity - self.used

    def __repr__(self):
        return f"Arena(used={self.used}, capacity={self.capacity}, generation={self.generation})"
