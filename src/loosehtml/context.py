class _Frame:
    __slots__ = ("below", "name")

    def __init__(self, name, below):
        self.name = name
        self.below = below


class TagContextStack:
    """Stack of the names of the elements enclosing the current position.

    Frames are immutable and shared between stacks, so ``duplicate`` is O(1)
    and pushes or pops on the copy never show up in the original.
    """

    __slots__ = ("_count", "_top")

    EMPTY_PATH = "*"

    def __init__(self, names=None):
        self._top = None
        self._count = 0
        for name in names or ():
            self.push(name)

    def push(self, name):
        self._top = _Frame(name, self._top)
        self._count += 1

    def pop(self):
        """Remove and return the top name, or None if the stack is empty."""
        top = self._top
        if top is None:
            return None
        self._top = top.below
        self._count -= 1
        return top.name

    def peek(self):
        if self._top is None:
            return None
        return self._top.name

    def duplicate(self):
        copy = TagContextStack()
        copy._top = self._top
        copy._count = self._count
        return copy

    def names(self):
        """Names from the outermost ancestor to the top of the stack."""
        names = []
        frame = self._top
        while frame is not None:
            names.append(frame.name)
            frame = frame.below
        names.reverse()
        return names

    def __len__(self):
        return self._count

    def __bool__(self):
        return self._top is not None

    def __str__(self):
        if self._top is None:
            return self.EMPTY_PATH
        return " > ".join(self.names())

    def __repr__(self):
        return f"TagContextStack({self})"
