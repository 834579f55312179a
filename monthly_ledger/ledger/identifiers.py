"""Entry identifiers: a counter owned by the store."""


class IdentifierGenerator:
    """
    Monotonically increasing integer ids.

    After loading stored data, call `advance_past()` with the largest id
    present so new ids never collide with old ones.
    """

    def __init__(self, start: int = 1):
        self._next = max(1, start)

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def advance_past(self, value: int) -> None:
        if value >= self._next:
            self._next = value + 1

    def peek(self) -> int:
        return self._next
