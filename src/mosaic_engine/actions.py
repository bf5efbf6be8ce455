from dataclasses import dataclass

from .enums import Direction, InputKind


@dataclass(frozen=True)
class UserInput:
    kind: InputKind
    direction: Direction | None = None

    @classmethod
    def next(cls) -> "UserInput":
        return cls(InputKind.DIRECTION, Direction.NEXT)

    @classmethod
    def prev(cls) -> "UserInput":
        return cls(InputKind.DIRECTION, Direction.PREV)

    @classmethod
    def confirm(cls) -> "UserInput":
        return cls(InputKind.CONFIRM)

    @classmethod
    def back(cls) -> "UserInput":
        return cls(InputKind.BACK)

    @classmethod
    def exit(cls) -> "UserInput":
        return cls(InputKind.EXIT)

    @classmethod
    def noop(cls) -> "UserInput":
        return cls(InputKind.NOOP)
