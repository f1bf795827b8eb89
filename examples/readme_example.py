import datetime
from dataclasses import dataclass, field

from deepclone import Kind, anything, copiers, must_anything, opaque


@opaque
@dataclass(frozen=True)
class Money:
    """Immutable value: copies share the instance."""

    amount: int
    currency: str


@dataclass
class Account:
    owner: str
    balance: Money
    opened: datetime.date
    history: list[Money] = field(default_factory=list)
    parent: "Account | None" = None


def main() -> None:
    root = Account("root", Money(100, "EUR"), datetime.date(2016, 1, 1))
    child = Account("child", Money(5, "EUR"), datetime.date(2017, 1, 1), parent=root)
    root.history.append(child.balance)
    root.parent = root  # cycles are fine

    clone = must_anything([root, child])
    print(f"root copied: {clone[0] is not root}")
    print(f"cycle kept inside copy: {clone[0].parent is clone[0]}")
    print(f"alias kept: {clone[1].parent is clone[0]}")
    print(f"Money shared: {clone[0].balance is root.balance}")

    value, error = anything({"callback": main})
    print(f"functions rejected: value={value}, error={error}")

    # Opt in to copying functions by reference
    registry = copiers.copy()
    registry[Kind.FUNC] = lambda fn, visited: fn
    print(must_anything({"callback": main}, registry=registry))


if __name__ == "__main__":
    main()
