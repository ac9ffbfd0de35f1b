"""Result of a lenient domain mutation.

Line-item and cart operations never raise on bad input; they either apply
the change or leave state untouched. The returned ``Outcome`` says which
happened, and is truthy only when the change was applied.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Outcome:
    applied: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.applied


APPLIED = Outcome(applied=True)


def rejected(reason: str) -> Outcome:
    return Outcome(applied=False, reason=reason)
