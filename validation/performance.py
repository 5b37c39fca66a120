"""Performance sweep over operand sizes.

For each operation, times ``BigInteger.random(n).<op>(BigInteger.random(d))``
for every pair of sizes with ``d <= n``.  Iteration counts shrink as the
operands grow so each row takes roughly the same time.

Run directly::

    python -m validation.performance            # full sweep
    python -m validation.performance --quick    # up to 'large' only
"""
from __future__ import annotations

import sys
import time
from dataclasses import dataclass

sys.path.insert(0, ".")

from biginteger import BigInteger

SIZES = [
    ("tiddly", 5),
    ("small", 10),
    ("medium", 25),
    ("large", 100),
    ("supersize", 1000),
]

# operation name -> iteration scale
OPERATIONS = [
    ("add", 1000),
    ("subtract", 1000),
    ("multiply", 100),
    ("divide", 100),
]

FACTOR = 100


@dataclass
class Timing:
    operation: str
    numerator: str
    denominator: str
    iterations: int
    seconds: float

    def __str__(self) -> str:
        ms = self.seconds * 1000
        return (
            f"{ms:>10,.1f} ms for {self.iterations:>7,} iterations "
            f"for sizes: {self.numerator}/{self.denominator}"
        )


def time_operation(operation: str, scale: int, sizes: list[tuple[str, int]]) -> list[Timing]:
    out: list[Timing] = []
    for i, (num_name, num_digits) in enumerate(sizes):
        for den_name, den_digits in sizes[: i + 1]:
            iterations = max(1, FACTOR * scale // num_digits)
            start = time.perf_counter()
            for _ in range(iterations):
                left = BigInteger.random(num_digits)
                getattr(left, operation)(BigInteger.random(den_digits))
            out.append(Timing(
                operation=operation,
                numerator=num_name,
                denominator=den_name,
                iterations=iterations,
                seconds=time.perf_counter() - start,
            ))
    return out


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    sizes = SIZES[:4] if "--quick" in argv else SIZES
    for operation, scale in OPERATIONS:
        print(f"TESTING: {operation}")
        for timing in time_operation(operation, scale, sizes):
            print(f"  {timing}")


if __name__ == "__main__":
    main()
