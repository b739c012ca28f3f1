from typing import Callable

MAX_ITERATIONS = 1_000_000


def fixpoint(step: Callable[[], int], max_iterations=MAX_ITERATIONS):
    """Call `step` until it reports no progress (returns 0).

    :return: the total progress made
    """

    def helper():
        total = 0
        iterations = 0
        while iterations < max_iterations:
            progress = step()
            if not progress:
                return total
            total += progress
            iterations += 1
        raise RuntimeError(f"Too many iterations for function {step}")

    return helper
