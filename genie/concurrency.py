from concurrent.futures import ThreadPoolExecutor
from typing import Callable


def fan_out(*calls: Callable):
    """
    Run independent blocking calls concurrently and return their results in order.
    The first failure (in argument order) is re-raised once every call has finished.
    """
    if not calls:
        return []

    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = [executor.submit(call) for call in calls]

    return [future.result() for future in futures]
