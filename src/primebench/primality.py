def is_prime(n: int) -> bool:
    """Checks whether a number is prime by trial division.

    Candidate divisors are of the form 6k-1 and 6k+1, starting at 5.

    Args:
        n (int): Number to check.

    Returns:
        True if the number is prime.
    """
    if n < 2:
        return False

    if n == 2 or n == 3:
        return True

    if n % 2 == 0 or n % 3 == 0:
        return False

    i = 5
    while i <= n // i:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6

    return True


def count_primes(numbers, predicate=is_prime) -> int:
    """Returns the number of items for which the predicate holds."""
    count = 0
    for n in numbers:
        if predicate(n):
            count += 1
    return count
