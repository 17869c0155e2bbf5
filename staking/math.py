from staking.constants import MAX_UINT64, MAX_UINT128
from staking.exceptions import ArithmeticFault


def check_uint64(value):
    if value < 0 or value > MAX_UINT64:
        raise ArithmeticFault(f"{value} does not fit in uint64")
    return value


def check_uint128(value):
    if value < 0 or value > MAX_UINT128:
        raise ArithmeticFault(f"{value} does not fit in uint128")
    return value


def checked_add(a, b):
    return check_uint64(a + b)


def checked_sub(a, b):
    if b > a:
        raise ArithmeticFault(f"{a} - {b} underflows")
    return a - b


def checked_mul(a, b):
    return check_uint64(a * b)


def wide_mul(a, b):
    # Intermediate products may use 128 bits, results are narrowed back to 64.
    return check_uint128(a * b)


def checked_div(a, b):
    if b == 0:
        raise ArithmeticFault("division by zero")
    return a // b
