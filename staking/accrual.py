from dataclasses import replace

from staking.constants import PRECISION
from staking.exceptions import ArithmeticFault
from staking.math import check_uint64, checked_add, checked_div, checked_sub, wide_mul


def reward_per_unit(pool, now):
    """
    Accumulated rewards per staked unit as of `now`, scaled by PRECISION.

    While nothing is staked the stored value is returned as is and the
    elapsed time is not distributed to anyone.
    """
    if now < pool.last_update_time:
        raise ArithmeticFault(f"Current time {now} is before the last update time {pool.last_update_time}")

    if not pool.total_staked:
        return pool.reward_per_unit_stored

    time_delta = now - pool.last_update_time
    emitted = wide_mul(wide_mul(pool.reward_rate, time_delta), PRECISION)
    reward_per_unit_delta = check_uint64(checked_div(emitted, pool.total_staked))
    return checked_add(pool.reward_per_unit_stored, reward_per_unit_delta)


def earned(pool, user, now):
    if not user.balance:
        return user.accrued_reward

    reward_per_unit_delta = checked_sub(reward_per_unit(pool, now), user.reward_per_unit_paid)
    rewards_delta = check_uint64(checked_div(wide_mul(user.balance, reward_per_unit_delta), PRECISION))
    return checked_add(user.accrued_reward, rewards_delta)


def settle(pool, user, now):
    """
    Brings the pool and the user up to date as of `now`.

    Returns new records; the given ones are left untouched so a caller can
    discard the result when a later check fails.
    """
    new_reward_per_unit = reward_per_unit(pool, now)
    pool = replace(pool, reward_per_unit_stored=new_reward_per_unit, last_update_time=now)
    user = replace(
        user,
        accrued_reward=earned(pool, user, now),
        reward_per_unit_paid=new_reward_per_unit,
    )
    return pool, user
