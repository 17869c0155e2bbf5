from datetime import datetime, timezone

REWARD_RATE = 100

MINUTE = 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7

MAY_1 = int(datetime(2024, 5, 1, tzinfo=timezone.utc).timestamp())

USER_STAKE_BALANCE = 1_000_000
REWARD_ESCROW_FUNDING = 10**15
