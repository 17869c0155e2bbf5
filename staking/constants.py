MAX_UINT64 = 18446744073709551615
MAX_UINT128 = 340282366920938463463374607431768211455

# Scale of the reward-per-unit accumulator.
PRECISION = 10_000_000_000

DEFAULT_REWARD_RATE = 100

ADDRESS_LENGTH = 32
UINT64_LENGTH = 8

POOL_LEDGER_SIZE = ADDRESS_LENGTH * 3 + UINT64_LENGTH * 4
USER_LEDGER_SIZE = UINT64_LENGTH * 3

STAKING_POOL_SEED = b"staking-pool"
STAKING_TOKEN_SEED = b"staking-token"
REWARDS_TOKEN_SEED = b"rewards-token"
USER_STATE_SEED = b"user-state"

DERIVED_ADDRESS_PREFIX = b"ProgramDerivedAddress"
MAX_BUMP_SEED = 255

INITIALIZE_TAG = 0
STAKE_TAG = 1
UNSTAKE_TAG = 2
CLAIM_TAG = 3
