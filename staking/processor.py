import logging

from staking.accrual import earned, settle
from staking.clock import Clock
from staking.constants import DEFAULT_REWARD_RATE, POOL_LEDGER_SIZE, USER_LEDGER_SIZE
from staking.derivation import AddressDerivation
from staking.events import (
    claim_event,
    initialize_event,
    stake_event,
    state_event,
    unstake_event,
    user_state_event,
)
from staking.exceptions import (
    AddressMismatch,
    AssetMismatch,
    EscrowOwnershipMismatch,
    InsufficientBalance,
    InvalidInstruction,
    RecordNotInitialized,
    ResetNotAllowed,
    Unauthorized,
    ZeroAmount,
)
from staking.instructions import Claim, Initialize, Stake, Unstake, decode_instruction
from staking.math import check_uint64, checked_add, checked_sub
from staking.signer import Signer
from staking.state import PoolLedger, RecordState, UserLedger


logger = logging.getLogger(__name__)


class StakeController():
    """
    Initialize, stake, unstake and claim against the records in an AccountStore.

    Each operation settles rewards as of `now`, runs every check, moves tokens
    and only then writes the records back. Anything raised before the write
    leaves the store and the token ledger untouched.
    """

    def __init__(self, program_id, store, token_ledger, default_reward_rate=DEFAULT_REWARD_RATE) -> None:
        self.program_id = program_id
        self.store = store
        self.token_ledger = token_ledger
        self.derivation = AddressDerivation(program_id)
        self.default_reward_rate = default_reward_rate
        self.logs = []
        self.last_logs = []

    def _commit_logs(self, logs):
        self.last_logs = logs
        self.logs.extend(logs)

    def _check_address(self, name, passed, computed):
        if passed is not None and passed != computed:
            logger.warning("%s passed: %s", name, passed)
            logger.warning("%s computed: %s", name, computed)
            raise AddressMismatch(name, passed, computed)
        return computed

    def _check_signer(self, signer, user_address):
        if signer is None or signer.address != user_address:
            raise Unauthorized(f"{user_address} must sign this operation")

    def _check_escrow(self, escrow_address, asset_id, authority):
        escrow = self.token_ledger.get_account(escrow_address)
        if escrow.owner != authority.address:
            logger.warning("Escrow %s must have the derived authority as owner. Current owner %s, authority %s", escrow_address, escrow.owner, authority.address)
            raise EscrowOwnershipMismatch(escrow_address, escrow.owner, authority.address)
        if escrow.asset_id != asset_id:
            raise AssetMismatch(f"Escrow {escrow_address} holds {escrow.asset_id}, expected {asset_id}")
        return escrow

    def get_pool(self, pool_address):
        if self.store.get_state(pool_address) != RecordState.ACTIVE:
            raise RecordNotInitialized(pool_address)
        return PoolLedger.from_bytes(self.store.read(pool_address))

    def _check_owner(self, name, address):
        owner = self.store.get_owner(address)
        if owner != self.program_id:
            raise AddressMismatch(name, owner, self.program_id)

    def get_user_state(self, user_state_address):
        if self.store.get_state(user_state_address) != RecordState.ACTIVE:
            raise RecordNotInitialized(user_state_address)
        self._check_owner("Staker owner", user_state_address)
        return UserLedger.from_bytes(self.store.read(user_state_address))

    def _load_pool(self, pool_address):
        pool = self.get_pool(pool_address)
        self._check_owner("Staking pool owner", pool_address)
        pool_pda, _ = self.derivation.find_pool_address(pool.stake_asset_id, pool.reward_asset_id)
        self._check_address("Staking pool pda", pool_address, pool_pda)
        return pool

    def pending_reward(self, pool_address, user_address, now):
        pool = self._load_pool(pool_address)
        user_state_address, _ = self.derivation.find_user_state_address(pool_address, user_address)
        return earned(pool, self.get_user_state(user_state_address), now)

    def _state_logs(self, pool, user_address=None, user=None):
        logs = [state_event.encode([pool.last_update_time, pool.reward_rate, pool.reward_per_unit_stored, pool.total_staked])]
        if user is not None:
            logs.append(user_state_event.encode([user_address, user.balance, user.reward_per_unit_paid, user.accrued_reward]))
        return logs

    def initialize(self, signer, stake_asset_id, reward_asset_id, now, reward_rate=None, pool_address=None, stake_escrow_address=None, reward_escrow_address=None):
        if signer is None:
            raise Unauthorized("Initialize must be signed by the admin")

        reward_rate = check_uint64(self.default_reward_rate if reward_rate is None else reward_rate)

        pool_pda, _ = self.derivation.find_pool_address(stake_asset_id, reward_asset_id)
        pool_address = self._check_address("Staking pool pda", pool_address, pool_pda)
        stake_authority = self.derivation.stake_escrow_authority(stake_asset_id)
        stake_escrow_address = self._check_address("Staking token escrow", stake_escrow_address, stake_authority.address)
        reward_authority = self.derivation.reward_escrow_authority(reward_asset_id)
        reward_escrow_address = self._check_address("Rewards token escrow", reward_escrow_address, reward_authority.address)

        is_reset = self.store.get_state(pool_address) == RecordState.ACTIVE
        if is_reset:
            current_pool = self._load_pool(pool_address)
            if current_pool.admin != signer.address:
                raise Unauthorized(f"Only the pool admin {current_pool.admin} can reset the pool")
            if current_pool.total_staked:
                raise ResetNotAllowed(f"Pool {pool_address} still holds {current_pool.total_staked} staked units")
        elif self.store.exists(pool_address):
            self._check_owner("Staking pool owner", pool_address)

        escrows = [
            (stake_escrow_address, stake_asset_id, stake_authority),
            (reward_escrow_address, reward_asset_id, reward_authority),
        ]
        missing_escrows = []
        for escrow_address, asset_id, authority in escrows:
            if self.token_ledger.account_exists(escrow_address):
                self._check_escrow(escrow_address, asset_id, authority)
            else:
                missing_escrows.append((escrow_address, asset_id, authority))

        pool = PoolLedger(
            admin=signer.address,
            stake_asset_id=stake_asset_id,
            reward_asset_id=reward_asset_id,
            total_staked=0,
            reward_per_unit_stored=0,
            last_update_time=check_uint64(now),
            reward_rate=reward_rate,
        )
        data = pool.to_bytes()
        logs = [initialize_event.encode([signer.address, stake_asset_id, reward_asset_id, reward_rate, is_reset])] + self._state_logs(pool)

        for escrow_address, asset_id, authority in missing_escrows:
            self.token_ledger.create_account(escrow_address, asset_id, authority.address)
        if not self.store.exists(pool_address):
            self.store.create(pool_address, POOL_LEDGER_SIZE, self.program_id)
        self.store.write(pool_address, data)

        if is_reset:
            logger.info("Reset staking pool %s", pool_address)
        else:
            logger.info("Initialized staking pool %s: admin %s, staking asset %s, reward asset %s, reward rate %d, last update %d", pool_address, signer.address, stake_asset_id, reward_asset_id, reward_rate, now)

        self._commit_logs(logs)
        return pool

    def stake(self, signer, user_address, pool_address, source, amount, now, user_state_address=None, stake_escrow_address=None):
        check_uint64(amount)
        if not amount:
            logger.debug("Stake rejected: amount = 0")
            raise ZeroAmount("Stake amount must be greater than zero")
        self._check_signer(signer, user_address)

        pool = self._load_pool(pool_address)
        user_state_pda, _ = self.derivation.find_user_state_address(pool_address, user_address)
        user_state_address = self._check_address("Staker pda", user_state_address, user_state_pda)
        stake_authority = self.derivation.stake_escrow_authority(pool.stake_asset_id)
        stake_escrow_address = self._check_address("Staking token escrow", stake_escrow_address, stake_authority.address)

        is_new_user = self.store.get_state(user_state_address) != RecordState.ACTIVE
        if is_new_user:
            user = UserLedger()
        else:
            user = self.get_user_state(user_state_address)

        pool, user = settle(pool, user, now)
        self._check_escrow(stake_escrow_address, pool.stake_asset_id, stake_authority)
        user.balance = checked_add(user.balance, amount)
        pool.total_staked = checked_add(pool.total_staked, amount)
        pool_data, user_data = pool.to_bytes(), user.to_bytes()
        logs = self._state_logs(pool, user_address, user) + [stake_event.encode([user_address, amount])]

        self.token_ledger.transfer_in(source, stake_escrow_address, amount, signer)

        if not self.store.exists(user_state_address):
            self.store.create(user_state_address, USER_LEDGER_SIZE, self.program_id)
        self.store.write(user_state_address, user_data)
        self.store.write(pool_address, pool_data)

        logger.info("STAKE From: %s Amount: %d", user_address, amount)
        self._commit_logs(logs)
        return pool, user

    def unstake(self, signer, user_address, pool_address, destination, amount, now, user_state_address=None, stake_escrow_address=None):
        self._check_signer(signer, user_address)
        check_uint64(amount)
        if not amount:
            logger.debug("Unstake rejected: amount = 0")
            raise ZeroAmount("Unstake amount must be greater than zero")

        pool = self._load_pool(pool_address)
        user_state_pda, _ = self.derivation.find_user_state_address(pool_address, user_address)
        user_state_address = self._check_address("Staker pda", user_state_address, user_state_pda)
        stake_authority = self.derivation.stake_escrow_authority(pool.stake_asset_id)
        stake_escrow_address = self._check_address("Staking token escrow", stake_escrow_address, stake_authority.address)
        user = self.get_user_state(user_state_address)

        pool, user = settle(pool, user, now)
        if amount > user.balance:
            logger.warning("Cannot unstake more than staked. Staked: %d, trying to withdraw: %d", user.balance, amount)
            raise InsufficientBalance(user.balance, amount)
        self._check_escrow(stake_escrow_address, pool.stake_asset_id, stake_authority)
        user.balance = checked_sub(user.balance, amount)
        pool.total_staked = checked_sub(pool.total_staked, amount)
        pool_data, user_data = pool.to_bytes(), user.to_bytes()
        logs = self._state_logs(pool, user_address, user) + [unstake_event.encode([user_address, amount])]

        self.token_ledger.transfer_out(stake_escrow_address, destination, amount, stake_authority)

        self.store.write(user_state_address, user_data)
        self.store.write(pool_address, pool_data)

        logger.info("UNSTAKE Transfer: %d From: %s To: %s", amount, stake_escrow_address, destination)
        self._commit_logs(logs)
        return pool, user

    def claim(self, signer, user_address, pool_address, destination, now, user_state_address=None, reward_escrow_address=None):
        self._check_signer(signer, user_address)

        pool = self._load_pool(pool_address)
        user_state_pda, _ = self.derivation.find_user_state_address(pool_address, user_address)
        user_state_address = self._check_address("Staker pda", user_state_address, user_state_pda)
        reward_authority = self.derivation.reward_escrow_authority(pool.reward_asset_id)
        reward_escrow_address = self._check_address("Rewards token escrow", reward_escrow_address, reward_authority.address)
        user = self.get_user_state(user_state_address)

        pool, user = settle(pool, user, now)
        paid_amount = user.accrued_reward
        if paid_amount:
            self._check_escrow(reward_escrow_address, pool.reward_asset_id, reward_authority)
            user.accrued_reward = 0
        pool_data, user_data = pool.to_bytes(), user.to_bytes()
        logs = self._state_logs(pool, user_address, user)
        if paid_amount:
            logs.append(claim_event.encode([user_address, paid_amount]))
            self.token_ledger.transfer_out(reward_escrow_address, destination, paid_amount, reward_authority)

        self.store.write(user_state_address, user_data)
        self.store.write(pool_address, pool_data)

        if paid_amount:
            logger.info("CLAIM Transfer: %d From: %s To: %s", paid_amount, reward_escrow_address, destination)
        self._commit_logs(logs)
        return pool, user, paid_amount


class Processor():
    """
    Decodes an instruction, authenticates the first account and dispatches to
    the controller with a single reading of the clock.

    Account lists:
        Initialize: authority, staking pool, staking token escrow, rewards token escrow
        Stake: user, user staking token account, staking token escrow, user state, staking pool
        Unstake: user, user staking token account, user state, staking pool, staking token escrow
        Claim: user, user rewards token account, user state, staking pool, rewards token escrow
    """

    account_counts = {
        Initialize: 4,
        Stake: 5,
        Unstake: 5,
        Claim: 5,
    }

    def __init__(self, controller, clock=None) -> None:
        self.controller = controller
        self.clock = clock or Clock()

    def process(self, instruction_data: bytes, accounts: list, signature=None):
        instruction = decode_instruction(instruction_data)

        expected_count = self.account_counts[type(instruction)]
        if len(accounts) != expected_count:
            raise InvalidInstruction(f"{type(instruction).__name__} takes {expected_count} accounts, got {len(accounts)}")

        signer = None
        if signature is not None:
            signer = Signer.from_signature(accounts[0], instruction_data, signature)

        now = self.clock.now()

        if isinstance(instruction, Initialize):
            _, pool_address, stake_escrow_address, reward_escrow_address = accounts
            return self.controller.initialize(
                signer,
                instruction.stake_asset_id,
                instruction.reward_asset_id,
                now,
                reward_rate=instruction.reward_rate,
                pool_address=pool_address,
                stake_escrow_address=stake_escrow_address,
                reward_escrow_address=reward_escrow_address,
            )
        elif isinstance(instruction, Stake):
            user_address, source, stake_escrow_address, user_state_address, pool_address = accounts
            return self.controller.stake(
                signer,
                user_address,
                pool_address,
                source,
                instruction.amount,
                now,
                user_state_address=user_state_address,
                stake_escrow_address=stake_escrow_address,
            )
        elif isinstance(instruction, Unstake):
            user_address, destination, user_state_address, pool_address, stake_escrow_address = accounts
            return self.controller.unstake(
                signer,
                user_address,
                pool_address,
                destination,
                instruction.amount,
                now,
                user_state_address=user_state_address,
                stake_escrow_address=stake_escrow_address,
            )
        else:
            user_address, destination, user_state_address, pool_address, reward_escrow_address = accounts
            return self.controller.claim(
                signer,
                user_address,
                pool_address,
                destination,
                now,
                user_state_address=user_state_address,
                reward_escrow_address=reward_escrow_address,
            )
